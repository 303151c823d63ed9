"""
Application settings management using Pydantic.

Secrets come from environment variables (or a ``.env`` file); everything
else may also be supplied by an optional YAML file. The settings record is
built once at process start and handed to each component explicitly.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doctor_slides.config.loader import ConfigurationError, load_yaml_file, merge_with_env


class LLMSettings(BaseModel):
    """Text generation settings."""

    model: str = "gpt-3.5-turbo"
    temperature: float = 1.0
    base_url: Optional[str] = None
    timeout: float = 120.0

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v


class GoogleSettings(BaseModel):
    """Google OAuth client and token file locations."""

    credentials_path: Path = Path("credentials.json")
    token_path: Path = Path("token.json")
    redirect_uri: str = "http://localhost"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "text"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        valid_formats = ["json", "text"]
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Combines environment variables (for secrets) with YAML configuration
    (for everything else).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Secrets from environment variables
    open_ai_key: str = Field(..., description="OpenAI API key")
    # Accepted so existing .env files that set GOOGLE_API_KEY keep loading;
    # all Google calls authenticate through OAuth.
    google_api_key: str = Field(
        "[NO API KEY]",
        description="Legacy Google API key, accepted for .env compatibility and not used",
    )

    debug: bool = False
    closing_label: str = "The End"

    llm: LLMSettings = Field(default_factory=LLMSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("open_ai_key")
    @classmethod
    def validate_open_ai_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("OPEN_AI_KEY must not be empty")
        return v.strip()

    @property
    def effective_log_level(self) -> str:
        """DEBUG when the debug flag is set, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


def create_settings(config_path: Optional[Path] = None, **overrides: Any) -> AppSettings:
    """
    Create application settings from an optional YAML file and the environment.

    Args:
        config_path: Optional YAML file with ``llm``, ``google``, ``logging``
            sections and top-level keys
        **overrides: Values that win over both file and environment
            (e.g. ``debug=True`` from the command line)

    Returns:
        AppSettings instance with all configuration loaded

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    config: dict[str, Any] = {}
    if config_path is not None:
        config = load_yaml_file(Path(config_path))
    config = merge_with_env(config)
    config.update(overrides)

    try:
        return AppSettings(**config)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to create settings: {e}") from e
