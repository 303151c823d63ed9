"""
Configuration loader for YAML files.

This module handles loading an optional YAML configuration file and
applying environment variable overrides on top of it.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from doctor_slides.utils.error_handling import ConfigurationError

__all__ = ["ConfigurationError", "load_yaml_file", "merge_with_env"]

# Environment variable -> (section, key) in the merged configuration.
# A section of None means a top-level key.
ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FORMAT": ("logging", "format"),
    "LLM_MODEL": ("llm", "model"),
    "OPENAI_BASE_URL": ("llm", "base_url"),
    "GOOGLE_CREDENTIALS_PATH": ("google", "credentials_path"),
    "GOOGLE_TOKEN_PATH": ("google", "token_path"),
    "DEBUG": (None, "debug"),
}


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """
    Load and parse a YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML content as a dictionary

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)

        if content is None:
            raise ConfigurationError(f"YAML file is empty: {file_path}")

        if not isinstance(content, dict):
            raise ConfigurationError(
                f"YAML file must contain a dictionary at root level: {file_path}"
            )

        return content

    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e


def merge_with_env(config: dict[str, Any]) -> dict[str, Any]:
    """
    Merge configuration with environment variable overrides.

    Environment variables win over values from the YAML file:
    - LOG_LEVEL -> logging.level
    - LOG_FORMAT -> logging.format
    - LLM_MODEL -> llm.model
    - OPENAI_BASE_URL -> llm.base_url
    - GOOGLE_CREDENTIALS_PATH / GOOGLE_TOKEN_PATH -> google.*
    - DEBUG -> debug

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment overrides applied
    """
    merged = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in config.items()
    }

    for env_name, (section, key) in ENV_OVERRIDES.items():
        if (value := os.getenv(env_name)) is None:
            continue
        if section is None:
            merged[key] = value
        else:
            merged.setdefault(section, {})[key] = value

    return merged
