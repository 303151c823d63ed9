"""Configuration loading."""

from doctor_slides.config.loader import ConfigurationError, load_yaml_file, merge_with_env
from doctor_slides.config.settings import (
    AppSettings,
    GoogleSettings,
    LLMSettings,
    LoggingSettings,
    create_settings,
)

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "GoogleSettings",
    "LLMSettings",
    "LoggingSettings",
    "create_settings",
    "load_yaml_file",
    "merge_with_env",
]
