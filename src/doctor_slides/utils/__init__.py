"""Utility modules."""

from doctor_slides.utils.error_handling import (
    AppException,
    AuthenticationError,
    ConfigurationError,
    EmptyOutlineError,
    FetchError,
    GenerationError,
    ParseError,
    SynthesisError,
    format_exception_for_logging,
)
from doctor_slides.utils.logging_config import setup_logging

__all__ = [
    # Error handling
    "AppException",
    "AuthenticationError",
    "ConfigurationError",
    "EmptyOutlineError",
    "FetchError",
    "GenerationError",
    "ParseError",
    "SynthesisError",
    "format_exception_for_logging",
    # Logging
    "setup_logging",
]
