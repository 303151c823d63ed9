"""
Exception hierarchy for the document-to-deck pipeline.

Every upstream failure is wrapped in one of these types and propagated to the
single handler in the CLI, which decides the exit status. Nothing here is
retried.
"""

from typing import Any, Optional


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AppException):
    """Raised when configuration loading or validation fails."""


class AuthenticationError(AppException):
    """Raised when Google OAuth credentials are missing or unusable."""


class FetchError(AppException):
    """Raised when the source document cannot be read."""


class GenerationError(AppException):
    """Raised when the text generation service is unreachable or errors."""


class ParseError(AppException):
    """Raised when generated text cannot be turned into an outline."""


class EmptyOutlineError(ParseError):
    """No slide could be recovered from the generated text.

    Carries the raw text so the caller can print it for diagnosis.
    """

    def __init__(self, raw_text: str):
        super().__init__(
            "No slides could be recovered from the generated outline",
            details={"raw_length": len(raw_text)},
        )
        self.raw_text = raw_text


class SynthesisError(AppException):
    """Raised when the presentation service rejects a request."""


def format_exception_for_logging(exc: Exception) -> dict[str, Any]:
    """
    Flatten an exception into fields suitable for ``extra=`` logging.

    Args:
        exc: Exception to describe

    Returns:
        Dictionary with the error type, message and any attached details
    """
    info: dict[str, Any] = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }
    if isinstance(exc, AppException) and exc.details:
        info["error_details"] = exc.details
    if exc.__cause__ is not None:
        info["caused_by"] = f"{type(exc.__cause__).__name__}: {exc.__cause__}"
    return info
