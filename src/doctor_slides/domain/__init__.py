"""Domain value types."""

from .outline import PLACEHOLDER_TITLE, Outline, SlideRecord

__all__ = ["Outline", "PLACEHOLDER_TITLE", "SlideRecord"]
