"""Outline value types produced by the parser and consumed by the deck synthesizer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

PLACEHOLDER_TITLE = "[UNNAMED]"


@dataclass(frozen=True)
class SlideRecord:
    """One slide of an outline.

    Attributes:
        title: Slide title, ``PLACEHOLDER_TITLE`` when the outline gave none
        bullets: Bullet points in presentation order (may be empty)
        image_ref: Optional image URL suggested for the slide
    """

    title: str = PLACEHOLDER_TITLE
    bullets: Tuple[str, ...] = ()
    image_ref: Optional[str] = None

    def body_text(self) -> str:
        """Bullets joined with newlines, in order, for a body placeholder."""
        return "\n".join(self.bullets)


@dataclass(frozen=True)
class Outline:
    """A deck title and its ordered slides."""

    title: str = ""
    slides: Tuple[SlideRecord, ...] = field(default_factory=tuple)

    def with_title(self, title: str) -> Outline:
        """Return a copy of this outline carrying ``title``."""
        return replace(self, title=title)

    def __len__(self) -> int:
        return len(self.slides)
