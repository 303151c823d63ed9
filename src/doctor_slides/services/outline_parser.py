"""Recover a slide outline from free-form LLM output.

The model is asked to answer in a line-oriented format::

    NEW SLIDE ======
    Title: Some title
    - a bullet
    - another bullet
    Image URL: https://example.com/image.png
    END SLIDE ======

Nothing guarantees it will. The parser makes one pass over the lines and
keeps only what it can use:

* ``NEW SLIDE ======`` opens a slide. If one is already open and was never
  closed, it is discarded.
* ``END SLIDE ======`` closes the open slide and appends it to the outline,
  however little of it was filled in.
* ``Title: `` and ``Image URL: `` set fields on the open slide; the last
  occurrence wins. ``- `` appends a bullet.
* Every other line is ignored, as are field lines with no slide open.
* A slide still open at end of input is dropped.

Each line is stripped of surrounding whitespace before matching.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from doctor_slides.domain.outline import PLACEHOLDER_TITLE, Outline, SlideRecord
from doctor_slides.utils.error_handling import EmptyOutlineError

logger = logging.getLogger(__name__)

START_MARKER = "NEW SLIDE ======"
END_MARKER = "END SLIDE ======"
TITLE_PREFIX = "Title: "
BULLET_PREFIX = "- "
IMAGE_PREFIX = "Image URL: "


@dataclass
class _SlideDraft:
    """The slide currently being filled in."""

    opened_at: int
    title: str = PLACEHOLDER_TITLE
    bullets: List[str] = field(default_factory=list)
    image_ref: Optional[str] = None

    def freeze(self) -> SlideRecord:
        return SlideRecord(
            title=self.title,
            bullets=tuple(self.bullets),
            image_ref=self.image_ref,
        )


def parse(raw_text: str) -> Outline:
    """
    Parse generated text into an outline.

    Args:
        raw_text: Text returned by the generation service

    Returns:
        Outline with at least one slide and an empty title; the caller
        stamps the document title on it

    Raises:
        EmptyOutlineError: If no slide was closed with an end marker
    """
    slides: List[SlideRecord] = []
    draft: Optional[_SlideDraft] = None

    # Split on "\n" only; form feeds and Unicode line separators stay inside a field.
    for line_no, line in enumerate(raw_text.split("\n"), start=1):
        clean = line.strip()

        if clean == START_MARKER:
            if draft is not None:
                logger.debug(
                    "Discarding unterminated slide",
                    extra={"opened_at": draft.opened_at, "restarted_at": line_no},
                )
            draft = _SlideDraft(opened_at=line_no)
        elif draft is None:
            # Idle: prose, stray end markers and orphan fields are skipped.
            continue
        elif clean == END_MARKER:
            slides.append(draft.freeze())
            draft = None
        elif clean.startswith(TITLE_PREFIX):
            draft.title = clean[len(TITLE_PREFIX):]
        elif clean.startswith(BULLET_PREFIX):
            draft.bullets.append(clean[len(BULLET_PREFIX):])
        elif clean.startswith(IMAGE_PREFIX):
            draft.image_ref = clean[len(IMAGE_PREFIX):]

    if draft is not None:
        logger.debug(
            "Dropping slide left open at end of input",
            extra={"opened_at": draft.opened_at},
        )

    if not slides:
        raise EmptyOutlineError(raw_text)

    logger.info("Parsed outline", extra={"slide_count": len(slides)})
    return Outline(slides=tuple(slides))
