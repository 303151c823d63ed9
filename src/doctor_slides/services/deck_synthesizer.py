"""Write an outline into a new Google Slides presentation.

A new presentation starts with one slide on the TITLE layout; it becomes the
deck's title slide. Slides are created in one batch, the presentation is
re-read to learn the placeholder IDs the service assigned, and the text is
inserted in a second batch. Slide ``i`` of the outline is slide ``i + 1``
of the presentation and the closing slide is always last.
"""

import logging
from typing import Any, Dict, List

from doctor_slides.domain.outline import Outline
from doctor_slides.utils.error_handling import SynthesisError

logger = logging.getLogger(__name__)

CONTENT_LAYOUT = "TITLE_AND_BODY"
CLOSING_LAYOUT = "TITLE"
DEFAULT_CLOSING_LABEL = "The End"

PRESENTATION_URL = "https://docs.google.com/presentation/d/{presentation_id}/edit"


def presentation_url(presentation_id: str) -> str:
    """Editor URL for a presentation."""
    return PRESENTATION_URL.format(presentation_id=presentation_id)


def _create_slide(layout: str) -> Dict[str, Any]:
    return {"createSlide": {"slideLayoutReference": {"predefinedLayout": layout}}}


def _insert_text(object_id: str, text: str) -> Dict[str, Any]:
    return {"insertText": {"objectId": object_id, "text": text}}


def _element_id(slide: Dict[str, Any], index: int, slide_pos: int) -> str:
    elements = slide.get("pageElements") or []
    if index >= len(elements):
        raise SynthesisError(
            f"Slide {slide_pos} has no placeholder #{index}",
            details={"slide_object_id": slide.get("objectId"), "element_count": len(elements)},
        )
    return elements[index]["objectId"]


def build_structure_requests(outline: Outline) -> List[Dict[str, Any]]:
    """One content slide per outline slide, then one closing slide."""
    requests = [_create_slide(CONTENT_LAYOUT) for _ in outline.slides]
    requests.append(_create_slide(CLOSING_LAYOUT))
    return requests


def build_content_requests(
    outline: Outline,
    presentation: Dict[str, Any],
    closing_label: str = DEFAULT_CLOSING_LABEL,
) -> List[Dict[str, Any]]:
    """
    Build the text insertions for a presentation created from ``outline``.

    Args:
        outline: The outline the structure requests were built from
        presentation: Presentation resource re-read after the structural edit
        closing_label: Text for the closing slide

    Returns:
        ``2 * len(outline.slides) + 2`` insertText requests

    Raises:
        AssertionError: If the presentation does not have exactly one title
            slide, one slide per outline slide and one closing slide
        SynthesisError: If a slide lacks the expected placeholders
    """
    pages = presentation.get("slides") or []
    expected = len(outline.slides) + 2
    if len(pages) != expected:
        raise AssertionError(
            f"Presentation has {len(pages)} slides, expected {expected} "
            f"for an outline of {len(outline.slides)}"
        )

    requests = [_insert_text(_element_id(pages[0], 0, 0), outline.title)]
    for pos, record in enumerate(outline.slides, start=1):
        page = pages[pos]
        requests.append(_insert_text(_element_id(page, 0, pos), record.title))
        requests.append(_insert_text(_element_id(page, 1, pos), record.body_text()))
    requests.append(_insert_text(_element_id(pages[-1], 0, len(pages) - 1), closing_label))
    return requests


class DeckSynthesizer:
    """Creates presentations through an authenticated Slides API service.

    Not idempotent: every call creates a new presentation.
    """

    def __init__(self, slides_service, closing_label: str = DEFAULT_CLOSING_LABEL):
        self.slides_service = slides_service
        self.closing_label = closing_label

    def synthesize(self, outline: Outline) -> str:
        """
        Create a presentation for ``outline``.

        Args:
            outline: Parsed outline carrying the deck title

        Returns:
            The new presentation's ID

        Raises:
            SynthesisError: If any call to the Slides API fails
        """
        presentations = self.slides_service.presentations()

        pres = self._call(
            "create presentation",
            presentations.create(body={"title": outline.title}),
        )
        pres_id = pres["presentationId"]
        logger.info("Created presentation", extra={"presentation_id": pres_id})

        structure = build_structure_requests(outline)
        self._call(
            "create slides",
            presentations.batchUpdate(presentationId=pres_id, body={"requests": structure}),
            pres_id,
        )

        pres = self._call(
            "re-read presentation",
            presentations.get(presentationId=pres_id),
            pres_id,
        )

        content = build_content_requests(outline, pres, self.closing_label)
        self._call(
            "insert slide text",
            presentations.batchUpdate(presentationId=pres_id, body={"requests": content}),
            pres_id,
        )
        logger.info(
            "Filled presentation",
            extra={
                "presentation_id": pres_id,
                "structure_requests": len(structure),
                "content_requests": len(content),
            },
        )
        return pres_id

    @staticmethod
    def _call(step: str, request, presentation_id: str | None = None) -> Dict[str, Any]:
        try:
            return request.execute()
        except Exception as exc:
            raise SynthesisError(
                f"Failed to {step}: {exc}",
                details={"step": step, "presentation_id": presentation_id},
            ) from exc
