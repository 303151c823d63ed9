"""Builders for Slides API resources used by the synthesizer tests."""

from typing import Any


def make_presentation(presentation_id: str, layouts: list[int]) -> dict[str, Any]:
    """
    Build a Slides API presentation resource.

    Args:
        presentation_id: ID of the presentation
        layouts: Number of page elements on each slide, in order

    Returns:
        Presentation dict shaped like ``presentations.get``
    """
    return {
        "presentationId": presentation_id,
        "slides": [
            {
                "objectId": f"page{i}",
                "pageElements": [{"objectId": f"page{i}_el{j}"} for j in range(count)],
            }
            for i, count in enumerate(layouts)
        ],
    }
