"""Document -> outline -> presentation.

Each step blocks on its network call and the next step starts only after the
previous one returned. Errors propagate unchanged to the caller.
"""

import logging
from dataclasses import dataclass

from doctor_slides.domain.outline import Outline
from doctor_slides.services.deck_synthesizer import DeckSynthesizer, presentation_url
from doctor_slides.services.document_reader import DocumentReader
from doctor_slides.services.outline_generator import OutlineGenerator
from doctor_slides.services.outline_parser import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeckResult:
    """What a successful run produced."""

    presentation_id: str
    url: str
    outline: Outline


def run(
    document_id: str,
    reader: DocumentReader,
    generator: OutlineGenerator,
    synthesizer: DeckSynthesizer,
) -> DeckResult:
    """Build a presentation from the Google Doc ``document_id``."""
    document = reader.fetch(document_id)
    raw_outline = generator.generate(document.text)
    outline = parse(raw_outline).with_title(document.title)
    return _synthesize(outline, synthesizer)


def run_from_outline_text(
    raw_outline: str,
    title: str,
    synthesizer: DeckSynthesizer,
) -> DeckResult:
    """Build a presentation from outline text saved earlier, skipping the model."""
    outline = parse(raw_outline).with_title(title)
    return _synthesize(outline, synthesizer)


def _synthesize(outline: Outline, synthesizer: DeckSynthesizer) -> DeckResult:
    logger.info(
        "Creating slide show",
        extra={"title": outline.title, "slide_count": len(outline.slides)},
    )
    presentation_id = synthesizer.synthesize(outline)
    return DeckResult(
        presentation_id=presentation_id,
        url=presentation_url(presentation_id),
        outline=outline,
    )
