"""External-service wrappers and the outline parser."""

from doctor_slides.services.deck_synthesizer import DeckSynthesizer, presentation_url
from doctor_slides.services.document_reader import DocumentReader, SourceDocument
from doctor_slides.services.google_auth import (
    FileTokenStore,
    GoogleAuth,
    MemoryTokenStore,
    TokenStore,
)
from doctor_slides.services.outline_generator import OutlineGenerator
from doctor_slides.services.outline_parser import parse

__all__ = [
    "DeckSynthesizer",
    "DocumentReader",
    "FileTokenStore",
    "GoogleAuth",
    "MemoryTokenStore",
    "OutlineGenerator",
    "SourceDocument",
    "TokenStore",
    "parse",
    "presentation_url",
]
