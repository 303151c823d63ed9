"""Read the text of a Google Doc."""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from doctor_slides.utils.error_handling import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """Title and plain text of a fetched document."""

    document_id: str
    title: str
    text: str


def read_text(document: Dict[str, Any]) -> str:
    """Concatenate every text run of a Docs API document in body order.

    Tables, section breaks and other non-paragraph elements are skipped, as
    are paragraph elements that are not text runs (inline objects, page
    breaks, ...).
    """
    parts = []
    for element in document.get("body", {}).get("content", []):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        for paragraph_element in paragraph.get("elements") or []:
            text_run = paragraph_element.get("textRun")
            if not text_run:
                continue
            parts.append(text_run.get("content", ""))
    return "".join(parts)


class DocumentReader:
    """Fetches documents through an authenticated Docs API service."""

    def __init__(self, docs_service):
        self.docs_service = docs_service

    def fetch(self, document_id: str) -> SourceDocument:
        """
        Fetch a document and extract its text.

        Args:
            document_id: Google Docs document ID

        Returns:
            SourceDocument with the document title and concatenated text

        Raises:
            FetchError: If the document cannot be read
        """
        try:
            document = self.docs_service.documents().get(documentId=document_id).execute()
        except Exception as exc:
            raise FetchError(
                f"Could not read document {document_id}: {exc}",
                details={"document_id": document_id},
            ) from exc

        title = document.get("title", "")
        text = read_text(document)
        logger.info(
            "Obtained document",
            extra={"document_id": document_id, "title": title, "chars": len(text)},
        )
        return SourceDocument(document_id=document_id, title=title, text=text)
