"""Ask an OpenAI-compatible chat model for a slide outline."""

import logging
from typing import Any, Optional

from openai import OpenAI

from doctor_slides.config.settings import AppSettings
from doctor_slides.services.prompts import build_outline_prompt
from doctor_slides.utils.error_handling import GenerationError

logger = logging.getLogger(__name__)


class OutlineGenerator:
    """Sends the outline prompt and returns the model's raw answer.

    The answer is not checked here; malformed output is the parser's
    problem, and the model is never re-queried.
    """

    def __init__(self, client: Any, model: str, temperature: Optional[float] = None):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "OutlineGenerator":
        """Build a generator backed by ``openai.OpenAI``."""
        client = OpenAI(
            api_key=settings.open_ai_key,
            base_url=settings.llm.base_url,
            timeout=settings.llm.timeout,
        )
        return cls(client, settings.llm.model, settings.llm.temperature)

    def generate(self, document_text: str) -> str:
        """
        Request an outline for ``document_text``.

        Args:
            document_text: Full text of the source document

        Returns:
            Content of the first completion choice

        Raises:
            GenerationError: If the request fails or returns no choices
        """
        prompt = build_outline_prompt(document_text)
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        logger.info(
            "Requesting slide outline",
            extra={"model": self.model, "document_chars": len(document_text)},
        )
        try:
            resp = self.client.chat.completions.create(**kwargs)
        except Exception as exc:
            raise GenerationError(
                f"Outline request to model '{self.model}' failed: {exc}",
                details={"model": self.model},
            ) from exc

        if not resp.choices:
            raise GenerationError(
                f"Model '{self.model}' returned no completion choices",
                details={"model": self.model},
            )

        text = self._extract_text(resp.choices[0].message.content)
        logger.debug("Received outline", extra={"chars": len(text)})
        return text

    @staticmethod
    def _extract_text(content: Any) -> str:
        """Extract text from a response (handles reasoning model blocks)."""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            for block in content:
                if isinstance(block, dict) and block.get("type") == "text":
                    return block.get("text", "")
        return str(content) if content else ""
