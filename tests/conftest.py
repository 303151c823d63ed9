"""
Pytest configuration and shared fixtures.

This module provides fixtures that are available to all test modules.
"""

import os
from typing import Any, Callable, Generator
from unittest.mock import MagicMock, patch

import pytest

from doctor_slides.domain.outline import Outline, SlideRecord


@pytest.fixture
def mock_env_vars() -> Generator[dict[str, str], None, None]:
    """
    Provide the minimum environment needed to build settings.

    Returns:
        Dictionary of environment variables
    """
    env_vars = {"OPEN_AI_KEY": "sk-test-12345"}

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> None:
    """Remove every variable settings read, and run from an empty directory (no .env)."""
    for name in (
        "OPEN_AI_KEY",
        "DEBUG",
        "GOOGLE_API_KEY",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LLM_MODEL",
        "OPENAI_BASE_URL",
        "GOOGLE_CREDENTIALS_PATH",
        "GOOGLE_TOKEN_PATH",
        "CLOSING_LABEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def well_formed_outline_text() -> str:
    """Three complete slides in the exact format the prompt asks for."""
    return (
        "NEW SLIDE ======\n"
        "Title: Intro\n"
        "- point one\n"
        "- point two\n"
        "Image URL: https://example.com/intro.png\n"
        "END SLIDE ======\n"
        "NEW SLIDE ======\n"
        "Title: Details\n"
        "- detail a\n"
        "- detail b\n"
        "- detail c\n"
        "END SLIDE ======\n"
        "NEW SLIDE ======\n"
        "Title: Wrap up\n"
        "- summary\n"
        "- next steps\n"
        "END SLIDE ======\n"
    )


@pytest.fixture
def sample_outline() -> Outline:
    """A titled two-slide outline."""
    return Outline(
        title="Quarterly Review",
        slides=(
            SlideRecord(title="Revenue", bullets=("Up 12%", "Driven by EMEA")),
            SlideRecord(title="Hiring", bullets=("4 new engineers",), image_ref="https://example.com/team.png"),
        ),
    )


@pytest.fixture
def slides_service_factory() -> Callable[[dict[str, Any]], MagicMock]:
    """
    Build a mock Slides API service.

    The returned factory takes the presentation that ``presentations.get``
    should return after the structural edit.
    """

    def _factory(presentation_after_structure: dict[str, Any]) -> MagicMock:
        service = MagicMock()
        presentations = service.presentations.return_value
        presentations.create.return_value.execute.return_value = {
            "presentationId": presentation_after_structure["presentationId"],
            "slides": presentation_after_structure["slides"][:1],
        }
        presentations.batchUpdate.return_value.execute.return_value = {"replies": []}
        presentations.get.return_value.execute.return_value = presentation_after_structure
        return service

    return _factory
