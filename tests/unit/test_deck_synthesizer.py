"""Unit tests for DeckSynthesizer and its request builders."""

from unittest.mock import MagicMock

import pytest

from doctor_slides.domain.outline import Outline, SlideRecord
from doctor_slides.services.deck_synthesizer import (
    CLOSING_LAYOUT,
    CONTENT_LAYOUT,
    DeckSynthesizer,
    build_content_requests,
    build_structure_requests,
    presentation_url,
)
from doctor_slides.utils.error_handling import SynthesisError
from tests.fixtures.presentations import make_presentation


def _outline(k: int) -> Outline:
    return Outline(
        title="Deck",
        slides=tuple(
            SlideRecord(title=f"S{i}", bullets=(f"b{i}a", f"b{i}b")) for i in range(k)
        ),
    )


def _committed(k: int, pres_id: str = "pres-1") -> dict:
    """Title slide + k two-zone slides + closing slide."""
    return make_presentation(pres_id, [2] + [2] * k + [2])


class TestBuildStructureRequests:

    @pytest.mark.parametrize("k", [1, 3, 10])
    def test_k_plus_one_create_slides(self, k):
        """One content slide per outline slide plus the closing slide."""
        requests = build_structure_requests(_outline(k))

        assert len(requests) == k + 1
        assert all(set(r) == {"createSlide"} for r in requests)

    def test_layouts(self):
        """Content slides use the two-zone layout, the closing slide the title layout."""
        requests = build_structure_requests(_outline(2))
        layouts = [r["createSlide"]["slideLayoutReference"]["predefinedLayout"] for r in requests]

        assert layouts == [CONTENT_LAYOUT, CONTENT_LAYOUT, CLOSING_LAYOUT]
        assert layouts == ["TITLE_AND_BODY", "TITLE_AND_BODY", "TITLE"]


class TestBuildContentRequests:

    @pytest.mark.parametrize("k", [1, 3, 10])
    def test_two_k_plus_two_insert_text(self, k):
        """1 deck title + 2 per content slide + 1 closing label."""
        requests = build_content_requests(_outline(k), _committed(k))

        assert len(requests) == 2 * k + 2

    def test_bulletless_slide_gets_empty_body(self):
        """A slide with no bullets still fills its body placeholder, keeping the count at 2k+2."""
        outline = Outline(title="T", slides=(SlideRecord(title="bare"),))

        requests = build_content_requests(outline, make_presentation("p", [2, 2, 2]))

        assert len(requests) == 4
        assert requests[2] == {"insertText": {"objectId": "page1_el1", "text": ""}}
        assert all(set(r) == {"insertText"} for r in requests)

    def test_positional_mapping(self, sample_outline):
        """Outline slide i lands on presentation slide i + 1."""
        pres = _committed(2)

        requests = [r["insertText"] for r in build_content_requests(sample_outline, pres, "Fin")]

        assert requests == [
            {"objectId": "page0_el0", "text": "Quarterly Review"},
            {"objectId": "page1_el0", "text": "Revenue"},
            {"objectId": "page1_el1", "text": "Up 12%\nDriven by EMEA"},
            {"objectId": "page2_el0", "text": "Hiring"},
            {"objectId": "page2_el1", "text": "4 new engineers"},
            {"objectId": "page3_el0", "text": "Fin"},
        ]

    def test_default_closing_label(self):
        requests = build_content_requests(_outline(1), _committed(1))

        assert requests[-1]["insertText"]["text"] == "The End"

    def test_bullets_joined_in_order(self):
        """Body text is bullets joined by newlines, original order kept."""
        outline = Outline(title="T", slides=(SlideRecord(title="x", bullets=("3", "1", "2")),))

        requests = build_content_requests(outline, _committed(1))

        assert requests[2]["insertText"]["text"] == "3\n1\n2"

    def test_slide_count_mismatch_is_a_programming_error(self):
        """A presentation that does not match the outline trips an assertion."""
        with pytest.raises(AssertionError, match="expected 4"):
            build_content_requests(_outline(2), _committed(3))

    def test_missing_body_placeholder(self):
        """A content slide without a body element is reported as a synthesis failure."""
        pres = make_presentation("p", [1, 1, 1])

        with pytest.raises(SynthesisError, match="no placeholder #1"):
            build_content_requests(_outline(1), pres)


class TestDeckSynthesizer:

    def test_call_sequence(self, sample_outline, slides_service_factory):
        """create -> structural batch -> get -> content batch, in that order."""
        service = slides_service_factory(_committed(2, "pres-42"))
        presentations = service.presentations.return_value

        pres_id = DeckSynthesizer(service).synthesize(sample_outline)

        assert pres_id == "pres-42"
        presentations.create.assert_called_once_with(body={"title": "Quarterly Review"})
        presentations.get.assert_called_once_with(presentationId="pres-42")

        structure_call, content_call = presentations.batchUpdate.call_args_list
        assert structure_call.kwargs["presentationId"] == "pres-42"
        assert len(structure_call.kwargs["body"]["requests"]) == 3
        assert len(content_call.kwargs["body"]["requests"]) == 6

        names = [c[0] for c in presentations.method_calls]
        assert names == ["create", "batchUpdate", "get", "batchUpdate"]

    def test_custom_closing_label(self, sample_outline, slides_service_factory):
        service = slides_service_factory(_committed(2))
        presentations = service.presentations.return_value

        DeckSynthesizer(service, closing_label="Questions?").synthesize(sample_outline)

        content = presentations.batchUpdate.call_args_list[1].kwargs["body"]["requests"]
        assert content[-1]["insertText"]["text"] == "Questions?"

    def test_create_failure(self, sample_outline):
        """A failed create raises SynthesisError and makes no further calls."""
        service = MagicMock()
        presentations = service.presentations.return_value
        presentations.create.return_value.execute.side_effect = RuntimeError("quota")

        with pytest.raises(SynthesisError, match="create presentation"):
            DeckSynthesizer(service).synthesize(sample_outline)

        presentations.batchUpdate.assert_not_called()

    def test_structural_edit_failure_is_fatal(self, sample_outline, slides_service_factory):
        """No re-read or content edit after a failed structural edit."""
        service = slides_service_factory(_committed(2, "pres-9"))
        presentations = service.presentations.return_value
        presentations.batchUpdate.return_value.execute.side_effect = RuntimeError("400 Bad Request")

        with pytest.raises(SynthesisError) as exc_info:
            DeckSynthesizer(service).synthesize(sample_outline)

        assert exc_info.value.details == {"step": "create slides", "presentation_id": "pres-9"}
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        presentations.get.assert_not_called()

    def test_content_edit_failure_is_fatal(self, sample_outline, slides_service_factory):
        service = slides_service_factory(_committed(2))
        presentations = service.presentations.return_value
        presentations.batchUpdate.return_value.execute.side_effect = [
            {"replies": []},
            RuntimeError("500"),
        ]

        with pytest.raises(SynthesisError, match="insert slide text"):
            DeckSynthesizer(service).synthesize(sample_outline)

    def test_each_call_creates_a_new_presentation(self, sample_outline, slides_service_factory):
        """Synthesis is not idempotent."""
        service = slides_service_factory(_committed(2))
        synthesizer = DeckSynthesizer(service)

        synthesizer.synthesize(sample_outline)
        synthesizer.synthesize(sample_outline)

        assert service.presentations.return_value.create.call_count == 2


def test_presentation_url():
    assert presentation_url("abc") == "https://docs.google.com/presentation/d/abc/edit"
