"""Tests for mode routing and heuristic fallback in the extraction orchestrator."""

from __future__ import annotations

import dataclasses
import functools
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from eve.extraction.errors import EmptyTranscriptError, ModelError, ModelErrorKind
from eve.extraction.extractor import extract_via_model
from eve.extraction.heuristic import extract_heuristic
from eve.extraction.models import ProcessingMethod
from eve.extraction.orchestrator import FALLBACK_MESSAGES, extract
from eve.ingestion.models import Transcript, TranscriptSegment
from eve.pipeline_config import ProcessingMode

TRANSCRIPT = "We moeten morgen de planning afronden. Jan zal het rapport schrijven."

MODEL_RECORD = dataclasses.replace(
    extract_heuristic(TRANSCRIPT, 60), processing_method=ProcessingMethod.MODEL
)


@pytest.fixture
def model() -> MagicMock:
    return MagicMock(return_value=MODEL_RECORD)


@pytest.fixture
def heuristic() -> MagicMock:
    return MagicMock(side_effect=extract_heuristic)


def _run(transcript, mode, available, model, heuristic):  # noqa: ANN001, ANN202
    return extract(
        transcript,
        mode,
        available,
        model_extractor=model,
        heuristic_extractor=heuristic,
    )


class TestRouting:
    def test_heuristic_only_never_calls_the_model(
        self, model: MagicMock, heuristic: MagicMock
    ) -> None:
        result = _run(TRANSCRIPT, ProcessingMode.HEURISTIC_ONLY, True, model, heuristic)
        model.assert_not_called()
        assert result.record.processing_method is ProcessingMethod.HEURISTIC
        assert result.notice is None

    def test_auto_without_model_uses_heuristic(
        self, model: MagicMock, heuristic: MagicMock
    ) -> None:
        result = _run(TRANSCRIPT, ProcessingMode.AUTO, False, model, heuristic)
        model.assert_not_called()
        heuristic.assert_called_once()
        assert not result.fell_back

    def test_auto_with_model_calls_it_once(self, model: MagicMock, heuristic: MagicMock) -> None:
        transcript = Transcript.from_text(TRANSCRIPT, duration_seconds=60)
        result = _run(transcript, ProcessingMode.AUTO, True, model, heuristic)
        model.assert_called_once_with(TRANSCRIPT, 60)
        heuristic.assert_not_called()
        assert result.record is MODEL_RECORD
        assert result.notice is None

    def test_model_only_tries_model_even_if_unavailable(
        self, model: MagicMock, heuristic: MagicMock
    ) -> None:
        _run(TRANSCRIPT, ProcessingMode.MODEL_ONLY, False, model, heuristic)
        model.assert_called_once()

    @pytest.mark.parametrize(
        ("mode", "model_calls"),
        [("heuristic_only", 0), ("model_only", 1), ("auto", 1)],
    )
    def test_plain_string_modes(
        self, mode: str, model_calls: int, model: MagicMock, heuristic: MagicMock
    ) -> None:
        _run(TRANSCRIPT, mode, True, model, heuristic)
        assert model.call_count == model_calls

    def test_unknown_mode_is_rejected(self, model: MagicMock, heuristic: MagicMock) -> None:
        with pytest.raises(ValueError, match="bogus"):
            _run(TRANSCRIPT, "bogus", True, model, heuristic)
        model.assert_not_called()
        heuristic.assert_not_called()

    def test_speakers_reach_the_heuristic(self, model: MagicMock, heuristic: MagicMock) -> None:
        transcript = Transcript.from_segments(
            [
                TranscriptSegment(speaker="A", text="Jan zal het rapport schrijven."),
                TranscriptSegment(speaker="B", text="Prima, dank je wel."),
            ]
        )
        result = _run(transcript, ProcessingMode.HEURISTIC_ONLY, False, model, heuristic)
        assert heuristic.call_args.kwargs["speakers"] == ("A", "B")
        assert result.record.participants[:2] == ("A", "B")


class TestFallback:
    @pytest.mark.parametrize("kind", list(ModelErrorKind))
    def test_model_error_falls_back_with_notice(
        self, kind: ModelErrorKind, heuristic: MagicMock
    ) -> None:
        model = MagicMock(side_effect=ModelError(kind, "kapot"))
        result = _run(TRANSCRIPT, ProcessingMode.AUTO, True, model, heuristic)

        model.assert_called_once()
        assert result.fell_back
        assert result.notice.kind is kind
        assert result.notice.message == FALLBACK_MESSAGES[kind]
        assert result.record.processing_method is ProcessingMethod.HEURISTIC

    def test_unexpected_exception_is_reported_as_network(self, heuristic: MagicMock) -> None:
        model = MagicMock(side_effect=RuntimeError("boom"))
        result = _run(TRANSCRIPT, ProcessingMode.MODEL_ONLY, True, model, heuristic)
        assert result.notice.kind is ModelErrorKind.NETWORK

    def test_network_failure_end_to_end(self) -> None:
        """A connection error from the SDK yields the heuristic record plus a notice."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client = MagicMock()
        client.messages.create.side_effect = anthropic.APIConnectionError(request=request)

        result = extract(
            TRANSCRIPT,
            ProcessingMode.AUTO,
            True,
            model_extractor=functools.partial(extract_via_model, client=client),
        )

        client.messages.create.assert_called_once()
        assert result.notice.kind is ModelErrorKind.NETWORK
        assert result.record == extract_heuristic(TRANSCRIPT)

    def test_unparseable_reply_end_to_end(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = MagicMock(content=[])
        result = extract(
            TRANSCRIPT,
            ProcessingMode.AUTO,
            True,
            model_extractor=functools.partial(extract_via_model, client=client),
        )
        assert result.notice.kind is ModelErrorKind.MALFORMED
        assert result.record.processing_method is ProcessingMethod.HEURISTIC


class TestEmptyTranscript:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_raises_before_any_extractor_runs(
        self, text: str, model: MagicMock, heuristic: MagicMock
    ) -> None:
        with pytest.raises(EmptyTranscriptError):
            _run(text, ProcessingMode.AUTO, True, model, heuristic)
        model.assert_not_called()
        heuristic.assert_not_called()
