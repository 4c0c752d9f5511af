"""Tests for MeetingSession lifecycle, cancellation, and reset."""

from __future__ import annotations

import asyncio
import threading

import pytest

from eve.extraction.errors import EmptyTranscriptError, ExtractionInProgressError
from eve.extraction.heuristic import extract_heuristic
from eve.extraction.orchestrator import ExtractionResult
from eve.ingestion.models import Transcript
from eve.pipeline_config import ProcessingMode
from eve.session import MeetingSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class GatedExtractor:
    """Extractor that blocks its worker thread until ``gate`` is set."""

    def __init__(self) -> None:
        self.started = threading.Event()
        self.gate = threading.Event()
        self.calls: list[tuple[str, float, ProcessingMode, bool]] = []

    def __call__(
        self, transcript: Transcript, mode: ProcessingMode, model_available: bool
    ) -> ExtractionResult:
        self.calls.append((transcript.text, transcript.duration_seconds, mode, model_available))
        self.started.set()
        self.gate.wait(5)
        return ExtractionResult(record=extract_heuristic(transcript.text))


class TestFragments:
    def test_fragments_accumulate(self) -> None:
        session = MeetingSession()
        session.add_fragment("We beginnen.")
        session.add_fragment("  ")
        session.add_fragment("Jan zal het rapport schrijven.")
        assert session.transcript.text == "We beginnen. Jan zal het rapport schrijven."

    def test_set_transcript_replaces_fragments(self) -> None:
        session = MeetingSession()
        session.add_fragment("Oude tekst.")
        session.set_transcript("Nieuwe tekst.", duration_seconds=42, speakers=["A"])
        assert session.transcript.text == "Nieuwe tekst."
        assert session.transcript.speakers == ["A"]
        assert session.duration_seconds == 42

    def test_duration_follows_the_clock(self) -> None:
        clock = FakeClock()
        session = MeetingSession(clock=clock)
        session.start()
        clock.now = 30.0
        assert session.is_active
        assert session.duration_seconds == 30.0
        session.stop()
        clock.now = 100.0
        assert not session.is_active
        assert session.duration_seconds == 30.0


class TestFinish:
    def test_finish_passes_transcript_and_duration(self) -> None:
        clock = FakeClock()
        extractor = GatedExtractor()
        extractor.gate.set()
        session = MeetingSession(extractor=extractor, clock=clock)
        session.start()
        session.add_fragment("Jan zal het rapport schrijven.")
        clock.now = 90.0

        result = asyncio.run(session.finish(ProcessingMode.HEURISTIC_ONLY, False))

        assert result is not None
        assert session.result is result
        assert extractor.calls == [
            ("Jan zal het rapport schrijven.", 90.0, ProcessingMode.HEURISTIC_ONLY, False)
        ]
        assert not session.is_active
        assert not session.is_extracting

    def test_empty_session_raises(self) -> None:
        session = MeetingSession(extractor=GatedExtractor())
        with pytest.raises(EmptyTranscriptError):
            asyncio.run(session.finish())

    def test_second_finish_while_running_is_rejected(self) -> None:
        extractor = GatedExtractor()
        session = MeetingSession(extractor=extractor)
        session.add_fragment("Jan zal het rapport schrijven.")

        async def scenario() -> ExtractionResult | None:
            first = asyncio.create_task(session.finish())
            await asyncio.to_thread(extractor.started.wait, 5)
            with pytest.raises(ExtractionInProgressError):
                await session.finish()
            extractor.gate.set()
            return await first

        assert asyncio.run(scenario()) is not None
        assert len(extractor.calls) == 1


    def test_fragments_added_during_extraction_are_not_seen(self) -> None:
        extractor = GatedExtractor()
        session = MeetingSession(extractor=extractor)
        session.add_fragment("Jan zal het rapport schrijven.")

        async def scenario() -> ExtractionResult | None:
            pending = asyncio.create_task(session.finish())
            await asyncio.to_thread(extractor.started.wait, 5)
            session.add_fragment("Piet regelt de zaal voor vrijdag.")
            extractor.gate.set()
            return await pending

        result = asyncio.run(scenario())

        assert result is not None
        assert [a.task for a in result.record.action_items] == ["Jan zal het rapport schrijven."]
        assert session.transcript.text.endswith("Piet regelt de zaal voor vrijdag.")


class TestCancellation:
    def test_cancel_discards_the_result(self) -> None:
        extractor = GatedExtractor()
        session = MeetingSession(extractor=extractor)
        session.add_fragment("Jan zal het rapport schrijven.")

        async def scenario() -> ExtractionResult | None:
            pending = asyncio.create_task(session.finish())
            await asyncio.to_thread(extractor.started.wait, 5)
            session.cancel()
            result = await pending
            extractor.gate.set()
            return result

        assert asyncio.run(scenario()) is None
        assert session.result is None
        assert not session.is_extracting

    def test_reset_abandons_extraction_and_clears_state(self) -> None:
        extractor = GatedExtractor()
        session = MeetingSession(extractor=extractor)
        session.add_fragment("Jan zal het rapport schrijven.")

        async def scenario() -> ExtractionResult | None:
            pending = asyncio.create_task(session.finish())
            await asyncio.to_thread(extractor.started.wait, 5)
            session.reset()
            result = await pending
            extractor.gate.set()
            return result

        assert asyncio.run(scenario()) is None
        assert session.result is None
        assert session.transcript.is_empty()
        assert session.duration_seconds == 0.0

    def test_session_is_reusable_after_reset(self) -> None:
        extractor = GatedExtractor()
        extractor.gate.set()
        session = MeetingSession(extractor=extractor)
        session.add_fragment("Eerste meeting over het budget.")
        asyncio.run(session.finish())
        session.reset()
        session.add_fragment("Tweede meeting over de planning.")
        result = asyncio.run(session.finish())
        assert result is not None
        assert extractor.calls[-1][0] == "Tweede meeting over de planning."
