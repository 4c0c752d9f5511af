"""Session-scoped state for one recording: transcript, timing, and extraction."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from eve.extraction.errors import EmptyTranscriptError, ExtractionInProgressError
from eve.extraction.orchestrator import ExtractionResult, extract
from eve.ingestion.models import Transcript
from eve.pipeline_config import ProcessingMode

logger = logging.getLogger(__name__)

Extractor = Callable[[Transcript, ProcessingMode, bool], ExtractionResult]


class MeetingSession:
    """One meeting, from first fragment to finished record.

    Live recognition appends fragments with :meth:`add_fragment`; batch
    transcription hands over the whole text with :meth:`set_transcript`.
    :meth:`finish` runs extraction once in a worker thread. Cancelling or
    resetting the session abandons an in-flight extraction and its result.
    """

    def __init__(
        self,
        *,
        extractor: Extractor = extract,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._extractor = extractor
        self._clock = clock
        self._transcript = Transcript()
        self._started_at: float | None = None
        self._elapsed = 0.0
        self._task: asyncio.Task[ExtractionResult] | None = None
        self.result: ExtractionResult | None = None

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def is_active(self) -> bool:
        return self._started_at is not None

    @property
    def is_extracting(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def duration_seconds(self) -> float:
        if self._started_at is not None:
            return self._elapsed + (self._clock() - self._started_at)
        return self._elapsed

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._elapsed += self._clock() - self._started_at
            self._started_at = None

    def add_fragment(self, text: str) -> None:
        """Append a finalized live-recognition fragment."""
        self._transcript.append(text)

    def set_transcript(
        self,
        text: str,
        duration_seconds: float | None = None,
        speakers: Sequence[str] = (),
    ) -> None:
        """Replace the transcript with a batch transcription result."""
        self._transcript = Transcript.from_text(text)
        self._transcript.speakers = list(speakers)
        if duration_seconds is not None:
            self._elapsed = duration_seconds
            self._started_at = None

    async def finish(
        self,
        mode: ProcessingMode = ProcessingMode.AUTO,
        model_available: bool = False,
    ) -> ExtractionResult | None:
        """End the session and extract a record.

        Returns:
            The extraction result, or None when the extraction was abandoned
            by :meth:`cancel` or :meth:`reset` before it completed.

        Raises:
            EmptyTranscriptError: Nothing was transcribed.
            ExtractionInProgressError: Another extraction is still running.
        """
        if self.is_extracting:
            raise ExtractionInProgressError("An extraction is already running for this session")

        self.stop()
        if self._transcript.is_empty():
            raise EmptyTranscriptError()

        self._transcript.duration_seconds = self.duration_seconds
        task = asyncio.create_task(
            asyncio.to_thread(self._extractor, self._transcript.snapshot(), mode, model_available)
        )
        self._task = task

        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled() or self._task is not task:
            logger.info("Extraction abandoned; discarding result")
            return None

        self._task = None
        self.result = task.result()
        return self.result

    def cancel(self) -> None:
        """Abandon an in-flight extraction. Its result is never stored."""
        if self._task is not None and not self._task.done():
            logger.info("Cancelling in-flight extraction")
            self._task.cancel()
        self._task = None

    def reset(self) -> None:
        """Cancel any extraction and clear all session state."""
        self.cancel()
        self._transcript = Transcript()
        self._started_at = None
        self._elapsed = 0.0
        self.result = None
