"""Route a transcript to the model-backed or heuristic extractor, with fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from eve.extraction.errors import EmptyTranscriptError, ModelError, ModelErrorKind
from eve.extraction.extractor import extract_via_model
from eve.extraction.heuristic import extract_heuristic
from eve.extraction.models import MeetingRecord
from eve.ingestion.models import Transcript
from eve.pipeline_config import ProcessingMode, wants_model

logger = logging.getLogger(__name__)

ModelExtractor = Callable[[str, float], MeetingRecord]
HeuristicExtractor = Callable[..., MeetingRecord]

FALLBACK_MESSAGES: dict[ModelErrorKind, str] = {
    ModelErrorKind.AUTH: (
        "API-verwerking mislukt: controleer de API-configuratie (sleutel ontbreekt of is "
        "ongeldig). Lokale analyse gebruikt."
    ),
    ModelErrorKind.NETWORK: (
        "API niet bereikbaar: controleer je internetverbinding. Lokale analyse gebruikt."
    ),
    ModelErrorKind.QUOTA: (
        "API-quota bereikt of te veel verzoeken. Lokale analyse gebruikt; probeer het later "
        "opnieuw."
    ),
    ModelErrorKind.MALFORMED: (
        "Onverwacht antwoordformaat van het taalmodel. Lokale analyse gebruikt."
    ),
}


@dataclass(frozen=True)
class FallbackNotice:
    """Non-fatal notice that the model path failed and the heuristic was used."""

    kind: ModelErrorKind
    message: str


@dataclass(frozen=True)
class ExtractionResult:
    record: MeetingRecord
    notice: FallbackNotice | None = None

    @property
    def fell_back(self) -> bool:
        return self.notice is not None


def extract(
    transcript: Transcript | str,
    mode: ProcessingMode | str = ProcessingMode.AUTO,
    model_available: bool = False,
    *,
    model_extractor: ModelExtractor = extract_via_model,
    heuristic_extractor: HeuristicExtractor = extract_heuristic,
) -> ExtractionResult:
    """Produce a MeetingRecord for *transcript*.

    ``heuristic_only`` (or ``auto`` without a model) goes straight to the
    heuristic. Otherwise the model is tried exactly once; any failure falls
    back to the heuristic and is reported through ``notice``.

    Raises:
        EmptyTranscriptError: If the transcript is empty or whitespace only.
        ValueError: If *mode* is not a known processing mode.
    """
    mode = ProcessingMode(mode)
    if isinstance(transcript, str):
        transcript = Transcript.from_text(transcript)
    if transcript.is_empty():
        raise EmptyTranscriptError()

    text = transcript.text

    if not wants_model(mode, model_available):
        logger.info(
            "Extracting with heuristic (mode=%s, model_available=%s)", mode, model_available
        )
        return ExtractionResult(record=_run_heuristic(heuristic_extractor, transcript))

    logger.info("Extracting with model (mode=%s)", mode)
    try:
        record = model_extractor(text, transcript.duration_seconds)
    except ModelError as exc:
        kind = exc.kind
        logger.warning("Model extraction failed, falling back to heuristic: %s", exc)
    except Exception:
        kind = ModelErrorKind.NETWORK
        logger.exception("Unexpected model extraction failure, falling back to heuristic")
    else:
        return ExtractionResult(record=record)

    return ExtractionResult(
        record=_run_heuristic(heuristic_extractor, transcript),
        notice=FallbackNotice(kind=kind, message=FALLBACK_MESSAGES[kind]),
    )


def _run_heuristic(
    heuristic_extractor: HeuristicExtractor, transcript: Transcript
) -> MeetingRecord:
    speakers: Sequence[str] = tuple(transcript.speakers)
    return heuristic_extractor(transcript.text, transcript.duration_seconds, speakers=speakers)
