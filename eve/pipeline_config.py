"""Pipeline configuration: processing-mode enum and extractor routing."""

from __future__ import annotations

from enum import StrEnum


class ProcessingMode(StrEnum):
    """How a session chooses between the language model and the local heuristic."""

    AUTO = "auto"
    MODEL_ONLY = "model_only"
    HEURISTIC_ONLY = "heuristic_only"


def wants_model(mode: ProcessingMode | str, model_available: bool) -> bool:
    """Return True when *mode* routes extraction to the language model.

    ``model_only`` always tries the model (and relies on the fallback when it is
    not configured); ``auto`` only does so when the model is available.
    """
    if mode == ProcessingMode.HEURISTIC_ONLY:
        return False
    if mode == ProcessingMode.MODEL_ONLY:
        return True
    return model_available
