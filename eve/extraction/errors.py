"""Exceptions raised by the extraction pipeline."""

from __future__ import annotations

from enum import StrEnum


class ModelErrorKind(StrEnum):
    """Why the model-backed extractor could not produce a record."""

    AUTH = "auth"
    NETWORK = "network"
    QUOTA = "quota"
    MALFORMED = "malformed"


class EmptyTranscriptError(ValueError):
    """The transcript is empty or whitespace only; nothing can be extracted."""

    def __init__(self, message: str = "Transcript is leeg; er valt niets te analyseren.") -> None:
        super().__init__(message)


class ModelError(Exception):
    """The language-model call failed or returned an unusable reply."""

    def __init__(self, kind: ModelErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"[{self.kind}] {self.args[0]}"


class ExtractionInProgressError(RuntimeError):
    """A session already has an extraction in flight."""
