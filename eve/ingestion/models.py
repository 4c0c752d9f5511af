"""Data models for transcripts handed to the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

TRANSCRIPT_LANGUAGE = "nl"


@dataclass
class TranscriptSegment:
    """Uniform representation of a parsed transcript segment."""

    speaker: str | None
    text: str
    start_time: float | None = None
    end_time: float | None = None


@dataclass
class Transcript:
    """Dutch transcript of one session.

    Built either from a single final blob (batch transcription) or by appending
    finalized fragments while live recognition runs.
    """

    fragments: list[str] = field(default_factory=list)
    speakers: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    language: str = TRANSCRIPT_LANGUAGE

    @property
    def text(self) -> str:
        return " ".join(f.strip() for f in self.fragments if f.strip())

    def is_empty(self) -> bool:
        return not self.text

    def snapshot(self) -> Transcript:
        """Independent copy, safe to hand to a worker thread while fragments keep arriving."""
        return Transcript(
            fragments=list(self.fragments),
            speakers=list(self.speakers),
            duration_seconds=self.duration_seconds,
            language=self.language,
        )

    def append(self, fragment: str) -> None:
        """Append a finalized streaming fragment; blank fragments are ignored."""
        if fragment.strip():
            self.fragments.append(fragment.strip())

    @classmethod
    def from_text(cls, text: str, duration_seconds: float = 0.0) -> Transcript:
        return cls(fragments=[text] if text.strip() else [], duration_seconds=duration_seconds)

    @classmethod
    def from_segments(
        cls,
        segments: list[TranscriptSegment],
        duration_seconds: float | None = None,
    ) -> Transcript:
        """Build a transcript from parsed segments.

        Speakers are de-duplicated in order of first appearance. When no
        duration is given it is taken from the last segment end time.
        """
        speakers: list[str] = []
        for seg in segments:
            if seg.speaker and seg.speaker not in speakers:
                speakers.append(seg.speaker)

        if duration_seconds is None:
            end_times = [s.end_time for s in segments if s.end_time is not None]
            duration_seconds = max(end_times) if end_times else 0.0

        return cls(
            fragments=[s.text for s in segments if s.text.strip()],
            speakers=speakers,
            duration_seconds=duration_seconds,
        )
