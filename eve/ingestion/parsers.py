"""Read uploaded transcripts (WebVTT, ``Naam: tekst`` lines, or JSON) into segments."""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

from eve.ingestion.models import Transcript, TranscriptSegment

# "Jan: tekst". Speaker labels are short, so long prefixes before a colon are
# treated as part of the sentence.
_SPEAKER_RE = re.compile(r"^([^:]{1,40}?):\s+(.+)$")
_VOICE_TAG_RE = re.compile(r"^<v ([^>]+)>(.*?)(?:</v>)?$", re.DOTALL)
_CUE_TIMING_RE = re.compile(
    r"(?P<start>(?:\d{1,2}:)?\d{2}:\d{2}[.,]\d{3})\s*-->\s*"
    r"(?P<end>(?:\d{1,2}:)?\d{2}:\d{2}[.,]\d{3})"
)
_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")


def _cue_seconds(stamp: str) -> float:
    """``01:02:03.456`` or ``02:03,456`` -> seconds."""
    *hours, minutes, seconds = stamp.replace(",", ".").split(":")
    return int(hours[0] if hours else 0) * 3600 + int(minutes) * 60 + float(seconds)


def _split_speaker(line: str) -> tuple[str | None, str]:
    voice = _VOICE_TAG_RE.match(line)
    if voice:
        return voice.group(1).strip(), voice.group(2).strip()
    labelled = _SPEAKER_RE.match(line)
    if labelled:
        return labelled.group(1).strip(), labelled.group(2).strip()
    return None, line


def parse_vtt(content: str) -> list[TranscriptSegment]:
    """Parse WebVTT cues.

    Each blank-line separated block with a ``start --> end`` line is one cue;
    the lines after the timing line are its text. A speaker comes from a voice
    tag (``<v Naam>...</v>``) or a ``Naam:`` prefix, voice tags first.
    """
    segments: list[TranscriptSegment] = []
    for block in _BLOCK_SEPARATOR_RE.split(content.strip()):
        lines = [ln.strip() for ln in block.splitlines() if ln.strip()]
        timing = None
        for timing_index, line in enumerate(lines):
            timing = _CUE_TIMING_RE.search(line)
            if timing:
                break
        if timing is None:
            continue  # WEBVTT header, NOTE or STYLE block

        speaker, text = _split_speaker(" ".join(lines[timing_index + 1 :]))
        if not text:
            continue
        segments.append(
            TranscriptSegment(
                speaker=speaker,
                text=text,
                start_time=_cue_seconds(timing["start"]),
                end_time=_cue_seconds(timing["end"]),
            )
        )
    return segments


def parse_plain_text(content: str) -> list[TranscriptSegment]:
    """One utterance per non-blank line; a ``Naam:`` prefix becomes the speaker."""
    segments = []
    for line in content.splitlines():
        if line.strip():
            speaker, text = _split_speaker(line.strip())
            segments.append(TranscriptSegment(speaker=speaker, text=text))
    return segments


def _from_utterances(items: list[dict[str, Any]]) -> list[TranscriptSegment]:
    # AssemblyAI reports milliseconds.
    return [
        TranscriptSegment(
            speaker=item.get("speaker"),
            text=item["text"],
            start_time=item.get("start", 0) / 1000.0,
            end_time=item.get("end", 0) / 1000.0,
        )
        for item in items
    ]


def _from_segments(items: list[dict[str, Any]]) -> list[TranscriptSegment]:
    return [
        TranscriptSegment(
            speaker=item.get("speaker"),
            text=item["text"],
            start_time=item.get("start_time"),
            end_time=item.get("end_time"),
        )
        for item in items
    ]


def parse_json(content: str) -> list[TranscriptSegment]:
    """Parse a JSON transcript.

    Accepted shapes, tried in this order:

    * ``{"utterances": [{"speaker", "text", "start", "end"}]}`` (AssemblyAI, ms)
    * ``{"segments": [{"speaker", "text", "start_time", "end_time"}]}`` (seconds)
    * ``{"text": "..."}`` as returned by ``/api/transcribe``

    Raises:
        ValueError: For any other shape.
    """
    data = json.loads(content)
    if "utterances" in data:
        return _from_utterances(data["utterances"])
    if "segments" in data:
        return _from_segments(data["segments"])
    if "text" in data:
        return [TranscriptSegment(speaker=None, text=data["text"])]
    raise ValueError(f"Unrecognized JSON transcript format. Keys: {sorted(data)}")


PARSERS: dict[str, Callable[[str], list[TranscriptSegment]]] = {
    "vtt": parse_vtt,
    "text": parse_plain_text,
    "txt": parse_plain_text,
    "json": parse_json,
}


def parse_transcript(content: str, format: str) -> list[TranscriptSegment]:
    """Parse *content* with the parser registered for *format*.

    Raises:
        ValueError: If *format* is not one of :data:`PARSERS`.
    """
    try:
        parser = PARSERS[format]
    except KeyError:
        raise ValueError(
            f"Unknown transcript format: {format!r}. Supported: {sorted(PARSERS)}"
        ) from None
    return parser(content)


def load_transcript(
    content: str, format: str, duration_seconds: float | None = None
) -> Transcript:
    """Parse *content* and assemble a :class:`Transcript` for extraction."""
    return Transcript.from_segments(parse_transcript(content, format), duration_seconds)
