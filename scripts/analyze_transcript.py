"""Analyse a meeting transcript (or recording) and write the JSON export.

Usage:
    python scripts/analyze_transcript.py notulen.txt
    python scripts/analyze_transcript.py meeting.vtt --mode heuristic_only
    python scripts/analyze_transcript.py opname.mp3 --api-url http://localhost:8000

Without ``--api-url`` the pipeline runs in-process; with it, the transcript is
sent to a running EVE API (audio files are transcribed there first).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import httpx

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from eve import client  # noqa: E402
from eve.config import settings  # noqa: E402
from eve.export import build_export, export_filename  # noqa: E402
from eve.extraction.errors import EmptyTranscriptError  # noqa: E402
from eve.extraction.models import MeetingRecord  # noqa: E402
from eve.extraction.orchestrator import extract  # noqa: E402
from eve.extraction.schema import record_from_dict  # noqa: E402
from eve.ingestion.models import Transcript  # noqa: E402
from eve.ingestion.parsers import load_transcript  # noqa: E402
from eve.pipeline_config import ProcessingMode  # noqa: E402

AUDIO_EXTENSIONS = {"mp3", "wav", "m4a", "mp4", "ogg", "flac", "webm"}
FORMAT_BY_EXTENSION = {"vtt": "vtt", "txt": "text", "json": "json"}

logger = logging.getLogger("analyze_transcript")


def _read_transcript(
    path: Path, fmt: str | None, duration: float | None, api_url: str | None
) -> Transcript:
    ext = path.suffix.lstrip(".").lower()
    if ext in AUDIO_EXTENSIONS:
        if not api_url:
            raise SystemExit("Audio files need --api-url (transcription runs on the server).")
        result = client.transcribe_audio(path.read_bytes(), path.name, api_url=api_url)
        transcript = Transcript.from_text(result["text"], duration or result["duration"])
        transcript.speakers = list(result.get("speakers", []))
        return transcript

    transcript_format = fmt or FORMAT_BY_EXTENSION.get(ext, "text")
    return load_transcript(path.read_text(encoding="utf-8"), transcript_format, duration)


def _analyze_remote(
    transcript: Transcript, mode: ProcessingMode, api_url: str
) -> tuple[MeetingRecord, str | None]:
    capability = client.check_capability(api_url)
    logger.info("Server capability: %s", capability)
    body = client.analyze_transcript(
        transcript.text, transcript.duration_seconds, mode.value, api_url=api_url
    )
    notice = body.get("notice")
    return record_from_dict(body), notice["message"] if notice else None


def _analyze_local(
    transcript: Transcript, mode: ProcessingMode
) -> tuple[MeetingRecord, str | None]:
    result = extract(transcript, mode, settings.model_available)
    return result.record, result.notice.message if result.notice else None


def _print_report(record: MeetingRecord, notice: str | None) -> None:
    print(f"Type: {record.meeting_type}  ({record.processing_method})")
    print(record.summary)
    if notice:
        print(f"Let op: {notice}")
    print("\nActiepunten:")
    for i, item in enumerate(record.action_items, 1):
        print(f"  {i}. [{item.priority}] {item.task} ({item.owner}, {item.due_hint})")
    print("\nBeslissingen:")
    for decision in record.key_decisions:
        print(f"  - {decision}")
    print("\nBlokkades:")
    for blocker in record.blockers:
        print(f"  - {blocker}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Analyse a Dutch meeting transcript")
    parser.add_argument("path", type=Path, help="Transcript (.txt/.vtt/.json) or audio file")
    parser.add_argument("--format", choices=["text", "vtt", "json"], default=None)
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ProcessingMode],
        default=settings.processing_mode.value,
    )
    parser.add_argument("--duration", type=float, default=None, help="Duration in seconds")
    parser.add_argument("--api-url", default=None, help="Use a running EVE API instead")
    parser.add_argument("--output", type=Path, default=None, help="Export file path")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.path.exists():
        print(f"File not found: {args.path}")
        sys.exit(1)

    mode = ProcessingMode(args.mode)
    try:
        transcript = _read_transcript(args.path, args.format, args.duration, args.api_url)
        if args.api_url:
            record, notice = _analyze_remote(transcript, mode, args.api_url)
        else:
            record, notice = _analyze_local(transcript, mode)
    except EmptyTranscriptError as exc:
        print(f"Niets te analyseren: {exc}")
        sys.exit(1)
    except httpx.HTTPError as exc:
        print(f"API request failed: {exc}")
        sys.exit(1)

    _print_report(record, notice)

    exported_at = datetime.now(UTC)
    output = args.output or Path(export_filename(exported_at))
    document = build_export(record, transcript.text, transcript.duration_seconds, exported_at)
    output.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"\nExport geschreven naar {output}")


if __name__ == "__main__":
    main()
