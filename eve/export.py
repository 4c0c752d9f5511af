"""On-demand JSON export of a finished meeting."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from eve.extraction.models import MeetingRecord
from eve.extraction.schema import record_to_dict


def format_duration(seconds: float) -> str:
    """Format *seconds* as ``M:SS``."""
    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def export_filename(exported_at: datetime) -> str:
    return f"eve-meeting-{exported_at.date().isoformat()}.json"


def build_export(
    record: MeetingRecord,
    transcript: str,
    duration_seconds: float | None = None,
    exported_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the downloadable export document.

    The record fields keep their camelCase names so consumers can read an
    export with the same schema as an API response.
    """
    exported_at = exported_at or datetime.now(UTC)
    if duration_seconds is None:
        duration_seconds = record.stats.duration_seconds

    return {
        "exportedAt": exported_at.isoformat(),
        "date": exported_at.date().isoformat(),
        "duration": format_duration(duration_seconds),
        **record_to_dict(record),
        "transcript": transcript,
    }
