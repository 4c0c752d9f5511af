"""Normalisation of raw extraction output into the canonical MeetingRecord.

Model replies are free-form JSON: field names drift (``who``/``owner``), enum
values arrive in English or with extra words, and lists come back empty or
missing. Everything is coerced per field here so a single bad value never
discards an otherwise useful record.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from eve.extraction.models import (
    ActionItem,
    Level,
    MeetingRecord,
    MeetingStats,
    MeetingType,
    ProcessingMethod,
    Sentiment,
)

logger = logging.getLogger(__name__)

OWNER_UNKNOWN = "Nog te bepalen"
DUE_UNKNOWN = "In te plannen"
SUMMARY_UNKNOWN = "Geen samenvatting beschikbaar."

PLACEHOLDERS: dict[str, str] = {
    "key_decisions": "Geen beslissingen gedetecteerd - verduidelijking nodig",
    "key_insights": "Geen kerninzichten gedetecteerd - verduidelijking nodig",
    "follow_up_needed": "Geen opvolging gedetecteerd - verduidelijking nodig",
    "next_steps": "Geen vervolgstappen gedetecteerd - verduidelijking nodig",
    "blockers": "Geen blokkades gedetecteerd - verduidelijking nodig",
    "participants": "Onbekend (geen sprekers gedetecteerd)",
    "action_items": "Geen actiepunten gedetecteerd - verduidelijking nodig",
}

PLACEHOLDER_ACTION = ActionItem(
    task=PLACEHOLDERS["action_items"],
    owner=OWNER_UNKNOWN,
    due_hint=DUE_UNKNOWN,
    priority=Level.MEDIUM,
)

_LEVEL_SYNONYMS: dict[str, Level] = {
    "hoog": Level.HIGH,
    "high": Level.HIGH,
    "urgent": Level.HIGH,
    "dringend": Level.HIGH,
    "gemiddeld": Level.MEDIUM,
    "medium": Level.MEDIUM,
    "middel": Level.MEDIUM,
    "normaal": Level.MEDIUM,
    "normal": Level.MEDIUM,
    "laag": Level.LOW,
    "low": Level.LOW,
}

_MEETING_TYPE_SYNONYMS: dict[str, MeetingType] = {
    "standup": MeetingType.STANDUP,
    "stand-up": MeetingType.STANDUP,
    "daily": MeetingType.STANDUP,
    "brainstorm": MeetingType.BRAINSTORM,
    "brainstormsessie": MeetingType.BRAINSTORM,
    "beslissing": MeetingType.DECISION,
    "besluitvorming": MeetingType.DECISION,
    "decision": MeetingType.DECISION,
    "update": MeetingType.UPDATE,
    "status": MeetingType.UPDATE,
    "statusupdate": MeetingType.UPDATE,
    "planning": MeetingType.PLANNING,
    "evaluatie": MeetingType.EVALUATION,
    "evaluation": MeetingType.EVALUATION,
    "retrospective": MeetingType.EVALUATION,
    "retro": MeetingType.EVALUATION,
    "overleg": MeetingType.GENERAL_DISCUSSION,
    "general-discussion": MeetingType.GENERAL_DISCUSSION,
    "discussie": MeetingType.GENERAL_DISCUSSION,
    "discussion": MeetingType.GENERAL_DISCUSSION,
}

_SENTIMENT_SYNONYMS: dict[str, Sentiment] = {
    "positief": Sentiment.POSITIVE,
    "positive": Sentiment.POSITIVE,
    "neutraal": Sentiment.NEUTRAL,
    "neutral": Sentiment.NEUTRAL,
    "negatief": Sentiment.NEGATIVE,
    "negative": Sentiment.NEGATIVE,
}

_WORD_RE = re.compile(r"[\w-]+")


def _lookup(value: Any, table: dict[str, Any]) -> Any | None:
    """Resolve *value* against a synonym table.

    Tries the whole normalised string first, then each word in it, so
    ``"technisch overleg"`` resolves through ``"overleg"``.
    """
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    if key in table:
        return table[key]
    for word in _WORD_RE.findall(key):
        if word in table:
            return table[word]
    return None


def coerce_level(value: Any, default: Level | None = Level.MEDIUM) -> Level | None:
    level = _lookup(value, _LEVEL_SYNONYMS)
    if level is None:
        if value not in (None, ""):
            logger.debug("Coercing unknown level %r to %s", value, default)
        return default
    return level  # type: ignore[no-any-return]


def coerce_meeting_type(value: Any) -> MeetingType:
    meeting_type = _lookup(value, _MEETING_TYPE_SYNONYMS)
    if meeting_type is None:
        logger.debug("Coercing unknown meeting type %r to overleg", value)
        return MeetingType.GENERAL_DISCUSSION
    return meeting_type  # type: ignore[no-any-return]


def coerce_sentiment(value: Any) -> Sentiment | None:
    return _lookup(value, _SENTIMENT_SYNONYMS)  # type: ignore[no-any-return]


def _clean_str(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _first_str(data: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        text = _clean_str(data.get(key))
        if text:
            return text
    return None


def _coerce_strings(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for item in value:
        text = _clean_str(item)
        if text:
            items.append(text)
    return items


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _coerce_action(value: Any) -> ActionItem | None:
    if isinstance(value, str):
        value = {"task": value}
    if not isinstance(value, dict):
        return None
    task = _first_str(value, "task", "description", "content")
    if not task:
        return None
    return ActionItem(
        task=task,
        owner=_first_str(value, "owner", "who", "assignee") or OWNER_UNKNOWN,
        due_hint=_first_str(value, "dueHint", "due_hint", "when", "dueDate", "due_date")
        or DUE_UNKNOWN,
        priority=coerce_level(value.get("priority")) or Level.MEDIUM,
        rationale=_first_str(value, "rationale", "context"),
    )


def with_placeholder(items: Sequence[str], field_name: str) -> tuple[str, ...]:
    return tuple(items) if items else (PLACEHOLDERS[field_name],)


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        if item.lower() not in seen:
            seen.add(item.lower())
            unique.append(item)
    return unique


def coerce_record(
    raw: dict[str, Any],
    *,
    processing_method: ProcessingMethod,
    stats: MeetingStats,
) -> MeetingRecord:
    """Build a MeetingRecord from a raw camelCase dict, coercing field by field.

    Args:
        raw: Parsed reply body (keys as in the export format).
        processing_method: Provenance tag for the record.
        stats: Locally computed transcript statistics.

    Returns:
        A record satisfying the placeholder and enum invariants.
    """
    actions = [a for a in map(_coerce_action, _as_list(raw.get("actionItems"))) if a]
    return MeetingRecord(
        meeting_type=coerce_meeting_type(raw.get("meetingType")),
        summary=_clean_str(raw.get("summary")) or SUMMARY_UNKNOWN,
        key_decisions=with_placeholder(_coerce_strings(raw.get("keyDecisions")), "key_decisions"),
        action_items=tuple(actions) if actions else (PLACEHOLDER_ACTION,),
        key_insights=with_placeholder(_coerce_strings(raw.get("keyInsights")), "key_insights"),
        follow_up_needed=with_placeholder(
            _coerce_strings(raw.get("followUpNeeded")), "follow_up_needed"
        ),
        next_steps=with_placeholder(_coerce_strings(raw.get("nextSteps")), "next_steps"),
        blockers=with_placeholder(_coerce_strings(raw.get("blockers")), "blockers"),
        participants=with_placeholder(
            _dedupe(_coerce_strings(raw.get("participants"))), "participants"
        ),
        sentiment=coerce_sentiment(raw.get("sentiment")),
        urgency=coerce_level(raw.get("urgency"), default=None),
        topics=tuple(_coerce_strings(raw.get("topics"))),
        stats=stats,
        processing_method=processing_method,
    )


def record_to_dict(record: MeetingRecord) -> dict[str, Any]:
    """Serialise a record to the camelCase form used by the API and exports."""
    return {
        "meetingType": record.meeting_type.value,
        "summary": record.summary,
        "keyDecisions": list(record.key_decisions),
        "actionItems": [
            {
                "task": item.task,
                "owner": item.owner,
                "dueHint": item.due_hint,
                "priority": item.priority.value,
                "rationale": item.rationale,
            }
            for item in record.action_items
        ],
        "keyInsights": list(record.key_insights),
        "followUpNeeded": list(record.follow_up_needed),
        "nextSteps": list(record.next_steps),
        "blockers": list(record.blockers),
        "participants": list(record.participants),
        "sentiment": record.sentiment.value if record.sentiment else None,
        "urgency": record.urgency.value if record.urgency else None,
        "topics": list(record.topics),
        "stats": {
            "wordCount": record.stats.word_count,
            "sentenceCount": record.stats.sentence_count,
            "durationSeconds": record.stats.duration_seconds,
            "speakingRatePerMinute": record.stats.speaking_rate_per_minute,
        },
        "processingMethod": record.processing_method.value,
    }


def record_from_dict(data: dict[str, Any]) -> MeetingRecord:
    """Rebuild a record from its camelCase form (e.g. a client-supplied export body)."""
    raw_stats = data.get("stats") if isinstance(data.get("stats"), dict) else {}
    stats = MeetingStats(
        word_count=int(raw_stats.get("wordCount") or 0),
        sentence_count=int(raw_stats.get("sentenceCount") or 0),
        duration_seconds=float(raw_stats.get("durationSeconds") or 0.0),
        speaking_rate_per_minute=int(raw_stats.get("speakingRatePerMinute") or 0),
    )
    try:
        method = ProcessingMethod(data.get("processingMethod"))
    except ValueError:
        method = ProcessingMethod.HEURISTIC
    return coerce_record(data, processing_method=method, stats=stats)
