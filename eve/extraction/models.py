"""Data models for structured meeting records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class MeetingType(StrEnum):
    """Kind of meeting, labelled in Dutch."""

    STANDUP = "standup"
    BRAINSTORM = "brainstorm"
    DECISION = "beslissing"
    UPDATE = "update"
    PLANNING = "planning"
    EVALUATION = "evaluatie"
    GENERAL_DISCUSSION = "overleg"


class Level(StrEnum):
    """Three-step scale used for action priority and meeting urgency."""

    HIGH = "hoog"
    MEDIUM = "gemiddeld"
    LOW = "laag"


class Sentiment(StrEnum):
    POSITIVE = "positief"
    NEUTRAL = "neutraal"
    NEGATIVE = "negatief"


class ProcessingMethod(StrEnum):
    """Which extractor produced a record."""

    MODEL = "model"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class ActionItem:
    """A task somebody committed to during the meeting."""

    task: str
    owner: str
    due_hint: str
    priority: Level = Level.MEDIUM
    rationale: str | None = None


@dataclass(frozen=True)
class MeetingStats:
    word_count: int
    sentence_count: int
    duration_seconds: float
    speaking_rate_per_minute: int


@dataclass(frozen=True)
class MeetingRecord:
    """Canonical structured output of one completed session.

    Every list field except ``topics`` holds at least one entry; when nothing
    was detected it holds a fixed placeholder instead.
    """

    meeting_type: MeetingType
    summary: str
    key_decisions: tuple[str, ...]
    action_items: tuple[ActionItem, ...]
    key_insights: tuple[str, ...]
    follow_up_needed: tuple[str, ...]
    next_steps: tuple[str, ...]
    blockers: tuple[str, ...]
    participants: tuple[str, ...]
    stats: MeetingStats
    processing_method: ProcessingMethod
    sentiment: Sentiment | None = None
    urgency: Level | None = None
    topics: tuple[str, ...] = field(default_factory=tuple)
