"""Keyword-based meeting extraction that runs without any network access."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache

from eve.extraction.keywords import DEFAULT_CONFIG, HeuristicConfig
from eve.extraction.models import (
    ActionItem,
    Level,
    MeetingRecord,
    MeetingType,
    ProcessingMethod,
    Sentiment,
)
from eve.extraction.schema import (
    DUE_UNKNOWN,
    OWNER_UNKNOWN,
    PLACEHOLDER_ACTION,
    with_placeholder,
)
from eve.extraction.text import compute_stats, split_sentences


@lru_cache(maxsize=128)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Compile a keyword tuple into one case-insensitive whole-word regex."""
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


def _matches(sentence: str, keywords: tuple[str, ...]) -> bool:
    return bool(keywords) and _keyword_pattern(keywords).search(sentence) is not None


def _count_hits(sentences: Iterable[str], keywords: tuple[str, ...]) -> int:
    if not keywords:
        return 0
    pattern = _keyword_pattern(keywords)
    return sum(len(pattern.findall(s)) for s in sentences)


def classify_priority(sentence: str, config: HeuristicConfig = DEFAULT_CONFIG) -> Level | None:
    """Return the highest action tier *sentence* matches, or None if it is no action."""
    if _matches(sentence, config.high_priority_keywords):
        return Level.HIGH
    if _matches(sentence, config.medium_priority_keywords):
        return Level.MEDIUM
    if _matches(sentence, config.low_priority_keywords):
        return Level.LOW
    return None


@lru_cache(maxsize=8)
def _owner_stopwords(config: HeuristicConfig) -> frozenset[str]:
    """Configured stopwords plus every word of the deadline and next-step phrases."""
    words = {w.lower() for w in config.owner_stopwords}
    for phrase in (*config.deadline_phrases, *config.next_step_keywords):
        words.update(phrase.lower().split())
    return frozenset(words)


def resolve_owner(sentence: str, config: HeuristicConfig = DEFAULT_CONFIG) -> str:
    """First owner pattern that yields a non-stopword owner, else the placeholder."""
    stopwords = _owner_stopwords(config)
    for pattern, label in config.owner_patterns:
        for match in re.finditer(pattern, sentence):
            if label is not None:
                return label
            owner = match.group("owner")
            if owner.lower() in stopwords:
                continue
            return owner[0].upper() + owner[1:]
    return OWNER_UNKNOWN


def resolve_due_hint(sentence: str, config: HeuristicConfig = DEFAULT_CONFIG) -> str:
    """First deadline phrase (in configured order) found in *sentence*."""
    for phrase in config.deadline_phrases:
        if _matches(sentence, (phrase,)):
            return phrase
    return DUE_UNKNOWN


@dataclass
class _Classified:
    sentence: str
    priority: Level | None
    is_decision: bool


def _resolve_meeting_type(
    sentences: Sequence[str],
    decision_count: int,
    action_count: int,
    config: HeuristicConfig,
) -> MeetingType:
    # Later rules override earlier ones.
    meeting_type = MeetingType.GENERAL_DISCUSSION
    if any(_matches(s, config.brainstorm_keywords) for s in sentences):
        meeting_type = MeetingType.BRAINSTORM
    if decision_count > config.decision_type_threshold:
        meeting_type = MeetingType.DECISION
    if any(_matches(s, config.update_keywords) for s in sentences):
        meeting_type = MeetingType.UPDATE
    if action_count > config.planning_type_threshold:
        meeting_type = MeetingType.PLANNING
    if any(_matches(s, config.retrospective_keywords) for s in sentences):
        meeting_type = MeetingType.EVALUATION
    return meeting_type


def _resolve_sentiment(sentences: Sequence[str], config: HeuristicConfig) -> Sentiment:
    positive = _count_hits(sentences, config.positive_keywords)
    negative = _count_hits(sentences, config.negative_keywords)
    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def _resolve_urgency(actions: Sequence[ActionItem]) -> Level:
    priorities = {a.priority for a in actions}
    for level in (Level.HIGH, Level.MEDIUM):
        if level in priorities:
            return level
    return Level.LOW


def _summarize(
    duration_seconds: float, sentence_count: int, action_count: int, decision_count: int
) -> str:
    minutes = math.ceil(duration_seconds / 60) if duration_seconds > 0 else 0
    return (
        f"Lokale analyse van een meeting van {minutes} minuten: "
        f"{sentence_count} zinnen geanalyseerd, {action_count} actiepunten en "
        f"{decision_count} beslissingen gedetecteerd."
    )


def extract_heuristic(
    text: str,
    duration_seconds: float = 0.0,
    config: HeuristicConfig = DEFAULT_CONFIG,
    speakers: Sequence[str] = (),
) -> MeetingRecord:
    """Extract a MeetingRecord from *text* with fixed keyword rules.

    Each sentence is classified on its own against the configured keyword
    sets. Action items take the highest priority tier they match, decisions
    and insights never share a sentence, and every empty category is filled
    with a placeholder. The result depends only on the inputs.

    Args:
        text: Transcript text (Dutch).
        duration_seconds: Recording length, used for stats and the summary.
        config: Keyword lists and thresholds.
        speakers: Speaker labels from the transcript source, if any.

    Returns:
        A record tagged ``heuristic``.
    """
    sentences = [s for s in split_sentences(text) if len(s) >= config.min_sentence_length]
    classified = [
        _Classified(
            sentence=s,
            priority=classify_priority(s, config),
            is_decision=_matches(s, config.decision_keywords),
        )
        for s in sentences
    ]

    actions = [
        ActionItem(
            task=c.sentence,
            owner=resolve_owner(c.sentence, config),
            due_hint=resolve_due_hint(c.sentence, config),
            priority=c.priority,
        )
        for c in classified
        if c.priority is not None
    ]
    decisions = [c.sentence for c in classified if c.is_decision]
    insights = [
        c.sentence
        for c in classified
        if c.priority is None
        and not c.is_decision
        and config.insight_min_length < len(c.sentence) < config.insight_max_length
    ]
    blockers = [s for s in sentences if _matches(s, config.problem_keywords)]
    next_steps = [s for s in sentences if _matches(s, config.next_step_keywords)]
    follow_ups = [
        s for s in sentences if s.endswith("?") or _matches(s, config.follow_up_keywords)
    ]

    participants: list[str] = []
    for name in [*speakers, *(a.owner for a in actions)]:
        if name and name != OWNER_UNKNOWN and name not in participants:
            participants.append(name)

    stats = compute_stats(text, duration_seconds)

    return MeetingRecord(
        meeting_type=_resolve_meeting_type(sentences, len(decisions), len(actions), config),
        summary=_summarize(
            stats.duration_seconds, stats.sentence_count, len(actions), len(decisions)
        ),
        key_decisions=with_placeholder(decisions[: config.max_decisions], "key_decisions"),
        action_items=tuple(actions) if actions else (PLACEHOLDER_ACTION,),
        key_insights=with_placeholder(insights[: config.max_insights], "key_insights"),
        follow_up_needed=with_placeholder(follow_ups[: config.max_follow_ups], "follow_up_needed"),
        next_steps=with_placeholder(next_steps[: config.max_next_steps], "next_steps"),
        blockers=with_placeholder(blockers[: config.max_blockers], "blockers"),
        participants=with_placeholder(participants, "participants"),
        sentiment=_resolve_sentiment(sentences, config),
        urgency=_resolve_urgency(actions),
        stats=stats,
        processing_method=ProcessingMethod.HEURISTIC,
    )
