"""Sentence splitting and transcript statistics shared by both extractors."""

from __future__ import annotations

import re

from eve.extraction.models import MeetingStats

# A sentence runs up to and including its terminator(s); trailing text without
# a terminator still counts as a sentence.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]*")


def split_sentences(text: str) -> list[str]:
    """Split *text* on ``.``, ``!`` and ``?`` keeping the terminator.

    Internal whitespace (including line breaks from live fragments) collapses
    to single spaces; empty pieces are dropped.
    """
    sentences: list[str] = []
    for piece in _SENTENCE_RE.findall(text):
        sentence = " ".join(piece.split())
        if sentence and any(ch.isalnum() for ch in sentence):
            sentences.append(sentence)
    return sentences


def count_words(text: str) -> int:
    return len(text.split())


def compute_stats(text: str, duration_seconds: float) -> MeetingStats:
    """Word/sentence counts and speaking rate (words per minute) for *text*."""
    words = count_words(text)
    duration = max(float(duration_seconds or 0.0), 0.0)
    rate = round(words / (duration / 60)) if duration > 0 else 0
    return MeetingStats(
        word_count=words,
        sentence_count=len(split_sentences(text)),
        duration_seconds=duration,
        speaking_rate_per_minute=rate,
    )
