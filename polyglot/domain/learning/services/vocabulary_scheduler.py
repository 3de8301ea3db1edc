"""
Spaced-repetition scheduling for vocabulary words.

A new word is due again after one day. Every later review doubles the
interval: 2, 4, 8, 16, ... days, using the repetition count reached by that
review as the exponent. ``max_interval_days`` caps the interval; the
repetition count itself is never capped.
"""

from dataclasses import replace
from datetime import datetime, timedelta

from polyglot.domain.common.exceptions import ValidationError
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem

FIRST_REVIEW_INTERVAL = timedelta(days=1)


def review_interval(repetition_count: int, max_interval_days: int | None = None) -> timedelta:
    """Interval until the next review after reaching ``repetition_count``."""
    if repetition_count == 0:
        return FIRST_REVIEW_INTERVAL
    days = 2**repetition_count
    if max_interval_days is not None:
        days = min(days, max_interval_days)
    return timedelta(days=days)


def review_word(
    existing: VocabularyItem | None,
    word: str,
    translation: str | None,
    now: datetime,
    mastered: bool | None = None,
    max_interval_days: int | None = None,
) -> VocabularyItem:
    """
    Record a review of ``word`` at ``now``.

    Args:
        existing: Current record for the word, or None on first review
        word: The literal word
        translation: New translation; empty or blank keeps the recorded one
        now: Review instant
        mastered: Mastery flag; None keeps the recorded one (False when new)
        max_interval_days: Optional ceiling on the review interval

    Returns:
        The new VocabularyItem

    Raises:
        ValidationError: If a first review comes without a translation
    """
    if existing is None:
        if not translation or not translation.strip():
            raise ValidationError("Translation is required", field="translation")
        return VocabularyItem(
            word=word,
            translation=translation,
            mastered=bool(mastered),
            last_reviewed_at=now,
            next_review_at=now + FIRST_REVIEW_INTERVAL,
            repetition_count=0,
        )

    repetition_count = existing.repetition_count + 1
    return replace(
        existing,
        translation=translation if translation and translation.strip() else existing.translation,
        mastered=mastered if mastered is not None else existing.mastered,
        last_reviewed_at=now,
        next_review_at=now + review_interval(repetition_count, max_interval_days),
        repetition_count=repetition_count,
    )


def is_due(item: VocabularyItem, now: datetime) -> bool:
    """Whether the word should be reviewed at ``now``."""
    return item.next_review_at <= now
