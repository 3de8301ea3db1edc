"""Vocabulary word tracked for spaced repetition."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VocabularyItem:
    """
    A word under review within one enrollment.

    Business Rules:
    - Keyed by the literal word; no case folding or trimming
    - repetition_count never decreases
    """

    word: str
    translation: str
    mastered: bool
    last_reviewed_at: datetime
    next_review_at: datetime
    repetition_count: int = 0
