"""Lesson completion record, keyed by lesson within an enrollment."""

from dataclasses import dataclass, replace
from datetime import datetime

from polyglot.domain.common.value_objects import LessonId


@dataclass(frozen=True)
class LessonCompletion:
    """
    One finished lesson inside a Progress aggregate.

    Business Rules:
    - At most one record per lesson; repeats update it in place
    - Omitted score, time spent or notes keep the values already recorded
    """

    lesson_id: LessonId
    completed_at: datetime
    score: int | None = None
    time_spent_minutes: int | None = None
    notes: str | None = None

    @classmethod
    def create(
        cls,
        lesson_id: LessonId,
        completed_at: datetime,
        score: int | None = None,
        time_spent_minutes: int | None = None,
        notes: str | None = None,
    ) -> "LessonCompletion":
        return cls(
            lesson_id=lesson_id,
            completed_at=completed_at,
            score=score,
            time_spent_minutes=time_spent_minutes,
            notes=notes or None,
        )

    def recomplete(
        self,
        completed_at: datetime,
        score: int | None = None,
        time_spent_minutes: int | None = None,
        notes: str | None = None,
    ) -> "LessonCompletion":
        """Return the record updated by a repeated completion."""
        return replace(
            self,
            completed_at=completed_at,
            score=score if score is not None else self.score,
            time_spent_minutes=(
                time_spent_minutes if time_spent_minutes is not None else self.time_spent_minutes
            ),
            notes=notes or self.notes,
        )
