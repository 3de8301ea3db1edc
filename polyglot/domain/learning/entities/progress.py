"""
Progress aggregate root.
"""

from dataclasses import dataclass, field
from datetime import datetime

from polyglot.domain.common.aggregate_root import AggregateRoot
from polyglot.domain.common.exceptions import ValidationError
from polyglot.domain.common.value_objects import (
    LearnerId,
    LearningPathId,
    LessonId,
    ProgressId,
)
from polyglot.domain.learning.entities.lesson_completion import LessonCompletion
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem
from polyglot.domain.learning.entities.weekly_assessment import WeeklyAssessment
from polyglot.domain.learning.events import (
    LearningPathCompleted,
    LearningPathStarted,
    LessonCompleted,
    VocabularyWordReviewed,
    WeeklyAssessmentSubmitted,
)
from polyglot.domain.learning.services.checkpoint_gate import (
    CheckpointDecision,
    CheckpointOutcome,
    evaluate_checkpoint,
)
from polyglot.domain.learning.services.streak_calculator import advance_streak
from polyglot.domain.learning.services.vocabulary_scheduler import is_due, review_word

MIN_SCORE = 0
MAX_SCORE = 100


def _validate_score(score: int, field_name: str = "score") -> None:
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(
            f"Score must be between {MIN_SCORE} and {MAX_SCORE}", field=field_name, value=score
        )


@dataclass
class Progress(AggregateRoot[ProgressId]):
    """
    A learner's enrollment in one learning path.

    Business Rules:
    - Exactly one Progress per (learner, learning path)
    - Lessons, weekly assessments and vocabulary words are unique by lesson id,
      week number and literal word; repeated actions update in place
    - current_week only moves forward, one week per assessment of the current
      week, and never past the path duration
    - total_time_spent_minutes never decreases
    - The streak counts calendar days, not individual actions
    """

    # Identity
    id: ProgressId
    learner_id: LearnerId
    path_id: LearningPathId

    # Checkpoint state
    current_week: int = 1
    is_completed: bool = False
    completed_at: datetime | None = None

    # Ledgers, keyed by their natural keys
    lessons: dict[LessonId, LessonCompletion] = field(default_factory=dict)
    assessments: dict[int, WeeklyAssessment] = field(default_factory=dict)
    words: dict[str, VocabularyItem] = field(default_factory=dict)

    # Activity
    total_time_spent_minutes: int = 0
    streak_days: int = 0
    last_active_at: datetime | None = None

    # Persistence metadata
    version: int = field(default=0, compare=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.current_week < 1:
            raise ValidationError("Current week must be at least 1", "current_week")
        if self.streak_days < 0:
            raise ValidationError("Streak cannot be negative", "streak_days")
        if self.total_time_spent_minutes < 0:
            raise ValidationError("Total time spent cannot be negative", "total_time_spent_minutes")

    @property
    def lessons_completed(self) -> list[LessonCompletion]:
        return list(self.lessons.values())

    @property
    def weekly_assessments(self) -> list[WeeklyAssessment]:
        return sorted(self.assessments.values(), key=lambda a: a.week)

    @property
    def vocabulary(self) -> list[VocabularyItem]:
        return list(self.words.values())

    def complete_lesson(
        self,
        lesson_id: LessonId,
        now: datetime,
        score: int | None = None,
        time_spent_minutes: int | None = None,
        notes: str | None = None,
    ) -> LessonCompletion:
        """
        Record a finished lesson.

        A lesson already in the ledger is updated in place. Supplied time is
        added to the running total on every call, first or repeated. The
        streak is advanced once per call.

        Raises:
            ValidationError: If score or time spent is out of range
        """
        if score is not None:
            _validate_score(score)
        if time_spent_minutes is not None and time_spent_minutes < 0:
            raise ValidationError(
                "Time spent cannot be negative",
                field="time_spent_minutes",
                value=time_spent_minutes,
            )

        existing = self.lessons.get(lesson_id)
        if existing:
            completion = existing.recomplete(now, score, time_spent_minutes, notes)
        else:
            completion = LessonCompletion.create(lesson_id, now, score, time_spent_minutes, notes)
        self.lessons[lesson_id] = completion

        if time_spent_minutes:
            self.total_time_spent_minutes += time_spent_minutes

        streak = advance_streak(self.last_active_at, now, self.streak_days)
        self.streak_days = streak.streak_days
        self.last_active_at = streak.last_active_at

        self._record_event(
            LessonCompleted(
                learner_id=self.learner_id,
                path_id=self.path_id,
                lesson_id=lesson_id,
                repeated=existing is not None,
                streak_days=self.streak_days,
            )
        )
        return completion

    def submit_assessment(
        self,
        week: int,
        score: int,
        now: datetime,
        duration_weeks: int,
        feedback: str | None = None,
        strengths: list[str] | None = None,
        areas_to_improve: list[str] | None = None,
        passing_score: int = 0,
    ) -> CheckpointDecision:
        """
        Record a weekly assessment and move the checkpoint if it applies.

        Args:
            week: Week the assessment is for
            score: Score in 0..100, always authoritative
            now: Submission instant
            duration_weeks: Total weeks of the learning path
            feedback: Optional feedback text
            strengths: Optional strengths list
            areas_to_improve: Optional list of areas to improve
            passing_score: Minimum score required to advance

        Returns:
            The checkpoint decision that was applied

        Raises:
            ValidationError: If week or score is out of range
        """
        _validate_score(score)
        if week < 1 or week > duration_weeks:
            raise ValidationError(
                f"Week must be between 1 and {duration_weeks}", field="week", value=week
            )

        existing = self.assessments.get(week)
        if existing:
            assessment = existing.resubmit(score, now, feedback, strengths, areas_to_improve)
        else:
            assessment = WeeklyAssessment.create(
                week, score, now, feedback, strengths, areas_to_improve
            )
        self.assessments[week] = assessment

        decision = evaluate_checkpoint(
            self.current_week,
            week,
            duration_weeks,
            score,
            passing_score=passing_score,
            is_completed=self.is_completed,
        )
        self.current_week = decision.current_week
        if decision.outcome == CheckpointOutcome.COMPLETED:
            if not self.is_completed:
                self._record_event(
                    LearningPathCompleted(
                        learner_id=self.learner_id, path_id=self.path_id, completed_at=now
                    )
                )
            # Resubmitting the final week re-stamps the completion time
            self.is_completed = True
            self.completed_at = now

        self._record_event(
            WeeklyAssessmentSubmitted(
                learner_id=self.learner_id,
                path_id=self.path_id,
                week=week,
                score=score,
                outcome=decision.outcome.value,
            )
        )
        return decision

    def review_word(
        self,
        word: str,
        translation: str | None,
        now: datetime,
        mastered: bool | None = None,
        max_interval_days: int | None = None,
    ) -> VocabularyItem:
        """
        Add a vocabulary word or record another review of it.

        Raises:
            ValidationError: If the word is empty, or a new word has no translation
        """
        if not word or not word.strip():
            raise ValidationError("Word cannot be empty", field="word")

        item = review_word(
            self.words.get(word),
            word,
            translation,
            now,
            mastered=mastered,
            max_interval_days=max_interval_days,
        )
        self.words[word] = item

        self._record_event(
            VocabularyWordReviewed(
                learner_id=self.learner_id,
                path_id=self.path_id,
                word=word,
                repetition_count=item.repetition_count,
                next_review_at=item.next_review_at,
            )
        )
        return item

    def due_vocabulary(self, now: datetime) -> list[VocabularyItem]:
        """Words whose next review is at or before ``now``, earliest first."""
        due = [item for item in self.words.values() if is_due(item, now)]
        return sorted(due, key=lambda item: item.next_review_at)

    @classmethod
    def start(cls, learner_id: LearnerId, path_id: LearningPathId, now: datetime) -> "Progress":
        """Create a fresh enrollment at week one (ID will be 0 until persisted)."""
        progress = cls(
            id=ProgressId.generate(),
            learner_id=learner_id,
            path_id=path_id,
            current_week=1,
            streak_days=0,
            last_active_at=now,
        )
        progress._record_event(LearningPathStarted(learner_id=learner_id, path_id=path_id))
        return progress
