"""Domain events raised by the Progress aggregate."""

from dataclasses import dataclass
from datetime import datetime

from polyglot.domain.common.domain_event import DomainEvent
from polyglot.domain.common.value_objects import LearnerId, LearningPathId, LessonId


@dataclass(frozen=True, kw_only=True)
class ProgressEvent(DomainEvent):
    """Event about one learner's enrollment in one learning path."""

    learner_id: LearnerId
    path_id: LearningPathId


@dataclass(frozen=True, kw_only=True)
class LearningPathStarted(ProgressEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class LessonCompleted(ProgressEvent):
    lesson_id: LessonId
    repeated: bool
    streak_days: int


@dataclass(frozen=True, kw_only=True)
class WeeklyAssessmentSubmitted(ProgressEvent):
    week: int
    score: int
    outcome: str


@dataclass(frozen=True, kw_only=True)
class LearningPathCompleted(ProgressEvent):
    completed_at: datetime


@dataclass(frozen=True, kw_only=True)
class VocabularyWordReviewed(ProgressEvent):
    word: str
    repetition_count: int
    next_review_at: datetime
