"""Commands of the learning use cases."""

from dataclasses import dataclass

from polyglot.application.common.command import Command


@dataclass(frozen=True)
class StartLearningPathCommand(Command):
    learner_id: int
    path_id: int


@dataclass(frozen=True)
class CompleteLessonCommand(Command):
    learner_id: int
    path_id: int
    lesson_id: int
    score: int | None = None
    time_spent_minutes: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SubmitWeeklyAssessmentCommand(Command):
    learner_id: int
    path_id: int
    week: int
    score: int
    feedback: str | None = None
    strengths: list[str] | None = None
    areas_to_improve: list[str] | None = None


@dataclass(frozen=True)
class ReviewVocabularyWordCommand(Command):
    learner_id: int
    path_id: int
    word: str
    translation: str | None = None
    mastered: bool | None = None
