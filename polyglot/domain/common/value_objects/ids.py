from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class LearnerId(EntityId):
    """Strongly-typed learner identifier."""

    value: int


@dataclass(frozen=True)
class LearningPathId(EntityId):
    """Strongly-typed learning path identifier."""

    value: int


@dataclass(frozen=True)
class LessonId(EntityId):
    """Strongly-typed lesson identifier."""

    value: int


@dataclass(frozen=True)
class LanguageId(EntityId):
    """Strongly-typed language identifier."""

    value: int


@dataclass(frozen=True)
class ProgressId(EntityId):
    """Strongly-typed progress (enrollment) identifier."""

    value: int

    @classmethod
    def generate(cls) -> "ProgressId":
        return cls(0)  # Database assigns real ID
