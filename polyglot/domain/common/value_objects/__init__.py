"""Common value objects shared across bounded contexts."""

from .ids import LanguageId, LearnerId, LearningPathId, LessonId, ProgressId
from .level import ProficiencyLevel

__all__ = [
    "LanguageId",
    "LearnerId",
    "LearningPathId",
    "LessonId",
    "ProficiencyLevel",
    "ProgressId",
]
