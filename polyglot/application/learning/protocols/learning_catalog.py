"""Protocol for the content catalog collaborator."""

from dataclasses import dataclass
from typing import Protocol

from polyglot.domain.common.value_objects import (
    LanguageId,
    LearningPathId,
    LessonId,
    ProficiencyLevel,
)


@dataclass(frozen=True)
class LearningPathSummary:
    """What the progress engine needs to know about a learning path."""

    id: LearningPathId
    language_id: LanguageId
    title: str
    level: ProficiencyLevel
    duration_weeks: int


@dataclass(frozen=True)
class LessonSummary:
    id: LessonId
    title: str
    lesson_type: str | None = None


class LearningCatalogProtocol(Protocol):
    """Read-only lookups into the languages / lessons / learning paths catalog."""

    def get_learning_path(self, path_id: LearningPathId) -> LearningPathSummary | None:
        """Get a learning path summary, or None if unknown."""
        ...

    def get_path_duration(self, path_id: LearningPathId) -> int:
        """
        Get the duration of a learning path in weeks.

        Raises:
            LearningPathNotFoundError: If the path is unknown
        """
        ...

    def lesson_exists(self, lesson_id: LessonId) -> bool:
        """Check whether the catalog knows a lesson."""
        ...

    def get_lesson_summaries(self, lesson_ids: list[LessonId]) -> dict[LessonId, LessonSummary]:
        """Get title and type of the given lessons; unknown ids are left out."""
        ...
