"""Read-only adapter over the languages / learning paths / lessons catalog."""

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from polyglot.application.learning.protocols.learning_catalog import (
    LearningPathSummary,
    LessonSummary,
)
from polyglot.domain.common.value_objects import (
    LanguageId,
    LearningPathId,
    LessonId,
    ProficiencyLevel,
)
from polyglot.domain.learning.exceptions import LearningPathNotFoundError
from polyglot.models import LearningPath as LearningPathORM
from polyglot.models import Lesson as LessonORM


class LearningCatalogRepository:
    """Catalog lookups needed by the progress engine."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_learning_path(self, path_id: LearningPathId) -> LearningPathSummary | None:
        orm_model = self.db.get(LearningPathORM, path_id.value)
        if orm_model is None:
            return None
        return LearningPathSummary(
            id=LearningPathId(orm_model.id),
            language_id=LanguageId(orm_model.language_id),
            title=orm_model.title,
            level=ProficiencyLevel(orm_model.level),
            duration_weeks=orm_model.duration_weeks,
        )

    def get_path_duration(self, path_id: LearningPathId) -> int:
        """
        Get the duration of a learning path in weeks.

        Raises:
            LearningPathNotFoundError: If the path is unknown
        """
        stmt = select(LearningPathORM.duration_weeks).where(LearningPathORM.id == path_id.value)
        duration = self.db.execute(stmt).scalar_one_or_none()
        if duration is None:
            raise LearningPathNotFoundError(path_id.value)
        return duration

    def lesson_exists(self, lesson_id: LessonId) -> bool:
        stmt = select(exists().where(LessonORM.id == lesson_id.value))
        return bool(self.db.execute(stmt).scalar())

    def get_lesson_summaries(self, lesson_ids: list[LessonId]) -> dict[LessonId, LessonSummary]:
        if not lesson_ids:
            return {}
        ids = [lesson_id.value for lesson_id in lesson_ids]
        stmt = select(LessonORM).where(LessonORM.id.in_(ids))
        return {
            LessonId(lesson.id): LessonSummary(
                id=LessonId(lesson.id), title=lesson.title, lesson_type=lesson.lesson_type
            )
            for lesson in self.db.execute(stmt).scalars()
        }
