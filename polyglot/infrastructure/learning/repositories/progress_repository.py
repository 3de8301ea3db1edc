"""Repository for Progress domain aggregates."""

from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from polyglot.application.common.retry import TransientPersistenceError
from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem
from polyglot.domain.learning.exceptions import AlreadyEnrolledError
from polyglot.infrastructure.learning.mappers.progress_mapper import ProgressMapper
from polyglot.models import Progress as ProgressORM
from polyglot.models import VocabularyItem as VocabularyItemORM


class ProgressRepository:
    """Repository for Progress domain aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgressMapper()

    def find_by_learner_and_path(
        self, learner_id: LearnerId, path_id: LearningPathId
    ) -> Progress | None:
        """
        Find the enrollment of a learner in a learning path.

        Args:
            learner_id: The learner ID
            path_id: The learning path ID

        Returns:
            Progress aggregate if the learner started the path, None otherwise
        """
        stmt = select(ProgressORM).where(
            ProgressORM.learner_id == learner_id.value,
            ProgressORM.learning_path_id == path_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all_by_learner(self, learner_id: LearnerId) -> list[Progress]:
        """
        Get every enrollment of a learner.

        Args:
            learner_id: The learner ID

        Returns:
            List of Progress aggregates ordered by creation
        """
        stmt = (
            select(ProgressORM)
            .where(ProgressORM.learner_id == learner_id.value)
            .order_by(ProgressORM.created_at, ProgressORM.id)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def exists(self, learner_id: LearnerId, path_id: LearningPathId) -> bool:
        stmt = select(
            exists().where(
                ProgressORM.learner_id == learner_id.value,
                ProgressORM.learning_path_id == path_id.value,
            )
        )
        return bool(self.db.execute(stmt).scalar())

    def find_due_vocabulary(
        self, learner_id: LearnerId, path_id: LearningPathId, now: datetime
    ) -> list[VocabularyItem]:
        """
        Get vocabulary words due for review.

        Args:
            learner_id: The learner ID
            path_id: The learning path ID
            now: Reference instant

        Returns:
            Words with next_review_at <= now, earliest first
        """
        stmt = (
            select(VocabularyItemORM)
            .join(ProgressORM, VocabularyItemORM.progress_id == ProgressORM.id)
            .where(
                ProgressORM.learner_id == learner_id.value,
                ProgressORM.learning_path_id == path_id.value,
                VocabularyItemORM.next_review_at <= now,
            )
            .order_by(VocabularyItemORM.next_review_at, VocabularyItemORM.id)
        )
        rows = self.db.execute(stmt).scalars().all()
        return [self.mapper.vocabulary_to_domain(row) for row in rows]

    def save(self, progress: Progress) -> Progress:
        """
        Save a Progress aggregate (create or update).

        Changes are flushed so database-generated values are available, but
        committing is left to the unit of work.

        Args:
            progress: The Progress aggregate to save

        Returns:
            Saved Progress aggregate with database-generated values

        Raises:
            AlreadyEnrolledError: If a concurrent enrollment won the unique constraint
            TransientPersistenceError: If the row changed since it was loaded,
                or the database is temporarily unavailable
        """
        if progress.id.value == 0:
            # Create new
            orm_model = self.mapper.to_orm(progress)
            self.db.add(orm_model)
            try:
                self.db.flush()
            except IntegrityError as e:
                raise AlreadyEnrolledError(
                    progress.learner_id.value, progress.path_id.value
                ) from e
            except OperationalError as e:
                raise TransientPersistenceError(str(e)) from e
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

        # Update existing
        orm_model = self.db.get(ProgressORM, progress.id.value)
        if not orm_model:
            raise ValueError(f"Progress {progress.id.value} not found")
        if orm_model.version != progress.version:
            raise TransientPersistenceError(
                f"Progress {progress.id.value} changed since it was loaded"
            )
        self.mapper.to_orm(progress, orm_model)
        try:
            self.db.flush()
        except (StaleDataError, OperationalError) as e:
            raise TransientPersistenceError(str(e)) from e
        return self.mapper.to_domain(orm_model)
