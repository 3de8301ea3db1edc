"""Use case for recording a completed lesson."""

from collections.abc import Callable
from datetime import datetime

import structlog

from polyglot.application.common.command import CommandHandler
from polyglot.application.common.retry import run_with_retry
from polyglot.application.common.unit_of_work import UnitOfWork
from polyglot.application.learning.protocols.learning_catalog import LearningCatalogProtocol
from polyglot.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from polyglot.application.learning.use_cases.commands import CompleteLessonCommand
from polyglot.application.learning.use_cases.progress.progress_loader import load_progress
from polyglot.config import get_settings
from polyglot.domain.common.value_objects import LearnerId, LearningPathId, LessonId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.exceptions import LessonNotFoundError
from polyglot.utils import utc_now

logger = structlog.get_logger(__name__)


class CompleteLessonUseCase(CommandHandler[CompleteLessonCommand, Progress]):
    """Use case for completing lessons."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        learning_catalog: LearningCatalogProtocol,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.progress_repository = progress_repository
        self.learning_catalog = learning_catalog
        self.uow = uow
        self.clock = clock
        self.max_attempts = get_settings().PERSISTENCE_MAX_ATTEMPTS

    def handle(self, command: CompleteLessonCommand) -> Progress:
        """
        Record a lesson completion, update time spent and the streak.

        Args:
            command: Completion details; omitted fields keep recorded values

        Returns:
            Updated Progress aggregate

        Raises:
            LessonNotFoundError: If the lesson is unknown to the catalog
            ProgressNotFoundError: If the learner has not started the path
            ValidationError: If score or time spent is out of range
        """
        learner_id = LearnerId(command.learner_id)
        path_id = LearningPathId(command.path_id)
        lesson_id = LessonId(command.lesson_id)

        if not self.learning_catalog.lesson_exists(lesson_id):
            raise LessonNotFoundError(command.lesson_id)

        def complete() -> Progress:
            progress = load_progress(self.progress_repository, learner_id, path_id)
            progress.complete_lesson(
                lesson_id,
                self.clock(),
                score=command.score,
                time_spent_minutes=command.time_spent_minutes,
                notes=command.notes,
            )
            self.uow.track(progress)
            saved = self.progress_repository.save(progress)
            self.uow.commit()
            return saved

        progress = run_with_retry(
            self.uow,
            complete,
            max_attempts=self.max_attempts,
            operation_name="complete_lesson",
            learner_id=command.learner_id,
            path_id=command.path_id,
        )

        logger.info(
            "lesson_completed",
            learner_id=command.learner_id,
            path_id=command.path_id,
            lesson_id=command.lesson_id,
            streak_days=progress.streak_days,
            total_time_spent_minutes=progress.total_time_spent_minutes,
        )
        return progress
