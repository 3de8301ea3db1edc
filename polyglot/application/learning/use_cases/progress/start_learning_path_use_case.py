"""Use case for enrolling a learner in a learning path."""

from collections.abc import Callable
from datetime import datetime

import structlog

from polyglot.application.common.command import CommandHandler
from polyglot.application.common.retry import run_with_retry
from polyglot.application.common.unit_of_work import UnitOfWork
from polyglot.application.learning.protocols.learner_portfolio import LearnerPortfolioProtocol
from polyglot.application.learning.protocols.learning_catalog import LearningCatalogProtocol
from polyglot.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from polyglot.application.learning.use_cases.commands import StartLearningPathCommand
from polyglot.config import get_settings
from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.exceptions import AlreadyEnrolledError, LearningPathNotFoundError
from polyglot.utils import utc_now

logger = structlog.get_logger(__name__)


class StartLearningPathUseCase(CommandHandler[StartLearningPathCommand, Progress]):
    """Use case for starting a learning path."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        learning_catalog: LearningCatalogProtocol,
        learner_portfolio: LearnerPortfolioProtocol,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.progress_repository = progress_repository
        self.learning_catalog = learning_catalog
        self.learner_portfolio = learner_portfolio
        self.uow = uow
        self.clock = clock
        self.max_attempts = get_settings().PERSISTENCE_MAX_ATTEMPTS

    def handle(self, command: StartLearningPathCommand) -> Progress:
        """
        Enroll a learner in a learning path.

        Creates the Progress aggregate at week one and adds the path's
        language to the learner's portfolio in the same unit of work, so
        both writes commit or neither does.

        Args:
            command: Learner and learning path to enroll

        Returns:
            The new Progress aggregate

        Raises:
            LearningPathNotFoundError: If the learning path is unknown
            AlreadyEnrolledError: If the learner already started this path
        """
        learner_id = LearnerId(command.learner_id)
        path_id = LearningPathId(command.path_id)

        learning_path = self.learning_catalog.get_learning_path(path_id)
        if learning_path is None:
            raise LearningPathNotFoundError(command.path_id)

        def enroll() -> Progress:
            if self.progress_repository.exists(learner_id, path_id):
                raise AlreadyEnrolledError(command.learner_id, command.path_id)

            progress = Progress.start(learner_id, path_id, self.clock())
            self.uow.track(progress)
            saved = self.progress_repository.save(progress)
            language_added = self.learner_portfolio.add_learning_language(
                learner_id, learning_path.language_id, learning_path.level
            )
            self.uow.commit()

            logger.info(
                "learning_path_started",
                learner_id=command.learner_id,
                path_id=command.path_id,
                progress_id=saved.id.value,
                language_added=language_added,
            )
            return saved

        return run_with_retry(
            self.uow,
            enroll,
            max_attempts=self.max_attempts,
            operation_name="start_learning_path",
            learner_id=command.learner_id,
            path_id=command.path_id,
        )
