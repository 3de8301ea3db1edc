"""Use case for submitting a weekly checkpoint assessment."""

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
from polyglot.application.learning.use_cases.commands import SubmitWeeklyAssessmentCommand
from polyglot.application.learning.use_cases.progress.progress_loader import load_progress
from polyglot.config import get_settings
from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.utils import utc_now

logger = structlog.get_logger(__name__)


class SubmitWeeklyAssessmentUseCase(CommandHandler[SubmitWeeklyAssessmentCommand, Progress]):
    """Use case for weekly assessments."""

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

        settings = get_settings()
        self.max_attempts = settings.PERSISTENCE_MAX_ATTEMPTS
        self.passing_score = settings.CHECKPOINT_PASSING_SCORE

    def handle(self, command: SubmitWeeklyAssessmentCommand) -> Progress:
        """
        Record a weekly assessment and advance the checkpoint.

        Only an assessment for the current week moves the enrollment: to the
        next week, or to completed after the final week.

        Args:
            command: Assessment details; omitted fields keep recorded values

        Returns:
            Updated Progress aggregate

        Raises:
            LearningPathNotFoundError: If the learning path is unknown
            ProgressNotFoundError: If the learner has not started the path
            ValidationError: If week or score is out of range
        """
        learner_id = LearnerId(command.learner_id)
        path_id = LearningPathId(command.path_id)
        duration_weeks = self.learning_catalog.get_path_duration(path_id)

        def submit() -> Progress:
            progress = load_progress(self.progress_repository, learner_id, path_id)
            decision = progress.submit_assessment(
                command.week,
                command.score,
                self.clock(),
                duration_weeks,
                feedback=command.feedback,
                strengths=command.strengths,
                areas_to_improve=command.areas_to_improve,
                passing_score=self.passing_score,
            )
            self.uow.track(progress)
            saved = self.progress_repository.save(progress)
            self.uow.commit()

            logger.info(
                "weekly_assessment_submitted",
                learner_id=command.learner_id,
                path_id=command.path_id,
                week=command.week,
                score=command.score,
                outcome=decision.outcome.value,
                current_week=decision.current_week,
            )
            return saved

        return run_with_retry(
            self.uow,
            submit,
            max_attempts=self.max_attempts,
            operation_name="submit_weekly_assessment",
            learner_id=command.learner_id,
            path_id=command.path_id,
        )
