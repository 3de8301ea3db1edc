"""Use case for adding or reviewing a vocabulary word."""

from collections.abc import Callable
from datetime import datetime

import structlog

from polyglot.application.common.command import CommandHandler
from polyglot.application.common.retry import run_with_retry
from polyglot.application.common.unit_of_work import UnitOfWork
from polyglot.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from polyglot.application.learning.use_cases.commands import ReviewVocabularyWordCommand
from polyglot.application.learning.use_cases.progress.progress_loader import load_progress
from polyglot.config import get_settings
from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.utils import utc_now

logger = structlog.get_logger(__name__)


class ReviewVocabularyWordUseCase(CommandHandler[ReviewVocabularyWordCommand, Progress]):
    """Use case for vocabulary reviews."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.progress_repository = progress_repository
        self.uow = uow
        self.clock = clock

        settings = get_settings()
        self.max_attempts = settings.PERSISTENCE_MAX_ATTEMPTS
        self.max_interval_days = settings.VOCABULARY_MAX_INTERVAL_DAYS

    def handle(self, command: ReviewVocabularyWordCommand) -> Progress:
        """
        Add a word to the enrollment's vocabulary or record another review.

        Returns:
            Updated Progress aggregate

        Raises:
            ProgressNotFoundError: If the learner has not started the path
            ValidationError: If the word is empty or a new word has no translation
        """
        learner_id = LearnerId(command.learner_id)
        path_id = LearningPathId(command.path_id)

        def review() -> Progress:
            progress = load_progress(self.progress_repository, learner_id, path_id)
            item = progress.review_word(
                command.word,
                command.translation,
                self.clock(),
                mastered=command.mastered,
                max_interval_days=self.max_interval_days,
            )
            self.uow.track(progress)
            saved = self.progress_repository.save(progress)
            self.uow.commit()

            logger.info(
                "vocabulary_word_reviewed",
                learner_id=command.learner_id,
                path_id=command.path_id,
                repetition_count=item.repetition_count,
                next_review_at=item.next_review_at.isoformat(),
            )
            return saved

        return run_with_retry(
            self.uow,
            review,
            max_attempts=self.max_attempts,
            operation_name="review_vocabulary_word",
            learner_id=command.learner_id,
            path_id=command.path_id,
        )
