"""Use cases for reading learner progress."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from polyglot.application.learning.protocols.learning_catalog import (
    LearningCatalogProtocol,
    LearningPathSummary,
    LessonSummary,
)
from polyglot.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from polyglot.application.learning.use_cases.progress.progress_loader import load_progress
from polyglot.domain.common.value_objects import LearnerId, LearningPathId, LessonId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem
from polyglot.domain.learning.exceptions import ProgressNotFoundError
from polyglot.utils import utc_now


@dataclass
class ProgressWithCatalog:
    """DTO pairing an enrollment with the catalog entries it refers to."""

    progress: Progress
    learning_path: LearningPathSummary | None = None
    lessons: dict[LessonId, LessonSummary] = field(default_factory=dict)


class GetLearnerProgressUseCase:
    """Use case for listing and fetching enrollments."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        learning_catalog: LearningCatalogProtocol,
    ) -> None:
        self.progress_repository = progress_repository
        self.learning_catalog = learning_catalog

    def list_progress(self, learner_id: int) -> list[ProgressWithCatalog]:
        """Get every enrollment of a learner with its path and lesson details."""
        enrollments = self.progress_repository.find_all_by_learner(LearnerId(learner_id))
        lesson_ids = list({c.lesson_id for p in enrollments for c in p.lessons_completed})
        lessons = self.learning_catalog.get_lesson_summaries(lesson_ids)
        return [self._with_catalog(progress, lessons) for progress in enrollments]

    def get_progress(self, learner_id: int, path_id: int) -> ProgressWithCatalog:
        """
        Get one enrollment with its path and lesson details.

        Raises:
            ProgressNotFoundError: If the learner has not started the path
        """
        progress = load_progress(
            self.progress_repository, LearnerId(learner_id), LearningPathId(path_id)
        )
        lessons = self.learning_catalog.get_lesson_summaries(
            [c.lesson_id for c in progress.lessons_completed]
        )
        return self._with_catalog(progress, lessons)

    def _with_catalog(
        self, progress: Progress, lessons: dict[LessonId, LessonSummary]
    ) -> ProgressWithCatalog:
        return ProgressWithCatalog(
            progress=progress,
            learning_path=self.learning_catalog.get_learning_path(progress.path_id),
            lessons={
                c.lesson_id: lessons[c.lesson_id]
                for c in progress.lessons_completed
                if c.lesson_id in lessons
            },
        )


class GetDueVocabularyUseCase:
    """Use case for listing the vocabulary due for review."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.progress_repository = progress_repository
        self.clock = clock

    def get_due_words(self, learner_id: int, path_id: int) -> list[VocabularyItem]:
        """
        Get words whose next review is due now, earliest first.

        Raises:
            ProgressNotFoundError: If the learner has not started the path
        """
        learner_id_vo = LearnerId(learner_id)
        path_id_vo = LearningPathId(path_id)
        if not self.progress_repository.exists(learner_id_vo, path_id_vo):
            raise ProgressNotFoundError(learner_id, path_id)
        return self.progress_repository.find_due_vocabulary(learner_id_vo, path_id_vo, self.clock())
