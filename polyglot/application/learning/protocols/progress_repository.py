"""Protocol for Progress repository in learning context."""

from datetime import datetime
from typing import Protocol

from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem


class ProgressRepositoryProtocol(Protocol):
    """Protocol for Progress aggregate persistence."""

    def find_by_learner_and_path(
        self, learner_id: LearnerId, path_id: LearningPathId
    ) -> Progress | None:
        """
        Find the enrollment of a learner in a learning path.

        Args:
            learner_id: The learner ID
            path_id: The learning path ID

        Returns:
            Progress aggregate with all its ledgers, or None
        """
        ...

    def find_all_by_learner(self, learner_id: LearnerId) -> list[Progress]:
        """
        Get every enrollment of a learner.

        Returns:
            List of Progress aggregates ordered by creation
        """
        ...

    def exists(self, learner_id: LearnerId, path_id: LearningPathId) -> bool:
        """Check whether the learner is enrolled in the learning path."""
        ...

    def find_due_vocabulary(
        self, learner_id: LearnerId, path_id: LearningPathId, now: datetime
    ) -> list[VocabularyItem]:
        """
        Get vocabulary words due for review.

        Returns:
            Words with next_review_at <= now, earliest first
        """
        ...

    def save(self, progress: Progress) -> Progress:
        """
        Save a Progress aggregate (create or update).

        Changes are flushed, not committed; the unit of work commits.

        Raises:
            TransientPersistenceError: If the aggregate changed since it was loaded
        """
        ...
