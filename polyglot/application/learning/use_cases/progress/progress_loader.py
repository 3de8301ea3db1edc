"""Shared aggregate loading for progress use cases."""

from polyglot.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from polyglot.domain.common.value_objects import LearnerId, LearningPathId
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.exceptions import ProgressNotFoundError


def load_progress(
    repository: ProgressRepositoryProtocol, learner_id: LearnerId, path_id: LearningPathId
) -> Progress:
    """
    Load an enrollment or fail.

    Raises:
        ProgressNotFoundError: If the learner has not started the learning path
    """
    progress = repository.find_by_learner_and_path(learner_id, path_id)
    if progress is None:
        raise ProgressNotFoundError(learner_id.value, path_id.value)
    return progress
