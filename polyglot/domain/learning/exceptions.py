"""Learning context domain exceptions."""

from polyglot.domain.common.exceptions import BusinessRuleViolationError, EntityNotFoundError


class ProgressNotFoundError(EntityNotFoundError):
    """The learner has not started this learning path."""

    def __init__(self, learner_id: int, path_id: int) -> None:
        super().__init__(
            "Progress", path_id, message=f"No progress found for learning path {path_id}"
        )
        self.details["learner_id"] = learner_id
        self.learner_id = learner_id
        self.path_id = path_id


class LearningPathNotFoundError(EntityNotFoundError):
    def __init__(self, path_id: int) -> None:
        super().__init__("Learning path", path_id)
        self.path_id = path_id


class LessonNotFoundError(EntityNotFoundError):
    def __init__(self, lesson_id: int) -> None:
        super().__init__("Lesson", lesson_id)
        self.lesson_id = lesson_id


class AlreadyEnrolledError(BusinessRuleViolationError):
    """A learner can hold only one enrollment per learning path."""

    def __init__(self, learner_id: int, path_id: int) -> None:
        super().__init__(
            "single_enrollment_per_path",
            f"Learner has already started learning path {path_id}",
            learner_id=learner_id,
            path_id=path_id,
        )
        self.learner_id = learner_id
        self.path_id = path_id
