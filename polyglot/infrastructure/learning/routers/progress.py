"""API routes for learner progress in learning paths."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from polyglot.application.learning.protocols.learning_catalog import LessonSummary
from polyglot.application.learning.use_cases.commands import (
    CompleteLessonCommand,
    ReviewVocabularyWordCommand,
    StartLearningPathCommand,
    SubmitWeeklyAssessmentCommand,
)
from polyglot.application.learning.use_cases.progress.complete_lesson_use_case import (
    CompleteLessonUseCase,
)
from polyglot.application.learning.use_cases.progress.get_progress_use_case import (
    GetDueVocabularyUseCase,
    GetLearnerProgressUseCase,
    ProgressWithCatalog,
)
from polyglot.application.learning.use_cases.progress.review_vocabulary_word_use_case import (
    ReviewVocabularyWordUseCase,
)
from polyglot.application.learning.use_cases.progress.start_learning_path_use_case import (
    StartLearningPathUseCase,
)
from polyglot.application.learning.use_cases.progress.submit_weekly_assessment_use_case import (
    SubmitWeeklyAssessmentUseCase,
)
from polyglot.core import container
from polyglot.domain.common.exceptions import DomainError
from polyglot.domain.learning.entities.lesson_completion import (
    LessonCompletion as LessonCompletionEntity,
)
from polyglot.domain.learning.entities.progress import Progress as ProgressEntity
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem as VocabularyEntity
from polyglot.exceptions import PolyglotError
from polyglot.infrastructure.common.di import inject_use_case
from polyglot.infrastructure.identity.dependencies import CurrentLearner
from polyglot.infrastructure.learning.schemas import (
    CompleteLessonRequest,
    LearningPathInfo,
    LessonCompletion,
    Progress,
    ProgressListResponse,
    VocabularyItem,
    VocabularyListResponse,
    VocabularyReviewRequest,
    WeeklyAssessment,
    WeeklyAssessmentRequest,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


def _vocabulary_to_schema(item: VocabularyEntity) -> VocabularyItem:
    return VocabularyItem(
        word=item.word,
        translation=item.translation,
        mastered=item.mastered,
        last_reviewed_at=item.last_reviewed_at,
        next_review_at=item.next_review_at,
        repetition_count=item.repetition_count,
    )


def _lesson_to_schema(
    completion: LessonCompletionEntity, summary: LessonSummary | None
) -> LessonCompletion:
    return LessonCompletion(
        lesson_id=completion.lesson_id.value,
        title=summary.title if summary else None,
        lesson_type=summary.lesson_type if summary else None,
        completed_at=completion.completed_at,
        score=completion.score,
        time_spent_minutes=completion.time_spent_minutes,
        notes=completion.notes,
    )


def _progress_to_schema(
    progress: ProgressEntity, details: ProgressWithCatalog | None = None
) -> Progress:
    # Catalog details are only attached on reads
    path = details.learning_path if details else None
    lessons = details.lessons if details else {}
    return Progress(
        id=progress.id.value,
        learner_id=progress.learner_id.value,
        path_id=progress.path_id.value,
        learning_path=(
            LearningPathInfo(
                id=path.id.value,
                title=path.title,
                level=path.level.value,
                duration_weeks=path.duration_weeks,
            )
            if path
            else None
        ),
        current_week=progress.current_week,
        is_completed=progress.is_completed,
        completed_at=progress.completed_at,
        lessons_completed=[
            _lesson_to_schema(completion, lessons.get(completion.lesson_id))
            for completion in progress.lessons_completed
        ],
        weekly_assessments=[
            WeeklyAssessment(
                week=assessment.week,
                score=assessment.score,
                completed_at=assessment.completed_at,
                feedback=assessment.feedback,
                strengths=list(assessment.strengths),
                areas_to_improve=list(assessment.areas_to_improve),
            )
            for assessment in progress.weekly_assessments
        ],
        vocabulary=[_vocabulary_to_schema(item) for item in progress.vocabulary],
        total_time_spent_minutes=progress.total_time_spent_minutes,
        streak_days=progress.streak_days,
        last_active_at=progress.last_active_at,
        created_at=progress.created_at,
        updated_at=progress.updated_at,
    )


def _unexpected(
    operation: str, learner_id: int, path_id: int | None, e: Exception
) -> HTTPException:
    logger.error(
        "progress_operation_failed",
        operation=operation,
        learner_id=learner_id,
        path_id=path_id,
        failure_kind="unexpected",
        error=str(e),
        exc_info=True,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.get("", response_model=ProgressListResponse, status_code=status.HTTP_200_OK)
def list_progress(
    learner_id: CurrentLearner,
    use_case: GetLearnerProgressUseCase = Depends(
        inject_use_case(container.get_learner_progress_use_case)
    ),
) -> ProgressListResponse:
    """Get the calling learner's progress in every started learning path."""
    try:
        progress = use_case.list_progress(learner_id)
        return ProgressListResponse(
            progress=[_progress_to_schema(d.progress, d) for d in progress]
        )
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("list_progress", learner_id, None, e) from e


@router.get("/{path_id}", response_model=Progress, status_code=status.HTTP_200_OK)
def get_progress(
    path_id: int,
    learner_id: CurrentLearner,
    use_case: GetLearnerProgressUseCase = Depends(
        inject_use_case(container.get_learner_progress_use_case)
    ),
) -> Progress:
    """
    Get the calling learner's progress in one learning path.

    Raises:
        HTTPException: 404 if the learner has not started the path
    """
    try:
        details = use_case.get_progress(learner_id, path_id)
        return _progress_to_schema(details.progress, details)
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("get_progress", learner_id, path_id, e) from e


@router.post("/start/{path_id}", response_model=Progress, status_code=status.HTTP_201_CREATED)
def start_learning_path(
    path_id: int,
    learner_id: CurrentLearner,
    use_case: StartLearningPathUseCase = Depends(
        inject_use_case(container.start_learning_path_use_case)
    ),
) -> Progress:
    """
    Start a learning path.

    Args:
        path_id: Learning path to enroll in
        learner_id: Calling learner
        use_case: StartLearningPathUseCase injected via dependency container

    Returns:
        The new progress record at week one

    Raises:
        HTTPException: 404 for an unknown path, 409 if already started
    """
    try:
        progress = use_case.handle(StartLearningPathCommand(learner_id=learner_id, path_id=path_id))
        return _progress_to_schema(progress)
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("start_learning_path", learner_id, path_id, e) from e


@router.post("/complete-lesson", response_model=Progress, status_code=status.HTTP_200_OK)
def complete_lesson(
    request: CompleteLessonRequest,
    learner_id: CurrentLearner,
    use_case: CompleteLessonUseCase = Depends(inject_use_case(container.complete_lesson_use_case)),
) -> Progress:
    """
    Record a finished lesson.

    Repeating a lesson updates its record; supplied time is always added to
    the running total.
    """
    try:
        progress = use_case.handle(
            CompleteLessonCommand(
                learner_id=learner_id,
                path_id=request.path_id,
                lesson_id=request.lesson_id,
                score=request.score,
                time_spent_minutes=request.time_spent_minutes,
                notes=request.notes,
            )
        )
        return _progress_to_schema(progress)
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("complete_lesson", learner_id, request.path_id, e) from e


@router.post("/weekly-assessment", response_model=Progress, status_code=status.HTTP_200_OK)
def submit_weekly_assessment(
    request: WeeklyAssessmentRequest,
    learner_id: CurrentLearner,
    use_case: SubmitWeeklyAssessmentUseCase = Depends(
        inject_use_case(container.submit_weekly_assessment_use_case)
    ),
) -> Progress:
    """
    Submit a weekly assessment.

    Submitting the current week advances the learner one week, or completes
    the path when it is the last week.
    """
    try:
        progress = use_case.handle(
            SubmitWeeklyAssessmentCommand(
                learner_id=learner_id,
                path_id=request.path_id,
                week=request.week,
                score=request.score,
                feedback=request.feedback,
                strengths=request.strengths,
                areas_to_improve=request.areas_to_improve,
            )
        )
        return _progress_to_schema(progress)
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("submit_weekly_assessment", learner_id, request.path_id, e) from e


@router.post("/vocabulary", response_model=VocabularyListResponse, status_code=status.HTTP_200_OK)
def review_vocabulary_word(
    request: VocabularyReviewRequest,
    learner_id: CurrentLearner,
    use_case: ReviewVocabularyWordUseCase = Depends(
        inject_use_case(container.review_vocabulary_word_use_case)
    ),
) -> VocabularyListResponse:
    """Add a vocabulary word, or record another review of a known one."""
    try:
        progress = use_case.handle(
            ReviewVocabularyWordCommand(
                learner_id=learner_id,
                path_id=request.path_id,
                word=request.word,
                translation=request.translation,
                mastered=request.mastered,
            )
        )
        return VocabularyListResponse(
            vocabulary=[_vocabulary_to_schema(item) for item in progress.vocabulary]
        )
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("review_vocabulary_word", learner_id, request.path_id, e) from e


@router.get(
    "/{path_id}/vocabulary/due",
    response_model=VocabularyListResponse,
    status_code=status.HTTP_200_OK,
)
def get_due_vocabulary(
    path_id: int,
    learner_id: CurrentLearner,
    use_case: GetDueVocabularyUseCase = Depends(
        inject_use_case(container.get_due_vocabulary_use_case)
    ),
) -> VocabularyListResponse:
    """Get the words due for review now, earliest first."""
    try:
        words = use_case.get_due_words(learner_id, path_id)
        return VocabularyListResponse(vocabulary=[_vocabulary_to_schema(w) for w in words])
    except (PolyglotError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("get_due_vocabulary", learner_id, path_id, e) from e
