"""Pydantic schemas for the learning API."""

from .progress_schemas import (
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

__all__ = [
    "CompleteLessonRequest",
    "LearningPathInfo",
    "LessonCompletion",
    "Progress",
    "ProgressListResponse",
    "VocabularyItem",
    "VocabularyListResponse",
    "VocabularyReviewRequest",
    "WeeklyAssessment",
    "WeeklyAssessmentRequest",
]
