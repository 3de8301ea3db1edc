"""Pydantic schemas for Progress API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelCaseRequest(BaseModel):
    """Request body accepting both snake_case and camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompleteLessonRequest(CamelCaseRequest):
    """Schema for recording a finished lesson."""

    path_id: int = Field(..., ge=1, description="Learning path the lesson belongs to")
    lesson_id: int = Field(..., ge=1, description="Completed lesson")
    score: int | None = Field(None, ge=0, le=100, description="Optional lesson score")
    time_spent_minutes: int | None = Field(None, ge=0, description="Minutes spent on the lesson")
    notes: str | None = Field(None, description="Optional notes")


class WeeklyAssessmentRequest(CamelCaseRequest):
    """Schema for submitting a weekly checkpoint assessment."""

    path_id: int = Field(..., ge=1, description="Learning path being assessed")
    week: int = Field(..., ge=1, description="Week the assessment is for")
    score: int = Field(..., ge=0, le=100, description="Assessment score")
    feedback: str | None = Field(None, description="Optional feedback")
    strengths: list[str] | None = Field(None, description="Replaces recorded strengths")
    areas_to_improve: list[str] | None = Field(
        None, description="Replaces recorded areas to improve"
    )


class VocabularyReviewRequest(CamelCaseRequest):
    """Schema for adding or reviewing a vocabulary word."""

    path_id: int = Field(..., ge=1, description="Learning path the word belongs to")
    word: str = Field(..., min_length=1, description="Word, matched literally")
    translation: str | None = Field(None, description="Required for a new word")
    mastered: bool | None = Field(None, description="Optional mastered flag")


class LessonCompletion(BaseModel):
    """Schema for a completed lesson."""

    lesson_id: int
    title: str | None = Field(None, description="Lesson title, on reads only")
    lesson_type: str | None = Field(None, description="Lesson type, on reads only")
    completed_at: datetime
    score: int | None = None
    time_spent_minutes: int | None = None
    notes: str | None = None


class WeeklyAssessment(BaseModel):
    """Schema for a weekly assessment."""

    week: int
    score: int
    completed_at: datetime
    feedback: str | None = None
    strengths: list[str] = Field(default_factory=list)
    areas_to_improve: list[str] = Field(default_factory=list)


class VocabularyItem(BaseModel):
    """Schema for a vocabulary word under review."""

    word: str
    translation: str
    mastered: bool
    last_reviewed_at: datetime
    next_review_at: datetime
    repetition_count: int


class LearningPathInfo(BaseModel):
    """Schema for the catalog details of a learning path."""

    id: int
    title: str
    level: str
    duration_weeks: int


class Progress(BaseModel):
    """Schema for a learner's progress in one learning path."""

    id: int
    learner_id: int
    path_id: int
    learning_path: LearningPathInfo | None = Field(
        None, description="Catalog details of the path, on reads only"
    )
    current_week: int
    is_completed: bool
    completed_at: datetime | None = None
    lessons_completed: list[LessonCompletion]
    weekly_assessments: list[WeeklyAssessment]
    vocabulary: list[VocabularyItem]
    total_time_spent_minutes: int
    streak_days: int
    last_active_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProgressListResponse(BaseModel):
    """Schema for the list of a learner's progress records."""

    progress: list[Progress] = Field(..., description="One entry per started learning path")


class VocabularyListResponse(BaseModel):
    """Schema for a list of vocabulary words."""

    vocabulary: list[VocabularyItem] = Field(..., description="Vocabulary words")
