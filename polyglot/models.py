"""Database models."""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polyglot.database import Base


class Language(Base):
    """Language offered by the catalog."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"<Language(id={self.id}, code='{self.code}')>"


class LearningPath(Base):
    """Catalog learning path, a sequence of weeks at one level of one language."""

    __tablename__ = "learning_paths"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    level: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=8)

    def __repr__(self) -> str:
        return f"<LearningPath(id={self.id}, title='{self.title}')>"


class Lesson(Base):
    """Catalog lesson."""

    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    learning_path_id: Mapped[int | None] = mapped_column(
        ForeignKey("learning_paths.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    lesson_type: Mapped[str | None] = mapped_column(String(20), nullable=True)


class Learner(Base):
    """Learner record owned by the identity service."""

    __tablename__ = "learners"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    native_language: Mapped[str | None] = mapped_column(String(100), nullable=True)

    languages: Mapped[list["LearnerLanguage"]] = relationship(
        back_populates="learner", cascade="all, delete-orphan"
    )


class LearnerLanguage(Base):
    """Entry of a learner's language portfolio."""

    __tablename__ = "learner_languages"
    __table_args__ = (
        UniqueConstraint("learner_id", "language_id", name="uq_learner_language"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    learner_id: Mapped[int] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id", ondelete="CASCADE"), nullable=False
    )
    level: Mapped[str] = mapped_column(String(20), nullable=False, default="beginner")
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    learner: Mapped[Learner] = relationship(back_populates="languages")


class Progress(Base):
    """Enrollment of a learner in a learning path."""

    __tablename__ = "progress"
    __table_args__ = (
        UniqueConstraint("learner_id", "learning_path_id", name="uq_progress_learner_path"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    learner_id: Mapped[int] = mapped_column(
        ForeignKey("learners.id", ondelete="CASCADE"), nullable=False, index=True
    )
    learning_path_id: Mapped[int] = mapped_column(
        ForeignKey("learning_paths.id", ondelete="CASCADE"), nullable=False, index=True
    )
    current_week: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_time_spent_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    streak_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    lessons_completed: Mapped[list["LessonCompletion"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="LessonCompletion.id",
    )
    weekly_assessments: Mapped[list["WeeklyAssessment"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="WeeklyAssessment.week",
    )
    vocabulary_items: Mapped[list["VocabularyItem"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="VocabularyItem.id",
    )

    # Optimistic concurrency: every UPDATE checks and bumps the version
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return (
            f"<Progress(id={self.id}, learner_id={self.learner_id}, "
            f"learning_path_id={self.learning_path_id}, current_week={self.current_week})>"
        )


class LessonCompletion(Base):
    """Completed lesson within an enrollment."""

    __tablename__ = "lesson_completions"
    __table_args__ = (
        UniqueConstraint("progress_id", "lesson_id", name="uq_lesson_completion_progress_lesson"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    progress_id: Mapped[int] = mapped_column(
        ForeignKey("progress.id", ondelete="CASCADE"), nullable=False, index=True
    )
    lesson_id: Mapped[int] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False
    )
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    time_spent_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    progress: Mapped[Progress] = relationship(back_populates="lessons_completed")


class WeeklyAssessment(Base):
    """Weekly checkpoint assessment within an enrollment."""

    __tablename__ = "weekly_assessments"
    __table_args__ = (
        UniqueConstraint("progress_id", "week", name="uq_weekly_assessment_progress_week"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    progress_id: Mapped[int] = mapped_column(
        ForeignKey("progress.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    strengths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    areas_to_improve: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    progress: Mapped[Progress] = relationship(back_populates="weekly_assessments")


class VocabularyItem(Base):
    """Vocabulary word scheduled for spaced repetition within an enrollment."""

    __tablename__ = "vocabulary_items"
    __table_args__ = (
        UniqueConstraint("progress_id", "word", name="uq_vocabulary_item_progress_word"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    progress_id: Mapped[int] = mapped_column(
        ForeignKey("progress.id", ondelete="CASCADE"), nullable=False, index=True
    )
    word: Mapped[str] = mapped_column(String(255), nullable=False)
    translation: Mapped[str] = mapped_column(String(255), nullable=False)
    mastered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_reviewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    next_review_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    repetition_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    progress: Mapped[Progress] = relationship(back_populates="vocabulary_items")
