"""Create catalog, learner and progress tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_CREATED_AT = {"server_default": sa.text("(CURRENT_TIMESTAMP)"), "nullable": False}


def upgrade() -> None:
    """Create catalog, learner, progress and progress ledger tables."""
    op.create_table(
        "languages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(10), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_languages_id"), "languages", ["id"], unique=False)

    op.create_table(
        "learning_paths",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("language_id", sa.Integer(), nullable=False),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("duration_weeks", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["language_id"], ["languages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_learning_paths_id"), "learning_paths", ["id"], unique=False)
    op.create_index(
        op.f("ix_learning_paths_language_id"), "learning_paths", ["language_id"], unique=False
    )

    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("learning_path_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("lesson_type", sa.String(20), nullable=True),
        sa.ForeignKeyConstraint(["learning_path_id"], ["learning_paths.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_lessons_id"), "lessons", ["id"], unique=False)
    op.create_index(
        op.f("ix_lessons_learning_path_id"), "lessons", ["learning_path_id"], unique=False
    )

    op.create_table(
        "learners",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("native_language", sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_learners_id"), "learners", ["id"], unique=False)

    op.create_table(
        "learner_languages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("learner_id", sa.Integer(), nullable=False),
        sa.Column("language_id", sa.Integer(), nullable=False),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), **_CREATED_AT),
        sa.ForeignKeyConstraint(["learner_id"], ["learners.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["language_id"], ["languages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("learner_id", "language_id", name="uq_learner_language"),
    )
    op.create_index(op.f("ix_learner_languages_id"), "learner_languages", ["id"], unique=False)
    op.create_index(
        op.f("ix_learner_languages_learner_id"), "learner_languages", ["learner_id"], unique=False
    )

    op.create_table(
        "progress",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("learner_id", sa.Integer(), nullable=False),
        sa.Column("learning_path_id", sa.Integer(), nullable=False),
        sa.Column("current_week", sa.Integer(), nullable=False),
        sa.Column("total_time_spent_minutes", sa.Integer(), nullable=False),
        sa.Column("streak_days", sa.Integer(), nullable=False),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), **_CREATED_AT),
        sa.Column("updated_at", sa.DateTime(timezone=True), **_CREATED_AT),
        sa.ForeignKeyConstraint(["learner_id"], ["learners.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["learning_path_id"], ["learning_paths.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("learner_id", "learning_path_id", name="uq_progress_learner_path"),
    )
    op.create_index(op.f("ix_progress_id"), "progress", ["id"], unique=False)
    op.create_index(op.f("ix_progress_learner_id"), "progress", ["learner_id"], unique=False)
    op.create_index(
        op.f("ix_progress_learning_path_id"), "progress", ["learning_path_id"], unique=False
    )

    op.create_table(
        "lesson_completions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("progress_id", sa.Integer(), nullable=False),
        sa.Column("lesson_id", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("time_spent_minutes", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["progress_id"], ["progress.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "progress_id", "lesson_id", name="uq_lesson_completion_progress_lesson"
        ),
    )
    op.create_index(op.f("ix_lesson_completions_id"), "lesson_completions", ["id"], unique=False)
    op.create_index(
        op.f("ix_lesson_completions_progress_id"),
        "lesson_completions",
        ["progress_id"],
        unique=False,
    )

    op.create_table(
        "weekly_assessments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("progress_id", sa.Integer(), nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("strengths", sa.JSON(), nullable=False),
        sa.Column("areas_to_improve", sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(["progress_id"], ["progress.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("progress_id", "week", name="uq_weekly_assessment_progress_week"),
    )
    op.create_index(op.f("ix_weekly_assessments_id"), "weekly_assessments", ["id"], unique=False)
    op.create_index(
        op.f("ix_weekly_assessments_progress_id"),
        "weekly_assessments",
        ["progress_id"],
        unique=False,
    )

    op.create_table(
        "vocabulary_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("progress_id", sa.Integer(), nullable=False),
        sa.Column("word", sa.String(255), nullable=False),
        sa.Column("translation", sa.String(255), nullable=False),
        sa.Column("mastered", sa.Boolean(), nullable=False),
        sa.Column("last_reviewed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("next_review_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("repetition_count", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["progress_id"], ["progress.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("progress_id", "word", name="uq_vocabulary_item_progress_word"),
    )
    op.create_index(op.f("ix_vocabulary_items_id"), "vocabulary_items", ["id"], unique=False)
    op.create_index(
        op.f("ix_vocabulary_items_progress_id"), "vocabulary_items", ["progress_id"], unique=False
    )
    op.create_index(
        op.f("ix_vocabulary_items_next_review_at"),
        "vocabulary_items",
        ["next_review_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index(op.f("ix_vocabulary_items_next_review_at"), table_name="vocabulary_items")
    op.drop_index(op.f("ix_vocabulary_items_progress_id"), table_name="vocabulary_items")
    op.drop_index(op.f("ix_vocabulary_items_id"), table_name="vocabulary_items")
    op.drop_table("vocabulary_items")
    op.drop_index(op.f("ix_weekly_assessments_progress_id"), table_name="weekly_assessments")
    op.drop_index(op.f("ix_weekly_assessments_id"), table_name="weekly_assessments")
    op.drop_table("weekly_assessments")
    op.drop_index(op.f("ix_lesson_completions_progress_id"), table_name="lesson_completions")
    op.drop_index(op.f("ix_lesson_completions_id"), table_name="lesson_completions")
    op.drop_table("lesson_completions")
    op.drop_index(op.f("ix_progress_learning_path_id"), table_name="progress")
    op.drop_index(op.f("ix_progress_learner_id"), table_name="progress")
    op.drop_index(op.f("ix_progress_id"), table_name="progress")
    op.drop_table("progress")
    op.drop_index(op.f("ix_learner_languages_learner_id"), table_name="learner_languages")
    op.drop_index(op.f("ix_learner_languages_id"), table_name="learner_languages")
    op.drop_table("learner_languages")
    op.drop_index(op.f("ix_learners_id"), table_name="learners")
    op.drop_table("learners")
    op.drop_index(op.f("ix_lessons_learning_path_id"), table_name="lessons")
    op.drop_index(op.f("ix_lessons_id"), table_name="lessons")
    op.drop_table("lessons")
    op.drop_index(op.f("ix_learning_paths_language_id"), table_name="learning_paths")
    op.drop_index(op.f("ix_learning_paths_id"), table_name="learning_paths")
    op.drop_table("learning_paths")
    op.drop_index(op.f("ix_languages_id"), table_name="languages")
    op.drop_table("languages")
