"""Mapper for Progress ORM ↔ Domain conversion."""

from datetime import datetime

from polyglot.domain.common.value_objects import LearnerId, LearningPathId, LessonId, ProgressId
from polyglot.domain.learning.entities.lesson_completion import LessonCompletion
from polyglot.domain.learning.entities.progress import Progress
from polyglot.domain.learning.entities.vocabulary_item import VocabularyItem
from polyglot.domain.learning.entities.weekly_assessment import WeeklyAssessment
from polyglot.domain.learning.services.streak_calculator import to_utc
from polyglot.models import LessonCompletion as LessonCompletionORM
from polyglot.models import Progress as ProgressORM
from polyglot.models import VocabularyItem as VocabularyItemORM
from polyglot.models import WeeklyAssessment as WeeklyAssessmentORM
from polyglot.utils import utc_now


def _utc(value: datetime | None) -> datetime | None:
    # SQLite returns naive datetimes for timezone-aware columns
    return to_utc(value) if value is not None else None


class ProgressMapper:
    """Mapper for Progress ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ProgressORM) -> Progress:
        """
        Convert ORM model, with its child rows, to the domain aggregate.

        Uses the constructor directly (NOT the start factory) so no events
        are recorded on reconstitution.
        """
        lessons = {
            LessonId(row.lesson_id): self.lesson_to_domain(row)
            for row in orm_model.lessons_completed
        }
        assessments = {
            row.week: self.assessment_to_domain(row) for row in orm_model.weekly_assessments
        }
        words = {row.word: self.vocabulary_to_domain(row) for row in orm_model.vocabulary_items}

        return Progress(
            id=ProgressId(orm_model.id),
            learner_id=LearnerId(orm_model.learner_id),
            path_id=LearningPathId(orm_model.learning_path_id),
            current_week=orm_model.current_week,
            is_completed=orm_model.is_completed,
            completed_at=_utc(orm_model.completed_at),
            lessons=lessons,
            assessments=assessments,
            words=words,
            total_time_spent_minutes=orm_model.total_time_spent_minutes,
            streak_days=orm_model.streak_days,
            last_active_at=_utc(orm_model.last_active_at),
            version=orm_model.version,
            created_at=_utc(orm_model.created_at),
            updated_at=_utc(orm_model.updated_at),
        )

    def lesson_to_domain(self, row: LessonCompletionORM) -> LessonCompletion:
        return LessonCompletion(
            lesson_id=LessonId(row.lesson_id),
            completed_at=to_utc(row.completed_at),
            score=row.score,
            time_spent_minutes=row.time_spent_minutes,
            notes=row.notes,
        )

    def assessment_to_domain(self, row: WeeklyAssessmentORM) -> WeeklyAssessment:
        return WeeklyAssessment(
            week=row.week,
            score=row.score,
            completed_at=to_utc(row.completed_at),
            feedback=row.feedback,
            strengths=tuple(row.strengths or ()),
            areas_to_improve=tuple(row.areas_to_improve or ()),
        )

    def vocabulary_to_domain(self, row: VocabularyItemORM) -> VocabularyItem:
        return VocabularyItem(
            word=row.word,
            translation=row.translation,
            mastered=row.mastered,
            last_reviewed_at=to_utc(row.last_reviewed_at),
            next_review_at=to_utc(row.next_review_at),
            repetition_count=row.repetition_count,
        )

    def to_orm(self, domain_entity: Progress, orm_model: ProgressORM | None = None) -> ProgressORM:
        """
        Convert domain aggregate to ORM model.

        Handles both create (orm_model=None) and update (orm_model provided).
        Child rows are matched on their natural keys and updated in place;
        the aggregate never removes entries, so neither does the mapper.
        """
        if orm_model is None:
            orm_model = ProgressORM(
                learner_id=domain_entity.learner_id.value,
                learning_path_id=domain_entity.path_id.value,
            )
        else:
            # Touch the parent row so every save goes through the version check
            orm_model.updated_at = utc_now()

        orm_model.current_week = domain_entity.current_week
        orm_model.total_time_spent_minutes = domain_entity.total_time_spent_minutes
        orm_model.streak_days = domain_entity.streak_days
        orm_model.last_active_at = domain_entity.last_active_at
        orm_model.is_completed = domain_entity.is_completed
        orm_model.completed_at = domain_entity.completed_at

        self._sync_lessons(domain_entity, orm_model)
        self._sync_assessments(domain_entity, orm_model)
        self._sync_vocabulary(domain_entity, orm_model)
        return orm_model

    def _sync_lessons(self, domain_entity: Progress, orm_model: ProgressORM) -> None:
        rows = {row.lesson_id: row for row in orm_model.lessons_completed}
        for completion in domain_entity.lessons_completed:
            row = rows.get(completion.lesson_id.value)
            if row is None:
                row = LessonCompletionORM(lesson_id=completion.lesson_id.value)
                orm_model.lessons_completed.append(row)
            row.completed_at = completion.completed_at
            row.score = completion.score
            row.time_spent_minutes = completion.time_spent_minutes
            row.notes = completion.notes

    def _sync_assessments(self, domain_entity: Progress, orm_model: ProgressORM) -> None:
        rows = {row.week: row for row in orm_model.weekly_assessments}
        for assessment in domain_entity.weekly_assessments:
            row = rows.get(assessment.week)
            if row is None:
                row = WeeklyAssessmentORM(week=assessment.week)
                orm_model.weekly_assessments.append(row)
            row.score = assessment.score
            row.completed_at = assessment.completed_at
            row.feedback = assessment.feedback
            row.strengths = list(assessment.strengths)
            row.areas_to_improve = list(assessment.areas_to_improve)

    def _sync_vocabulary(self, domain_entity: Progress, orm_model: ProgressORM) -> None:
        rows = {row.word: row for row in orm_model.vocabulary_items}
        for item in domain_entity.vocabulary:
            row = rows.get(item.word)
            if row is None:
                row = VocabularyItemORM(word=item.word)
                orm_model.vocabulary_items.append(row)
            row.translation = item.translation
            row.mastered = item.mastered
            row.last_reviewed_at = item.last_reviewed_at
            row.next_review_at = item.next_review_at
            row.repetition_count = item.repetition_count
