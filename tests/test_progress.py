"""Tests for learner progress API endpoints."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from polyglot import models
from polyglot.application.common.retry import TransientPersistenceError
from polyglot.core import container
from polyglot.domain.common.value_objects import (
    LanguageId,
    LearnerId,
    LearningPathId,
    LessonId,
    ProficiencyLevel,
)
from polyglot.domain.learning.entities.progress import Progress
from polyglot.infrastructure.identity.auth.token_service import create_access_token
from polyglot.infrastructure.identity.repositories.learner_portfolio_repository import (
    LearnerPortfolioRepository,
)
from polyglot.infrastructure.learning.repositories.progress_repository import ProgressRepository

if TYPE_CHECKING:
    from tests.conftest import FakeClock

PROGRESS_URL = "/api/v1/progress"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


class TestStartLearningPath:
    """Test suite for POST /progress/start/{path_id}."""

    def test_start_creates_week_one_progress(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_path: models.LearningPath,
        test_learner: models.Learner,
    ) -> None:
        response = client.post(f"{PROGRESS_URL}/start/{test_path.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["learner_id"] == test_learner.id
        assert data["path_id"] == test_path.id
        assert data["current_week"] == 1
        assert data["is_completed"] is False
        assert data["streak_days"] == 0
        assert data["total_time_spent_minutes"] == 0
        assert data["lessons_completed"] == []
        assert data["weekly_assessments"] == []
        assert data["vocabulary"] == []
        assert data["last_active_at"] is not None

    def test_start_adds_language_to_portfolio(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_path: models.LearningPath,
        test_learner: models.Learner,
    ) -> None:
        client.post(f"{PROGRESS_URL}/start/{test_path.id}", headers=auth_headers)

        entries = db_session.execute(
            select(models.LearnerLanguage).where(
                models.LearnerLanguage.learner_id == test_learner.id
            )
        ).scalars().all()
        assert len(entries) == 1
        assert entries[0].language_id == test_path.language_id
        assert entries[0].level == "beginner"

    def test_second_path_in_same_language_keeps_one_portfolio_entry(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_path: models.LearningPath,
        test_learner: models.Learner,
    ) -> None:
        other_path = models.LearningPath(
            language_id=test_path.language_id,
            level="intermediate",
            title="Spanish, the next step",
            duration_weeks=8,
        )
        db_session.add(other_path)
        db_session.commit()

        client.post(f"{PROGRESS_URL}/start/{test_path.id}", headers=auth_headers)
        response = client.post(f"{PROGRESS_URL}/start/{other_path.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        count = len(
            db_session.execute(
                select(models.LearnerLanguage).where(
                    models.LearnerLanguage.learner_id == test_learner.id
                )
            ).scalars().all()
        )
        assert count == 1

    def test_start_twice_conflicts_and_keeps_first(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"pathId": enrolled["path_id"], "lessonId": test_lessons[0].id},
            headers=auth_headers,
        )

        response = client.post(
            f"{PROGRESS_URL}/start/{enrolled['path_id']}", headers=auth_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        progress = client.get(f"{PROGRESS_URL}/{enrolled['path_id']}", headers=auth_headers)
        assert progress.json()["id"] == enrolled["id"]
        assert len(progress.json()["lessons_completed"]) == 1

    def test_start_unknown_path(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post(f"{PROGRESS_URL}/start/99999", headers=auth_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize(
        ("error", "expected_status"),
        [
            (RuntimeError("portfolio store down"), status.HTTP_500_INTERNAL_SERVER_ERROR),
            (TransientPersistenceError("lock timeout"), status.HTTP_503_SERVICE_UNAVAILABLE),
        ],
    )
    def test_portfolio_failure_leaves_no_progress(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_path: models.LearningPath,
        error: Exception,
        expected_status: int,
    ) -> None:
        class FailingPortfolioRepository(LearnerPortfolioRepository):
            def add_learning_language(
                self, learner_id: LearnerId, language_id: LanguageId, level: ProficiencyLevel
            ) -> bool:
                raise error

        container.learner_portfolio_repository.override(
            providers.Factory(FailingPortfolioRepository, db=container.db)
        )
        try:
            response = client.post(f"{PROGRESS_URL}/start/{test_path.id}", headers=auth_headers)
        finally:
            container.learner_portfolio_repository.reset_override()

        assert response.status_code == expected_status
        assert "portfolio" not in response.json()["detail"]
        progress = client.get(f"{PROGRESS_URL}/{test_path.id}", headers=auth_headers)
        assert progress.status_code == status.HTTP_404_NOT_FOUND
        assert db_session.execute(select(models.Progress)).scalars().all() == []
        assert db_session.execute(select(models.LearnerLanguage)).scalars().all() == []


class TestCompleteLesson:
    """Test suite for POST /progress/complete-lesson."""

    def test_complete_lesson_records_time(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={
                "path_id": enrolled["path_id"],
                "lesson_id": test_lessons[0].id,
                "score": 85,
                "time_spent_minutes": 20,
                "notes": "ser vs estar",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_time_spent_minutes"] == 20
        assert len(data["lessons_completed"]) == 1
        lesson = data["lessons_completed"][0]
        assert lesson["lesson_id"] == test_lessons[0].id
        assert lesson["score"] == 85
        assert lesson["notes"] == "ser vs estar"

    def test_repeat_without_time_keeps_size_and_total(
        self,
        client: TestClient,
        clock: "FakeClock",
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        body = {"pathId": enrolled["path_id"], "lessonId": test_lessons[0].id}
        client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={**body, "timeSpentMinutes": 20},
            headers=auth_headers,
        )
        first = client.get(f"{PROGRESS_URL}/{enrolled['path_id']}", headers=auth_headers).json()

        clock.advance(hours=2)
        response = client.post(f"{PROGRESS_URL}/complete-lesson", json=body, headers=auth_headers)

        data = response.json()
        assert len(data["lessons_completed"]) == 1
        assert data["total_time_spent_minutes"] == 20
        assert data["lessons_completed"][0]["time_spent_minutes"] == 20
        assert _ts(data["lessons_completed"][0]["completed_at"]) > _ts(
            first["lessons_completed"][0]["completed_at"]
        )

    def test_streak_counts_calendar_days(
        self,
        client: TestClient,
        clock: "FakeClock",
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        body = {"pathId": enrolled["path_id"], "lessonId": test_lessons[0].id}
        url = f"{PROGRESS_URL}/complete-lesson"

        assert client.post(url, json=body, headers=auth_headers).json()["streak_days"] == 0
        clock.advance(days=1)
        assert client.post(url, json=body, headers=auth_headers).json()["streak_days"] == 1
        clock.advance(hours=3)
        assert client.post(url, json=body, headers=auth_headers).json()["streak_days"] == 1
        clock.advance(days=1)
        assert client.post(url, json=body, headers=auth_headers).json()["streak_days"] == 2
        clock.advance(days=3)
        assert client.post(url, json=body, headers=auth_headers).json()["streak_days"] == 1

    def test_unknown_lesson(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"path_id": enrolled["path_id"], "lesson_id": 99999},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_not_enrolled(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_path: models.LearningPath,
        test_lessons: list[models.Lesson],
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"path_id": test_path.id, "lesson_id": test_lessons[0].id},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "No progress found" in response.json()["detail"]

    def test_invalid_score(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"path_id": enrolled["path_id"], "lesson_id": test_lessons[0].id, "score": 150},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_persistence_unavailable_after_retries(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        class AlwaysStaleRepository(ProgressRepository):
            def save(self, progress: Progress) -> Progress:
                raise TransientPersistenceError("version conflict")

        container.progress_repository.override(
            providers.Factory(AlwaysStaleRepository, db=container.db)
        )
        try:
            response = client.post(
                f"{PROGRESS_URL}/complete-lesson",
                json={"path_id": enrolled["path_id"], "lesson_id": test_lessons[0].id},
                headers=auth_headers,
            )
        finally:
            container.progress_repository.reset_override()

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        progress = client.get(f"{PROGRESS_URL}/{enrolled['path_id']}", headers=auth_headers)
        assert progress.json()["lessons_completed"] == []


class TestWeeklyAssessment:
    """Test suite for POST /progress/weekly-assessment."""

    def test_full_path_scenario(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        path_id = enrolled["path_id"]
        response = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"pathId": path_id, "lessonId": test_lessons[0].id, "timeSpentMinutes": 20},
            headers=auth_headers,
        )
        assert response.json()["total_time_spent_minutes"] == 20
        assert len(response.json()["lessons_completed"]) == 1

        response = client.post(
            f"{PROGRESS_URL}/weekly-assessment",
            json={"pathId": path_id, "week": 1, "score": 80},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["current_week"] == 2
        assert response.json()["is_completed"] is False

        response = client.post(
            f"{PROGRESS_URL}/weekly-assessment",
            json={
                "pathId": path_id,
                "week": 2,
                "score": 90,
                "feedback": "Great progress",
                "strengths": ["vocabulary"],
                "areasToImprove": ["pronunciation"],
            },
            headers=auth_headers,
        )
        data = response.json()
        assert data["is_completed"] is True
        assert data["completed_at"] is not None
        assert data["current_week"] == 2
        assert [a["week"] for a in data["weekly_assessments"]] == [1, 2]
        assert data["weekly_assessments"][1]["areas_to_improve"] == ["pronunciation"]

    def test_final_week_resubmission_restamps_completed_at(
        self,
        client: TestClient,
        clock: "FakeClock",
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
    ) -> None:
        url = f"{PROGRESS_URL}/weekly-assessment"
        path_id = enrolled["path_id"]
        client.post(url, json={"pathId": path_id, "week": 1, "score": 80}, headers=auth_headers)
        first = client.post(
            url, json={"pathId": path_id, "week": 2, "score": 70}, headers=auth_headers
        ).json()

        clock.advance(days=3)
        again = client.post(
            url, json={"pathId": path_id, "week": 2, "score": 95}, headers=auth_headers
        ).json()

        assert again["is_completed"] is True
        assert again["current_week"] == 2
        assert again["weekly_assessments"][1]["score"] == 95
        assert _ts(again["completed_at"]) - _ts(first["completed_at"]) == timedelta(days=3)

    def test_other_week_does_not_advance(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/weekly-assessment",
            json={"path_id": enrolled["path_id"], "week": 2, "score": 100},
            headers=auth_headers,
        )
        data = response.json()
        assert data["current_week"] == 1
        assert data["is_completed"] is False
        assert len(data["weekly_assessments"]) == 1

    def test_resubmission_replaces_score_only_where_supplied(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        url = f"{PROGRESS_URL}/weekly-assessment"
        client.post(
            url,
            json={
                "path_id": enrolled["path_id"],
                "week": 2,
                "score": 70,
                "feedback": "Keep going",
                "strengths": ["grammar"],
            },
            headers=auth_headers,
        )
        response = client.post(
            url,
            json={"path_id": enrolled["path_id"], "week": 2, "score": 75},
            headers=auth_headers,
        )
        assessment = response.json()["weekly_assessments"][0]
        assert assessment["score"] == 75
        assert assessment["feedback"] == "Keep going"
        assert assessment["strengths"] == ["grammar"]

    def test_week_beyond_duration(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/weekly-assessment",
            json={"path_id": enrolled["path_id"], "week": 3, "score": 80},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["field"] == "week"

    def test_score_out_of_range(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/weekly-assessment",
            json={"path_id": enrolled["path_id"], "week": 1, "score": -5},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestVocabulary:
    """Test suite for vocabulary review endpoints."""

    def test_casa_review_schedule(
        self,
        client: TestClient,
        clock: "FakeClock",
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
    ) -> None:
        url = f"{PROGRESS_URL}/vocabulary"
        body = {"path_id": enrolled["path_id"], "word": "casa", "translation": "house"}

        expected = [(0, 1), (1, 2), (2, 4)]
        for repetition_count, interval_days in expected:
            response = client.post(url, json=body, headers=auth_headers)
            assert response.status_code == status.HTTP_200_OK
            vocabulary = response.json()["vocabulary"]
            assert len(vocabulary) == 1
            item = vocabulary[0]
            assert item["repetition_count"] == repetition_count
            assert _ts(item["next_review_at"]) - _ts(item["last_reviewed_at"]) == timedelta(
                days=interval_days
            )
            clock.advance(days=interval_days)

    def test_new_word_without_translation(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.post(
            f"{PROGRESS_URL}/vocabulary",
            json={"path_id": enrolled["path_id"], "word": "casa"},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_due_words(
        self,
        client: TestClient,
        clock: "FakeClock",
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
    ) -> None:
        url = f"{PROGRESS_URL}/vocabulary"
        path_id = enrolled["path_id"]
        client.post(
            url,
            json={"path_id": path_id, "word": "casa", "translation": "house"},
            headers=auth_headers,
        )
        clock.advance(hours=12)
        client.post(
            url,
            json={"path_id": path_id, "word": "perro", "translation": "dog"},
            headers=auth_headers,
        )

        due_url = f"{PROGRESS_URL}/{path_id}/vocabulary/due"
        assert client.get(due_url, headers=auth_headers).json()["vocabulary"] == []

        clock.advance(hours=12)
        due = client.get(due_url, headers=auth_headers).json()["vocabulary"]
        assert [item["word"] for item in due] == ["casa"]

        clock.advance(days=1)
        due = client.get(due_url, headers=auth_headers).json()["vocabulary"]
        assert [item["word"] for item in due] == ["casa", "perro"]

    def test_due_words_not_enrolled(
        self, client: TestClient, auth_headers: dict[str, str], test_path: models.LearningPath
    ) -> None:
        response = client.get(
            f"{PROGRESS_URL}/{test_path.id}/vocabulary/due", headers=auth_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestReadProgress:
    """Test suite for GET /progress endpoints."""

    def test_list_progress(
        self, client: TestClient, auth_headers: dict[str, str], enrolled: dict[str, Any]
    ) -> None:
        response = client.get(PROGRESS_URL, headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        progress = response.json()["progress"]
        assert [p["path_id"] for p in progress] == [enrolled["path_id"]]

    def test_reads_include_path_and_lesson_details(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        enrolled: dict[str, Any],
        test_path: models.LearningPath,
        test_lessons: list[models.Lesson],
    ) -> None:
        completed = client.post(
            f"{PROGRESS_URL}/complete-lesson",
            json={"pathId": enrolled["path_id"], "lessonId": test_lessons[1].id},
            headers=auth_headers,
        ).json()
        assert completed["learning_path"] is None
        assert completed["lessons_completed"][0]["title"] is None

        one = client.get(f"{PROGRESS_URL}/{enrolled['path_id']}", headers=auth_headers).json()
        listed = client.get(PROGRESS_URL, headers=auth_headers).json()["progress"][0]

        for data in (one, listed):
            assert data["learning_path"] == {
                "id": test_path.id,
                "title": "Spanish for travellers",
                "level": "beginner",
                "duration_weeks": 2,
            }
            lesson = data["lessons_completed"][0]
            assert lesson["lesson_id"] == test_lessons[1].id
            assert lesson["title"] == "At the market"
            assert lesson["lesson_type"] == "speaking"

    def test_list_is_scoped_to_learner(
        self, client: TestClient, db_session: Session, enrolled: dict[str, Any]
    ) -> None:
        other = models.Learner(email="other@example.com")
        db_session.add(other)
        db_session.commit()

        headers = {"Authorization": f"Bearer {create_access_token(other.id)}"}
        assert client.get(PROGRESS_URL, headers=headers).json()["progress"] == []
        response = client.get(f"{PROGRESS_URL}/{enrolled['path_id']}", headers=headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_unknown_progress(
        self, client: TestClient, auth_headers: dict[str, str], test_path: models.LearningPath
    ) -> None:
        response = client.get(f"{PROGRESS_URL}/{test_path.id}", headers=auth_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_token(self, client: TestClient) -> None:
        assert client.get(PROGRESS_URL).status_code == status.HTTP_401_UNAUTHORIZED

    def test_rejects_invalid_token(self, client: TestClient) -> None:
        headers = {"Authorization": "Bearer not-a-token"}
        assert client.get(PROGRESS_URL, headers=headers).status_code == 401

    def test_rejects_expired_token(
        self, client: TestClient, test_learner: models.Learner
    ) -> None:
        token = create_access_token(test_learner.id, expires_in=timedelta(minutes=-1))
        headers = {"Authorization": f"Bearer {token}"}
        assert client.get(PROGRESS_URL, headers=headers).status_code == 401

    def test_rejects_unknown_learner(self, client: TestClient, db_session: Session) -> None:
        headers = {"Authorization": f"Bearer {create_access_token(424242)}"}
        assert client.get(PROGRESS_URL, headers=headers).status_code == 401


class TestProgressRepository:
    """Optimistic concurrency on the progress row."""

    def test_stale_version_raises_transient_error(
        self,
        db_session: Session,
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        repository = ProgressRepository(db_session)
        progress = repository.find_by_learner_and_path(
            LearnerId(enrolled["learner_id"]), LearningPathId(enrolled["path_id"])
        )
        assert progress is not None

        # Another writer commits first and bumps the version
        db_session.execute(
            update(models.Progress)
            .where(models.Progress.id == enrolled["id"])
            .values(version=models.Progress.version + 1)
            .execution_options(synchronize_session=False)
        )

        progress.complete_lesson(LessonId(test_lessons[0].id), datetime.now(UTC))
        with pytest.raises(TransientPersistenceError):
            repository.save(progress)
        db_session.rollback()

    def test_save_bumps_version(
        self,
        db_session: Session,
        enrolled: dict[str, Any],
        test_lessons: list[models.Lesson],
    ) -> None:
        repository = ProgressRepository(db_session)
        progress = repository.find_by_learner_and_path(
            LearnerId(enrolled["learner_id"]), LearningPathId(enrolled["path_id"])
        )
        assert progress is not None
        version = progress.version

        progress.complete_lesson(LessonId(test_lessons[0].id), datetime.now(UTC))
        saved = repository.save(progress)
        db_session.commit()

        assert saved.version == version + 1
        assert len(saved.lessons_completed) == 1
