"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from typing import Any

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from polyglot import models  # noqa: E402
from polyglot.core import container  # noqa: E402
from polyglot.database import Base, get_db  # noqa: E402
from polyglot.infrastructure.identity.auth.token_service import (  # noqa: E402
    create_access_token,
)
from polyglot.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeClock:
    """Controllable time source injected in place of utc_now."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def clock() -> Generator[FakeClock, None, None]:
    """Fix the time seen by the use cases."""
    fake = FakeClock(datetime(2026, 3, 2, 9, 0, tzinfo=UTC))
    container.clock.override(providers.Object(fake))
    try:
        yield fake
    finally:
        container.clock.reset_override()


@pytest.fixture
def client(db_session: Session, clock: FakeClock) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_language(db_session: Session) -> models.Language:
    """Create a test language."""
    language = models.Language(name="Spanish", code="es")
    db_session.add(language)
    db_session.commit()
    db_session.refresh(language)
    return language


@pytest.fixture
def test_path(db_session: Session, test_language: models.Language) -> models.LearningPath:
    """Create a two-week beginner learning path."""
    path = models.LearningPath(
        language_id=test_language.id,
        level="beginner",
        title="Spanish for travellers",
        duration_weeks=2,
    )
    db_session.add(path)
    db_session.commit()
    db_session.refresh(path)
    return path


@pytest.fixture
def test_lessons(db_session: Session, test_path: models.LearningPath) -> list[models.Lesson]:
    """Create lessons belonging to the test path."""
    lessons = [
        models.Lesson(learning_path_id=test_path.id, title="Greetings", lesson_type="vocabulary"),
        models.Lesson(
            learning_path_id=test_path.id, title="At the market", lesson_type="speaking"
        ),
    ]
    db_session.add_all(lessons)
    db_session.commit()
    for lesson in lessons:
        db_session.refresh(lesson)
    return lessons


@pytest.fixture
def test_learner(db_session: Session) -> models.Learner:
    """Create a test learner."""
    learner = models.Learner(email="learner@example.com", native_language="English")
    db_session.add(learner)
    db_session.commit()
    db_session.refresh(learner)
    return learner


@pytest.fixture
def auth_headers(test_learner: models.Learner) -> dict[str, str]:
    """Bearer token header for the test learner."""
    return {"Authorization": f"Bearer {create_access_token(test_learner.id)}"}


@pytest.fixture
def enrolled(
    client: TestClient,
    auth_headers: dict[str, str],
    test_path: models.LearningPath,
    test_lessons: list[models.Lesson],
) -> dict[str, Any]:
    """Start the test path for the test learner."""
    response = client.post(f"/api/v1/progress/start/{test_path.id}", headers=auth_headers)
    assert response.status_code == 201
    return response.json()
