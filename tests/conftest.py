"""Pytest configuration and shared fixtures for Daybook tests.

This module provides database fixtures, test data factories, and an API client
for testing the calendar logic, repositories and routes without touching the
real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from daybook.extensions import get_engine
from daybook.infra.database import create_session_factory
from daybook.infra.repositories import SQLModelHabitRepository

# Import all models to ensure they're registered with SQLModel metadata
from daybook.models import Habit, HabitCompletion, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory with the same commit/rollback scope the app uses."""

    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(session_factory) -> User:
    """Create a default user for scoping data."""

    with session_factory() as session:
        row = User(username="tester", password_hash="dummy-hash")
        session.add(row)
        session.commit()
        session.refresh(row)
        session.expunge(row)
    return row


@pytest.fixture
def other_user(session_factory) -> User:
    with session_factory() as session:
        row = User(username="someone-else", password_hash="dummy-hash")
        session.add(row)
        session.commit()
        session.refresh(row)
        session.expunge(row)
    return row


@pytest.fixture
def habit_factory(session_factory, user):
    """Factory for persisted habits owned by ``user``."""

    repo = SQLModelHabitRepository(session_factory)

    def _create_habit(
        title: str = "Meditate",
        frequency_days: list[str] | None = None,
        habit_type: str = "builder",
        owner: User | None = None,
    ) -> Habit:
        habit = Habit(
            title=title,
            frequency_days=list(frequency_days or []),
            habit_type=habit_type,
        )
        return repo.create(habit, user_id=(owner or user).id)

    return _create_habit


@pytest.fixture
def completion_factory(session_factory, user):
    """Factory recording a completion at noon UTC of the given day."""

    repo = SQLModelHabitRepository(session_factory)

    def _complete(habit: Habit, day: date, at: time = time(12)) -> HabitCompletion:
        stamp = datetime.combine(day, at, tzinfo=timezone.utc)
        return repo.add_completion(habit.id, user_id=habit.user_id, completed_at=stamp)

    return _complete


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app wired to a throwaway data directory."""

    monkeypatch.setenv("DAYBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DAYBOOK_TIMEZONE", "UTC")
    monkeypatch.setenv("DAYBOOK_SECRET_KEY", "test-secret")
    monkeypatch.delenv("DAYBOOK_DATABASE_URL", raising=False)

    from daybook import create_app

    application = create_app("testing")
    yield application
    with application.app_context():
        get_engine().dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client with a freshly signed-up, logged-in user."""

    response = client.post("/auth/signup", json={"username": "alice", "password": "correct-horse"})
    assert response.status_code == 201
    return client
