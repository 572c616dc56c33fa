"""Pytest configuration and shared fixtures for Habitual tests.

This module provides database fixtures, test data factories, and helper
utilities for testing the streak engine, repositories, and services without
touching a real application database.
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitual.infra.database import create_uow_factory
from habitual.models import Completion, Frequency, Habit, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Plain session for arranging and inspecting rows directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def uow_factory(db_engine):
    """Unit-of-work factory the services run against."""
    return create_uow_factory(db_engine)


# =============================================================================
# Time Helpers
# =============================================================================


def utc(year: int, month: int, day: int, hour: int = 9, minute: int = 0) -> datetime:
    """Aware UTC datetime; defaults to 09:00 so day arithmetic stays whole."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(db_session):
    """Factory for creating test users.

    Returns:
        Callable: Function that creates and persists User instances
    """
    counter = {"n": 0}

    def _create_user(username: str | None = None) -> User:
        counter["n"] += 1
        user = User(username=username or f"user{counter['n']}")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """A default user owning test habits."""
    return user_factory("tester")


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating test habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        frequency: Frequency = Frequency.DAILY,
        owner: User | None = None,
        created_at: datetime | None = None,
    ) -> Habit:
        """Create a test habit with sensible defaults.

        Args:
            name: Habit name
            frequency: DAILY, WEEKLY or MONTHLY
            owner: Owning user (defaults to the ``user`` fixture)
            created_at: Creation instant, naive UTC

        Returns:
            Habit: Persisted habit instance
        """
        owner = owner or user
        habit = Habit(
            user_id=owner.id,
            name=name,
            frequency=frequency,
            created_at=created_at or datetime(2024, 1, 1),
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def completion_factory(db_session):
    """Insert completion rows directly, bypassing the recorder."""

    def _create_completion(habit: Habit, occurred_at: datetime, period_key: str | None = None) -> Completion:
        naive = occurred_at.astimezone(timezone.utc).replace(tzinfo=None) if occurred_at.tzinfo else occurred_at
        completion = Completion(
            habit_id=habit.id,
            occurred_at=naive,
            period_key=period_key or naive.date().isoformat(),
        )
        db_session.add(completion)
        db_session.commit()
        db_session.refresh(completion)
        return completion

    return _create_completion
