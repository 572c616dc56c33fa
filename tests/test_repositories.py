"""Unit tests for repository implementations."""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from habitual.infra.database import SQLModelUnitOfWork
from habitual.infra.repositories import (
    SQLModelCompletionRepository,
    SQLModelFeedRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)
from habitual.models import FeedEntry, FeedType


class TestCompletionRepository:
    def test_exists_in_window_is_half_open(self, db_session, habit_factory):
        habit = habit_factory()
        repo = SQLModelCompletionRepository(db_session)
        repo.insert(habit.id, datetime(2024, 1, 1, 23, 59), "2024-01-01")

        assert repo.exists_in_window(habit.id, datetime(2024, 1, 1), datetime(2024, 1, 2))
        assert not repo.exists_in_window(habit.id, datetime(2024, 1, 2), datetime(2024, 1, 3))

    def test_unique_period_per_habit(self, db_session, habit_factory):
        habit = habit_factory()
        repo = SQLModelCompletionRepository(db_session)
        repo.insert(habit.id, datetime(2024, 1, 1, 8), "2024-01-01")

        with pytest.raises(IntegrityError):
            repo.insert(habit.id, datetime(2024, 1, 1, 9), "2024-01-01")
        db_session.rollback()

    def test_list_for_user_spans_habits(self, db_session, user, user_factory, habit_factory, completion_factory):
        other = user_factory("other")
        first = habit_factory(name="First")
        second = habit_factory(name="Second")
        foreign = habit_factory(name="Foreign", owner=other)
        completion_factory(second, datetime(2024, 1, 3))
        completion_factory(first, datetime(2024, 1, 1))
        completion_factory(foreign, datetime(2024, 1, 2))

        rows = SQLModelCompletionRepository(db_session).list_for_user(user.id)

        assert [row.occurred_at.day for row in rows] == [1, 3]

    def test_list_for_habit_newest_first(self, db_session, habit_factory, completion_factory):
        habit = habit_factory()
        for day in (2, 1, 3):
            completion_factory(habit, datetime(2024, 1, day))

        rows = SQLModelCompletionRepository(db_session).list_for_habit(habit.id, newest_first=True)

        assert [row.occurred_at.day for row in rows] == [3, 2, 1]


class TestHabitRepository:
    def test_update_fields(self, db_session, habit_factory):
        habit = habit_factory()
        repo = SQLModelHabitRepository(db_session)

        repo.update_fields(habit, current_streak=4, longest_streak=6)

        assert repo.get_by_id(habit.id).current_streak == 4

    def test_list_for_user(self, db_session, user, habit_factory):
        habit_factory(name="A")
        habit_factory(name="B")

        assert len(SQLModelHabitRepository(db_session).list_for_user(user.id)) == 2


class TestFeedRepository:
    def test_newest_first_with_id_tiebreak(self, db_session, user):
        repo = SQLModelFeedRepository(db_session)
        same_time = datetime(2024, 1, 5)
        older = repo.insert(FeedEntry(user_id=user.id, type=FeedType.HABIT_CREATED, message="a", created_at=datetime(2024, 1, 1)))
        first = repo.insert(FeedEntry(user_id=user.id, type=FeedType.HABIT_COMPLETED, message="b", created_at=same_time))
        second = repo.insert(FeedEntry(user_id=user.id, type=FeedType.STREAK_UPDATED, message="c", created_at=same_time))

        rows = repo.list_for_users([user.id])

        assert [row.id for row in rows] == [second.id, first.id, older.id]

    def test_empty_author_list(self, db_session):
        assert SQLModelFeedRepository(db_session).list_for_users([]) == []


def test_unit_of_work_shares_session(db_session, user):
    uow = SQLModelUnitOfWork(db_session)

    assert uow.habits.session is uow.users.session is db_session
    assert SQLModelUserRepository(db_session).get_by_username("tester").id == user.id
