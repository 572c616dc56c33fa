"""Tests for read-only analytics."""

from __future__ import annotations

from datetime import date

import pytest

from habitual.errors import InvalidArgumentError, NotFoundError
from habitual.services import analytics, completions, users

from .conftest import utc


def test_totals_and_per_habit_stats(uow_factory, user, habit_factory, completion_factory):
    read = habit_factory(name="Read")
    run = habit_factory(name="Run")
    idle = habit_factory(name="Idle")
    completion_factory(read, utc(2024, 1, 1))
    completion_factory(read, utc(2024, 1, 2))
    completion_factory(run, utc(2024, 1, 2))

    stats = analytics.habit_stats(user.id, uow_factory=uow_factory)

    assert analytics.total_completions(user.id, uow_factory=uow_factory) == 3
    assert stats[read.id].total == 2
    assert stats[read.id].dates == [date(2024, 1, 1), date(2024, 1, 2)]
    assert stats[run.id].total == 1
    assert stats[idle.id].total == 0


def test_heatmap_window(uow_factory, user, habit_factory, completion_factory):
    read = habit_factory(name="Read")
    run = habit_factory(name="Run")
    completion_factory(read, utc(2024, 1, 1))  # outside a 7-day window
    completion_factory(read, utc(2024, 1, 8))
    completion_factory(run, utc(2024, 1, 8, 18))
    completion_factory(read, utc(2024, 1, 10))

    heatmap = analytics.streak_heatmap(user.id, utc(2024, 1, 10, 20), 7, uow_factory=uow_factory)

    assert [cell.day for cell in heatmap] == [date(2024, 1, d) for d in range(4, 11)]
    assert {cell.day: cell.count for cell in heatmap if cell.count} == {
        date(2024, 1, 8): 2,
        date(2024, 1, 10): 1,
    }


def test_heatmap_rejects_empty_window(uow_factory, user):
    with pytest.raises(InvalidArgumentError):
        analytics.streak_heatmap(user.id, utc(2024, 1, 10), 0, uow_factory=uow_factory)


def test_user_analytics_reports_cached_streak(uow_factory, user, habit_factory):
    read = habit_factory(name="Read")
    habit_factory(name="Run")
    for day in (1, 2, 3):
        completions.record_completion(read.id, user.id, utc(2024, 1, day), uow_factory=uow_factory)

    # Reading analytics a week later does not touch the cached streak
    summary = analytics.user_analytics(user.id, utc(2024, 1, 10), uow_factory=uow_factory, heatmap_days=10)

    # The untouched habit is left out of the summary
    assert summary.total_habits == 1
    assert summary.total_completions == 3
    assert summary.completions_per_habit == pytest.approx(3.0)
    assert list(summary.habit_stats) == [read.id]
    assert (summary.current_streak, summary.longest_streak) == (3, 3)
    assert len(summary.heatmap) == 10
    assert users.get_user(user.id, uow_factory=uow_factory).overall_streak == 3


def test_user_analytics_without_habits(uow_factory, user):
    summary = analytics.user_analytics(user.id, utc(2024, 1, 10), uow_factory=uow_factory)

    assert summary.total_habits == 0
    assert summary.completions_per_habit == 0.0
    assert len(summary.heatmap) == analytics.DEFAULT_HEATMAP_DAYS


def test_user_analytics_unknown_user(uow_factory):
    with pytest.raises(NotFoundError):
        analytics.user_analytics(404, utc(2024, 1, 10), uow_factory=uow_factory)
