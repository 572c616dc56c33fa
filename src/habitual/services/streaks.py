"""Per-habit and aggregate streak calculations."""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from ..domain.repositories import HabitRepository, UnitOfWork, UnitOfWorkFactory
from ..errors import NotFoundError
from ..models.habit import Habit
from .periods import ONE_DAY, as_utc, local_date, resolve_timezone, to_storage
from .transactions import unit_of_work

logger = logging.getLogger(__name__)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Elapsed whole days from ``earlier`` to ``later``, floored."""

    return (as_utc(later) - as_utc(earlier)) // ONE_DAY


def next_habit_streak(
    current_streak: int,
    longest_streak: int,
    last_completed_at: Optional[datetime],
    completion_instant: datetime,
) -> tuple[int, int]:
    """Return (current_streak, longest_streak) after one more completion.

    The gap is measured in raw elapsed days whatever the habit's frequency.
    A gap of zero or less leaves the streak as it was.
    """

    if last_completed_at is None:
        new_current = 1
    else:
        diff = whole_days_between(last_completed_at, completion_instant)
        if diff == 1:
            new_current = current_streak + 1
        elif diff > 1:
            new_current = 1
        else:
            new_current = current_streak
    return new_current, max(longest_streak, new_current)


def update_habit_streak(
    habits: HabitRepository, habit: Habit, completion_instant: datetime
) -> tuple[int, int]:
    """Apply ``next_habit_streak`` to ``habit`` and persist it."""

    new_current, new_longest = next_habit_streak(
        habit.current_streak,
        habit.longest_streak,
        habit.last_completed_at,
        completion_instant,
    )
    habits.update_fields(
        habit,
        current_streak=new_current,
        longest_streak=new_longest,
        last_completed_at=to_storage(completion_instant),
    )
    return new_current, new_longest


def reconstruct_streaks(days: Iterable[date], today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak) over a collection of active days.

    Duplicates collapse to one day. The current streak is the final run when
    it ends today or yesterday and 0 otherwise.
    """

    ordered = sorted(set(days))
    if not ordered:
        return 0, 0

    run = 0
    longest = 0
    previous: date | None = None
    for day in ordered:
        if previous is not None and day - previous == ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    last = ordered[-1]
    current = run if last in (today, today - ONE_DAY) else 0
    return current, longest


def refresh_user_overall_streak(
    uow: UnitOfWork, user_id: int, now: datetime, tz: str | tzinfo | None = None
) -> tuple[int, int]:
    """Rebuild a user's aggregate streak inside an open unit of work.

    This is the only place the aggregate is computed; the cached user fields
    are overwritten with its result. The user row is locked before the
    completions are read, so concurrent rebuilds for one user run one after
    the other and each sees the completions the previous one committed.
    """

    user = uow.users.get_for_update(user_id)
    if user is None:
        raise NotFoundError("User not found")

    zone = resolve_timezone(tz)
    days = [local_date(c.occurred_at, zone) for c in uow.completions.list_for_user(user_id)]
    overall, longest = reconstruct_streaks(days, local_date(now, zone))
    uow.users.update_fields(user, overall_streak=overall, longest_overall_streak=longest)
    logger.info(
        "Overall streak recomputed",
        extra={"user_id": user_id, "overall_streak": overall, "longest_overall_streak": longest},
    )
    return overall, longest


def recompute_user_overall_streak(
    user_id: int,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
) -> tuple[int, int]:
    """Rebuild and store a user's (overall_streak, longest_overall_streak)."""

    with unit_of_work(uow_factory) as uow:
        return refresh_user_overall_streak(uow, user_id, now, tz)


__all__ = [
    "next_habit_streak",
    "recompute_user_overall_streak",
    "reconstruct_streaks",
    "refresh_user_overall_streak",
    "update_habit_streak",
    "whole_days_between",
]
