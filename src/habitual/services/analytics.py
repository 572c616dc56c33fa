"""Read-only analytics over completions.

Nothing here writes; the aggregate streak shown in ``user_analytics`` is the
cached value maintained by the completion path.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo

from ..domain.repositories import UnitOfWorkFactory
from ..errors import InvalidArgumentError, NotFoundError
from .periods import local_date, resolve_timezone
from .transactions import unit_of_work

DEFAULT_HEATMAP_DAYS = 30


@dataclass
class HabitStats:
    habit_id: int
    name: str
    total: int = 0
    dates: list[date] = field(default_factory=list)


@dataclass(frozen=True)
class HeatmapDay:
    day: date
    count: int


@dataclass
class UserAnalytics:
    """Summary shown on a profile page.

    ``total_habits``, ``completions_per_habit`` and ``habit_stats`` cover only
    habits with at least one completion.
    """

    total_habits: int
    total_completions: int
    current_streak: int
    longest_streak: int
    completions_per_habit: float
    habit_stats: dict[int, HabitStats]
    heatmap: list[HeatmapDay]


def total_completions(user_id: int, *, uow_factory: UnitOfWorkFactory) -> int:
    with unit_of_work(uow_factory) as uow:
        return len(uow.completions.list_for_user(user_id))


def habit_stats(
    user_id: int,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
) -> dict[int, HabitStats]:
    """Per-habit completion totals and local completion dates, keyed by habit id."""

    zone = resolve_timezone(tz)
    with unit_of_work(uow_factory) as uow:
        stats = {h.id: HabitStats(habit_id=h.id, name=h.name) for h in uow.habits.list_for_user(user_id)}
        for completion in uow.completions.list_for_user(user_id):
            entry = stats.get(completion.habit_id)
            if entry is None:
                continue
            entry.total += 1
            entry.dates.append(local_date(completion.occurred_at, zone))
    return stats


def streak_heatmap(
    user_id: int,
    now: datetime,
    days: int = DEFAULT_HEATMAP_DAYS,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
) -> list[HeatmapDay]:
    """Completion counts for each of the last ``days`` local days, oldest first."""

    if days < 1:
        raise InvalidArgumentError("days must be at least 1")
    zone = resolve_timezone(tz)
    today = local_date(now, zone)
    first = today - timedelta(days=days - 1)

    with unit_of_work(uow_factory) as uow:
        counts = Counter(
            local_date(c.occurred_at, zone) for c in uow.completions.list_for_user(user_id)
        )
    window = [first + timedelta(days=offset) for offset in range(days)]
    return [HeatmapDay(day=day, count=counts.get(day, 0)) for day in window]


def user_analytics(
    user_id: int,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
    heatmap_days: int = DEFAULT_HEATMAP_DAYS,
) -> UserAnalytics:
    with unit_of_work(uow_factory) as uow:
        user = uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        current, longest = user.overall_streak, user.longest_overall_streak

    # Only habits with at least one completion count towards the summary
    active = {
        habit_id: entry
        for habit_id, entry in habit_stats(user_id, uow_factory=uow_factory, tz=tz).items()
        if entry.total
    }
    total = sum(entry.total for entry in active.values())
    return UserAnalytics(
        total_habits=len(active),
        total_completions=total,
        current_streak=current,
        longest_streak=longest,
        completions_per_habit=(total / len(active)) if active else 0.0,
        habit_stats=active,
        heatmap=streak_heatmap(user_id, now, heatmap_days, uow_factory=uow_factory, tz=tz),
    )


__all__ = [
    "DEFAULT_HEATMAP_DAYS",
    "HabitStats",
    "HeatmapDay",
    "UserAnalytics",
    "habit_stats",
    "streak_heatmap",
    "total_completions",
    "user_analytics",
]
