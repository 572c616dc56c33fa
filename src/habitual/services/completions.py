"""Recording habit completions.

``record_completion`` is the write path that keeps streaks consistent: the
period check, the completion insert, the per-habit streak write, and the
owner's aggregate rebuild all run in one unit of work. Feed entries are
appended afterwards, once the completion has committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo

from ..domain.repositories import UnitOfWorkFactory
from ..errors import ConflictError, NotFoundError, StoreUnavailableError
from ..models.feed import FeedType
from ..models.habit import Completion
from . import feed
from .periods import period_window, resolve_timezone, to_storage
from .streaks import refresh_user_overall_streak, update_habit_streak
from .transactions import unit_of_work

logger = logging.getLogger(__name__)

ALREADY_COMPLETED = "Habit already marked as completed for this period"


@dataclass(frozen=True)
class _FeedContext:
    user_id: int
    habit_id: int
    habit_name: str
    previous_streak: int
    new_streak: int


def record_completion(
    habit_id: int,
    requesting_user_id: int,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
) -> Completion:
    """Mark a habit complete for the period containing ``now``.

    Raises:
        NotFoundError: the habit is missing or owned by someone else.
        ConflictError: the habit already has a completion in this period,
            whether caught by the pre-check or by the storage constraint.
        StoreUnavailableError: the transaction failed and was rolled back.
    """

    zone = resolve_timezone(tz)
    with unit_of_work(uow_factory, conflict_message=ALREADY_COMPLETED) as uow:
        habit = uow.habits.get_for_update(habit_id)
        if habit is None or habit.user_id != requesting_user_id:
            raise NotFoundError("Habit not found")

        window = period_window(habit.frequency, now, zone)
        if uow.completions.exists_in_window(habit.id, to_storage(window.start), to_storage(window.end)):
            logger.warning(
                ALREADY_COMPLETED,
                extra={"habit_id": habit.id, "period": window.key.token()},
            )
            raise ConflictError(ALREADY_COMPLETED)

        completion = uow.completions.insert(habit.id, to_storage(now), window.key.token())

        previous_streak = habit.current_streak
        new_streak, longest = update_habit_streak(uow.habits, habit, now)
        refresh_user_overall_streak(uow, habit.user_id, now, zone)

        context = _FeedContext(
            user_id=habit.user_id,
            habit_id=habit.id,
            habit_name=habit.name,
            previous_streak=previous_streak,
            new_streak=new_streak,
        )

    logger.info(
        "Completion recorded",
        extra={
            "habit_id": context.habit_id,
            "completion_id": completion.id,
            "period": completion.period_key,
            "current_streak": new_streak,
            "longest_streak": longest,
        },
    )
    _emit_completion_feed(context, now, uow_factory=uow_factory)
    return completion


def _emit_completion_feed(context: _FeedContext, now: datetime, *, uow_factory: UnitOfWorkFactory) -> None:
    """Append completion feed entries; failures are logged, never rolled back into the completion."""

    try:
        feed.emit(
            context.user_id,
            FeedType.HABIT_COMPLETED,
            context.habit_id,
            feed.completed_message(context.habit_name),
            now,
            uow_factory=uow_factory,
        )
        if context.new_streak > context.previous_streak:
            feed.emit(
                context.user_id,
                FeedType.STREAK_UPDATED,
                context.habit_id,
                feed.streak_message(context.habit_name, context.new_streak),
                now,
                uow_factory=uow_factory,
            )
    except StoreUnavailableError:
        logger.exception(
            "Feed emission failed after completion committed",
            extra={"habit_id": context.habit_id, "user_id": context.user_id},
        )


def get_completion_history(
    habit_id: int, requesting_user_id: int, *, uow_factory: UnitOfWorkFactory
) -> list[Completion]:
    """Completions of one habit, newest first."""

    with unit_of_work(uow_factory) as uow:
        habit = uow.habits.get_by_id(habit_id)
        if habit is None or habit.user_id != requesting_user_id:
            raise NotFoundError("Habit not found")
        return uow.completions.list_for_habit(habit_id, newest_first=True)


__all__ = ["ALREADY_COMPLETED", "get_completion_history", "record_completion"]
