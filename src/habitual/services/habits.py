"""Habit lifecycle: create, list, edit, delete."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from ..domain.repositories import UnitOfWorkFactory
from ..errors import InvalidArgumentError, NotFoundError, StoreUnavailableError
from ..models.feed import FeedType
from ..models.habit import Frequency, Habit
from . import feed
from .periods import coerce_frequency, to_storage
from .streaks import refresh_user_overall_streak
from .transactions import unit_of_work

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidArgumentError("Habit name is required")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidArgumentError(f"Habit name must be at most {NAME_MAX_LENGTH} characters")
    return name


def create_habit(
    user_id: int,
    name: str,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
    frequency: Frequency | str = Frequency.DAILY,
    description: str = "",
    category: str = "",
) -> Habit:
    """Create a habit and announce it in the owner's feed."""

    name = _clean_name(name)
    frequency = coerce_frequency(frequency)
    with unit_of_work(uow_factory) as uow:
        if uow.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        habit = uow.habits.create(
            Habit(
                user_id=user_id,
                name=name,
                description=description or "",
                category=category or "",
                frequency=frequency,
                created_at=to_storage(now),
            )
        )
    logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})

    try:
        feed.emit(
            user_id,
            FeedType.HABIT_CREATED,
            habit.id,
            feed.created_message(habit.name),
            now,
            uow_factory=uow_factory,
        )
    except StoreUnavailableError:
        logger.exception("Feed emission failed after habit creation", extra={"habit_id": habit.id})
    return habit


def list_habits(user_id: int, *, uow_factory: UnitOfWorkFactory) -> list[Habit]:
    with unit_of_work(uow_factory) as uow:
        return uow.habits.list_for_user(user_id)


def get_habit(habit_id: int, requesting_user_id: int, *, uow_factory: UnitOfWorkFactory) -> Habit:
    with unit_of_work(uow_factory) as uow:
        habit = uow.habits.get_by_id(habit_id)
        if habit is None or habit.user_id != requesting_user_id:
            raise NotFoundError("Habit not found")
        return habit


def update_habit(
    habit_id: int,
    requesting_user_id: int,
    *,
    uow_factory: UnitOfWorkFactory,
    name: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
    frequency: Frequency | str | None = None,
) -> Habit:
    """Edit descriptive fields of a habit.

    Streak counters are not touched; changing the frequency only affects
    periods from the next completion on.
    """

    fields: dict[str, object] = {}
    if name is not None:
        fields["name"] = _clean_name(name)
    if description is not None:
        fields["description"] = description
    if category is not None:
        fields["category"] = category
    if frequency is not None:
        fields["frequency"] = coerce_frequency(frequency)

    with unit_of_work(uow_factory) as uow:
        habit = uow.habits.get_for_update(habit_id)
        if habit is None or habit.user_id != requesting_user_id:
            raise NotFoundError("Habit not found")
        if fields:
            habit = uow.habits.update_fields(habit, **fields)
    return habit


def delete_habit(
    habit_id: int,
    requesting_user_id: int,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
    tz: str | tzinfo | None = None,
) -> None:
    """Delete a habit with its completions and rebuild the owner's aggregate streak."""

    with unit_of_work(uow_factory) as uow:
        habit = uow.habits.get_for_update(habit_id)
        if habit is None or habit.user_id != requesting_user_id:
            raise NotFoundError("Habit not found")
        uow.habits.delete(habit)
        refresh_user_overall_streak(uow, requesting_user_id, now, tz)
    logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": requesting_user_id})


__all__ = ["create_habit", "delete_habit", "get_habit", "list_habits", "update_habit"]
