"""Activity feed: appending entries and reading them back."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..domain.repositories import UnitOfWorkFactory
from ..models.feed import FeedEntry, FeedType
from ..models.follow import FollowStatus
from .periods import to_storage
from .transactions import unit_of_work

logger = logging.getLogger(__name__)


def completed_message(habit_name: str) -> str:
    return f"Completed: {habit_name}"


def streak_message(habit_name: str, streak: int) -> str:
    return f"{streak}-day streak on {habit_name}"


def created_message(habit_name: str) -> str:
    return f"Started habit: {habit_name}"


def emit(
    user_id: int,
    type: FeedType,
    habit_id: Optional[int],
    message: str,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
) -> FeedEntry:
    """Append one immutable feed entry in its own unit of work.

    Storage failures propagate as ``StoreUnavailableError``.
    """

    with unit_of_work(uow_factory) as uow:
        entry = uow.feed.insert(
            FeedEntry(
                user_id=user_id,
                habit_id=habit_id,
                type=FeedType(type),
                message=message,
                created_at=to_storage(now),
            )
        )
    logger.info(
        "Feed entry emitted",
        extra={"user_id": user_id, "habit_id": habit_id, "feed_type": entry.type.value},
    )
    return entry


def get_feed(viewer_id: int, *, uow_factory: UnitOfWorkFactory) -> list[FeedEntry]:
    """The viewer's own entries plus those of users they follow (accepted only)."""

    with unit_of_work(uow_factory) as uow:
        following = uow.follows.list_by_follower(viewer_id, FollowStatus.ACCEPTED)
        author_ids = {rel.target_user_id for rel in following}
        author_ids.add(viewer_id)
        return uow.feed.list_for_users(sorted(author_ids))


def get_user_feed(user_id: int, *, uow_factory: UnitOfWorkFactory) -> list[FeedEntry]:
    """Entries authored by one user, newest first."""

    with unit_of_work(uow_factory) as uow:
        return uow.feed.list_for_users([user_id])


__all__ = [
    "completed_message",
    "created_message",
    "emit",
    "get_feed",
    "get_user_feed",
    "streak_message",
]
