"""Unit-of-work protocol bundling repositories over one transaction."""

from __future__ import annotations

from typing import Callable, ContextManager, Protocol

from .completion import CompletionRepository
from .feed import FeedRepository
from .follow import FollowRepository
from .habit import HabitRepository
from .user import UserRepository


class UnitOfWork(Protocol):
    """Repositories sharing a single transaction.

    The factory's context manager commits when the block exits normally and
    rolls back when it raises.
    """

    habits: HabitRepository
    completions: CompletionRepository
    users: UserRepository
    follows: FollowRepository
    feed: FeedRepository


UnitOfWorkFactory = Callable[[], ContextManager[UnitOfWork]]
