"""Repository protocol definitions for domain layer."""

from .completion import CompletionRepository
from .feed import FeedRepository
from .follow import FollowRepository
from .habit import HabitRepository
from .unit_of_work import UnitOfWork, UnitOfWorkFactory
from .user import UserRepository

__all__ = [
    "CompletionRepository",
    "FeedRepository",
    "FollowRepository",
    "HabitRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserRepository",
]
