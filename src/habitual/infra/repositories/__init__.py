"""Concrete repository implementations using SQLModel."""

from .completion import SQLModelCompletionRepository
from .feed import SQLModelFeedRepository
from .follow import SQLModelFollowRepository
from .habit import SQLModelHabitRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelCompletionRepository",
    "SQLModelFeedRepository",
    "SQLModelFollowRepository",
    "SQLModelHabitRepository",
    "SQLModelUserRepository",
]
