"""SQLModel table exports."""

from .feed import FeedEntry, FeedType
from .follow import FollowRelationship, FollowStatus
from .habit import Completion, Frequency, Habit
from .user import User

__all__ = [
    "Completion",
    "FeedEntry",
    "FeedType",
    "FollowRelationship",
    "FollowStatus",
    "Frequency",
    "Habit",
    "User",
]
