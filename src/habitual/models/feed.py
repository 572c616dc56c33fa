"""Activity feed entries."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class FeedType(str, Enum):
    HABIT_CREATED = "HABIT_CREATED"
    HABIT_COMPLETED = "HABIT_COMPLETED"
    STREAK_UPDATED = "STREAK_UPDATED"


class FeedEntry(SQLModel, table=True):
    """Immutable activity record shown in followers' feeds."""

    __tablename__: ClassVar[str] = "feed_entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    # Cleared when the habit is deleted; the entry itself stays.
    habit_id: Optional[int] = Field(default=None, foreign_key="habit.id", index=True)
    type: FeedType = Field(nullable=False)
    message: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(nullable=False, index=True)
