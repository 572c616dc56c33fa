"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Frequency(str, Enum):
    """How often a habit is expected to be completed."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class Habit(SQLModel, table=True):
    """A recurring habit owned by exactly one user."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    description: str = Field(default="", max_length=500)
    category: str = Field(default="", max_length=100)
    frequency: Frequency = Field(default=Frequency.DAILY, nullable=False)
    current_streak: int = Field(default=0, nullable=False, ge=0)
    longest_streak: int = Field(default=0, nullable=False, ge=0)
    # Naive UTC
    last_completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class Completion(SQLModel, table=True):
    """A single completion of a habit. Append-only."""

    __tablename__: ClassVar[str] = "completion"
    __table_args__ = (
        UniqueConstraint("habit_id", "period_key", name="uq_completion_habit_period"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    # Naive UTC
    occurred_at: datetime = Field(nullable=False, index=True)
    period_key: str = Field(nullable=False, max_length=16)
