"""User model carrying cached aggregate streak counters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Application user.

    ``overall_streak`` and ``longest_overall_streak`` are a cache of the
    aggregate reconstruction over every completion of every habit the user
    owns. They are overwritten wholesale, never incremented.
    """

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    overall_streak: int = Field(default=0, nullable=False, ge=0)
    longest_overall_streak: int = Field(default=0, nullable=False, ge=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None),
        nullable=False,
    )
