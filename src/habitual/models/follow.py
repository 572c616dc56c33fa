"""Follow relationships between users."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FollowStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class FollowRelationship(SQLModel, table=True):
    """Directed edge from ``follower_id`` to ``target_user_id``.

    At most one row exists per pair; a rejected row is reused when the
    follower asks again.
    """

    __tablename__: ClassVar[str] = "follow_relationship"
    __table_args__ = (
        UniqueConstraint("target_user_id", "follower_id", name="uq_follow_pair"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    target_user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    follower_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    status: FollowStatus = Field(default=FollowStatus.PENDING, nullable=False, index=True)
    created_at: datetime = Field(nullable=False)
    updated_at: datetime = Field(nullable=False)
