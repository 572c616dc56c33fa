"""SQLModel implementation of Follow repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import update
from sqlmodel import Session, col, select

from ...models.follow import FollowRelationship, FollowStatus


class SQLModelFollowRepository:
    """Follow relationship storage bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def get_for_update(self, relationship_id: int) -> Optional[FollowRelationship]:
        statement = (
            select(FollowRelationship)
            .where(FollowRelationship.id == relationship_id)
            .with_for_update()
        )
        return self.session.exec(statement).first()

    def get_by_pair(self, target_user_id: int, follower_id: int) -> Optional[FollowRelationship]:
        statement = (
            select(FollowRelationship)
            .where(FollowRelationship.target_user_id == target_user_id)
            .where(FollowRelationship.follower_id == follower_id)
            .with_for_update()
        )
        return self.session.exec(statement).first()

    def create(self, relationship: FollowRelationship) -> FollowRelationship:
        self.session.add(relationship)
        self.session.flush()
        self.session.refresh(relationship)
        return relationship

    def update_fields(self, relationship: FollowRelationship, **fields: Any) -> FollowRelationship:
        for name, value in fields.items():
            setattr(relationship, name, value)
        self.session.add(relationship)
        self.session.flush()
        return relationship

    def resolve_pending(
        self, relationship: FollowRelationship, status: FollowStatus, updated_at: datetime
    ) -> bool:
        """Conditional write; only one of several racing responses matches PENDING."""
        statement = (
            update(FollowRelationship)
            .where(col(FollowRelationship.id) == relationship.id)
            .where(col(FollowRelationship.status) == FollowStatus.PENDING)
            .values(status=status, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(statement)
        if result.rowcount != 1:
            return False
        self.session.refresh(relationship)
        return True

    def list_by_target(self, target_user_id: int, status: FollowStatus) -> list[FollowRelationship]:
        statement = (
            select(FollowRelationship)
            .where(FollowRelationship.target_user_id == target_user_id)
            .where(FollowRelationship.status == status)
            .order_by(col(FollowRelationship.updated_at), col(FollowRelationship.id))
        )
        return list(self.session.exec(statement).all())

    def list_by_follower(self, follower_id: int, status: FollowStatus) -> list[FollowRelationship]:
        statement = (
            select(FollowRelationship)
            .where(FollowRelationship.follower_id == follower_id)
            .where(FollowRelationship.status == status)
            .order_by(col(FollowRelationship.updated_at), col(FollowRelationship.id))
        )
        return list(self.session.exec(statement).all())
