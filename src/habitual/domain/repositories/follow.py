"""Follow relationship repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from ...models.follow import FollowRelationship, FollowStatus


class FollowRepository(Protocol):
    """Repository for follow relationships, one row per (target, follower) pair."""

    def get_for_update(self, relationship_id: int) -> Optional[FollowRelationship]:
        """Fetch a relationship and lock its row for the rest of the transaction."""
        ...

    def get_by_pair(self, target_user_id: int, follower_id: int) -> Optional[FollowRelationship]:
        ...

    def create(self, relationship: FollowRelationship) -> FollowRelationship:
        """Insert a relationship; raises on a duplicate pair."""
        ...

    def update_fields(self, relationship: FollowRelationship, **fields: Any) -> FollowRelationship:
        ...

    def resolve_pending(
        self, relationship: FollowRelationship, status: FollowStatus, updated_at: datetime
    ) -> bool:
        """Move a PENDING row to ``status``; False when it is no longer PENDING."""
        ...

    def list_by_target(self, target_user_id: int, status: FollowStatus) -> list[FollowRelationship]:
        """Relationships pointing at ``target_user_id`` with the given status."""
        ...

    def list_by_follower(self, follower_id: int, status: FollowStatus) -> list[FollowRelationship]:
        """Relationships started by ``follower_id`` with the given status."""
        ...
