"""User repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_for_update(self, user_id: int) -> Optional[User]:
        """Fetch a user and lock its row; serializes aggregate streak rebuilds."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def create(self, user: User) -> User:
        ...

    def update_fields(self, user: User, **fields: Any) -> User:
        ...
