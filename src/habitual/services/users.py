"""User management services.

Credentials and sessions are handled outside this package; users here only
carry identity and the cached aggregate streak.
"""

from __future__ import annotations

from ..domain.repositories import UnitOfWorkFactory
from ..errors import ConflictError, InvalidArgumentError, NotFoundError
from ..models.user import User
from .transactions import unit_of_work

USERNAME_TAKEN = "Username already exists"


def create_user(username: str, *, uow_factory: UnitOfWorkFactory) -> User:
    """Create a user with zeroed streak counters."""

    username = (username or "").strip()
    if not username:
        raise InvalidArgumentError("Username is required")
    with unit_of_work(uow_factory, conflict_message=USERNAME_TAKEN) as uow:
        if uow.users.get_by_username(username) is not None:
            raise ConflictError(USERNAME_TAKEN)
        return uow.users.create(User(username=username))


def get_user(user_id: int, *, uow_factory: UnitOfWorkFactory) -> User:
    """Fetch a user or raise ``NotFoundError``."""

    with unit_of_work(uow_factory) as uow:
        user = uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user


__all__ = ["USERNAME_TAKEN", "create_user", "get_user"]
