"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Any, Optional

from sqlmodel import Session, select

from ...models.user import User


class SQLModelUserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_for_update(self, user_id: int) -> Optional[User]:
        statement = select(User).where(User.id == user_id).with_for_update()
        return self.session.exec(statement).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def create(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def update_fields(self, user: User, **fields: Any) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        self.session.add(user)
        self.session.flush()
        return user
