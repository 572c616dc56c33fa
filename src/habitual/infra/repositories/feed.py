"""SQLModel implementation of Feed repository."""

from __future__ import annotations

from typing import Iterable

from sqlmodel import Session, col, select

from ...models.feed import FeedEntry


class SQLModelFeedRepository:
    def __init__(self, session: Session):
        self.session = session

    def insert(self, entry: FeedEntry) -> FeedEntry:
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry

    def list_for_users(self, user_ids: Iterable[int]) -> list[FeedEntry]:
        ids = list(user_ids)
        if not ids:
            return []
        statement = (
            select(FeedEntry)
            .where(col(FeedEntry.user_id).in_(ids))
            .order_by(col(FeedEntry.created_at).desc(), col(FeedEntry.id).desc())
        )
        return list(self.session.exec(statement).all())
