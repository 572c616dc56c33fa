"""Feed repository protocol."""

from __future__ import annotations

from typing import Iterable, Protocol

from ...models.feed import FeedEntry


class FeedRepository(Protocol):
    def insert(self, entry: FeedEntry) -> FeedEntry:
        """Append one entry."""
        ...

    def list_for_users(self, user_ids: Iterable[int]) -> list[FeedEntry]:
        """Entries authored by any of ``user_ids``, newest first."""
        ...
