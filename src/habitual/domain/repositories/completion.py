"""Completion repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ...models.habit import Completion


class CompletionRepository(Protocol):
    """Append-only store of habit completions.

    Instants crossing this boundary are naive UTC.
    """

    def insert(self, habit_id: int, occurred_at: datetime, period_key: str) -> Completion:
        """Insert a completion; raises on a duplicate ``(habit_id, period_key)``."""
        ...

    def exists_in_window(self, habit_id: int, start: datetime, end: datetime) -> bool:
        """Return True if the habit has a completion in ``[start, end)``."""
        ...

    def list_for_habit(self, habit_id: int, *, newest_first: bool = True) -> list[Completion]:
        """List one habit's completions."""
        ...

    def list_for_user(self, user_id: int) -> list[Completion]:
        """List completions across every habit the user owns, oldest first."""
        ...
