"""Habit repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Repository for managing habit entities."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def get_for_update(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit and lock its row until the unit of work ends."""
        ...

    def list_for_user(self, user_id: int) -> list[Habit]:
        """List the habits a user owns, oldest first."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Persist a new habit."""
        ...

    def update_fields(self, habit: Habit, **fields: Any) -> Habit:
        """Write the given column values onto an existing habit."""
        ...

    def delete(self, habit: Habit) -> None:
        """Delete a habit together with its completions."""
        ...
