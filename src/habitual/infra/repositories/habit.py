"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from typing import Any, Optional

from sqlmodel import Session, col, select

from ...models.feed import FeedEntry
from ...models.habit import Completion, Habit


class SQLModelHabitRepository:
    """SQLModel-based habit repository bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        return self.session.get(Habit, habit_id)

    def get_for_update(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit with a row lock (ignored by SQLite)."""
        statement = select(Habit).where(Habit.id == habit_id).with_for_update()
        return self.session.exec(statement).first()

    def list_for_user(self, user_id: int) -> list[Habit]:
        """List a user's habits, oldest first."""
        statement = (
            select(Habit)
            .where(Habit.user_id == user_id)
            .order_by(col(Habit.created_at), col(Habit.id))
        )
        return list(self.session.exec(statement).all())

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        self.session.add(habit)
        self.session.flush()
        self.session.refresh(habit)
        return habit

    def update_fields(self, habit: Habit, **fields: Any) -> Habit:
        """Update an existing habit in place."""
        for name, value in fields.items():
            setattr(habit, name, value)
        self.session.add(habit)
        self.session.flush()
        return habit

    def delete(self, habit: Habit) -> None:
        """Delete a habit, its completions, and its link from feed entries."""
        completions = self.session.exec(
            select(Completion).where(Completion.habit_id == habit.id)
        ).all()
        for completion in completions:
            self.session.delete(completion)

        entries = self.session.exec(select(FeedEntry).where(FeedEntry.habit_id == habit.id)).all()
        for entry in entries:
            entry.habit_id = None
            self.session.add(entry)

        self.session.flush()
        self.session.delete(habit)
        self.session.flush()
