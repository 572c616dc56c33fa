"""SQLModel implementation of Completion repository."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Session, col, select

from ...models.habit import Completion, Habit


class SQLModelCompletionRepository:
    """Completion storage; datetimes in and out are naive UTC."""

    def __init__(self, session: Session):
        self.session = session

    def insert(self, habit_id: int, occurred_at: datetime, period_key: str) -> Completion:
        """Insert a completion row.

        Flushes immediately so a ``(habit_id, period_key)`` uniqueness
        violation surfaces here as ``IntegrityError``.
        """
        completion = Completion(habit_id=habit_id, occurred_at=occurred_at, period_key=period_key)
        self.session.add(completion)
        self.session.flush()
        self.session.refresh(completion)
        return completion

    def exists_in_window(self, habit_id: int, start: datetime, end: datetime) -> bool:
        statement = (
            select(Completion.id)
            .where(Completion.habit_id == habit_id)
            .where(Completion.occurred_at >= start)
            .where(Completion.occurred_at < end)
        )
        return self.session.exec(statement).first() is not None

    def list_for_habit(self, habit_id: int, *, newest_first: bool = True) -> list[Completion]:
        """Return all completions for a habit ordered by date."""
        order = col(Completion.occurred_at).desc() if newest_first else col(Completion.occurred_at)
        statement = select(Completion).where(Completion.habit_id == habit_id).order_by(order)
        return list(self.session.exec(statement).all())

    def list_for_user(self, user_id: int) -> list[Completion]:
        """Return completions across all of a user's habits, oldest first."""
        statement = (
            select(Completion)
            .join(Habit, col(Habit.id) == col(Completion.habit_id))
            .where(Habit.user_id == user_id)
            .order_by(col(Completion.occurred_at))
        )
        return list(self.session.exec(statement).all())
