"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional, Sequence

from sqlmodel import col, select

from ...models.habit import Habit, HabitCompletion
from ...services.dates import local_date
from ..database import SessionFactory
from .base import apply_changes, day_bounds, to_storage

HABIT_FIELDS = ("title", "description", "frequency", "frequency_days", "habit_type", "is_active")


class SQLModelHabitRepository:
    """Habits and their completion marks, scoped to one user per call."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, habit_id: str, *, user_id: str) -> Optional[Habit]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str, include_inactive: bool = False) -> list[Habit]:
        """Newest first, like the habit list renders them."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(col(Habit.created_at).desc())
            )
            if not include_inactive:
                statement = statement.where(Habit.is_active == True)  # noqa: E712
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit_id: str, changes: dict, *, user_id: str) -> Optional[Habit]:
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return None
            if "frequency_days" in changes:
                changes = {**changes, "frequency_days": list(changes["frequency_days"] or [])}
            apply_changes(habit, changes, HABIT_FIELDS)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: str, *, user_id: str) -> bool:
        """Delete a habit together with its completions."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return False
            completions = session.exec(
                select(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            ).all()
            for completion in completions:
                session.delete(completion)
            session.flush()
            session.delete(habit)
            session.commit()
            return True

    # Completion operations
    def add_completion(
        self, habit_id: str, *, user_id: str, completed_at: datetime
    ) -> Optional[HabitCompletion]:
        """Record one completion; returns None when the habit is not the user's."""
        with self.session_factory() as session:
            owned = session.exec(
                select(Habit.id).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if owned is None:
                return None
            completion = HabitCompletion(habit_id=habit_id, completed_at=to_storage(completed_at))
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def remove_completions_on(
        self, habit_id: str, day: date, *, user_id: str, tz: tzinfo | None = None
    ) -> int:
        """Delete every completion of the habit that falls on ``day``; returns the count."""
        start, end = day_bounds(day, tz)
        with self.session_factory() as session:
            rows = session.exec(
                select(HabitCompletion)
                .join(Habit, Habit.id == HabitCompletion.habit_id)
                .where(Habit.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_at >= start)
                .where(HabitCompletion.completed_at < end)
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()
            return len(rows)

    def completions_for(
        self,
        habit_ids: Sequence[str],
        *,
        user_id: str,
        since: datetime | None = None,
    ) -> list[HabitCompletion]:
        """Completions of the given habits, oldest first, optionally from ``since`` on."""
        if not habit_ids:
            return []
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .join(Habit, Habit.id == HabitCompletion.habit_id)
                .where(Habit.user_id == user_id)
                .where(col(HabitCompletion.habit_id).in_(list(habit_ids)))
                .order_by(col(HabitCompletion.completed_at))
            )
            if since is not None:
                statement = statement.where(HabitCompletion.completed_at >= to_storage(since))
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def is_completed_on(
        self, habit_id: str, day: date, *, user_id: str, tz: tzinfo | None = None
    ) -> bool:
        start, end = day_bounds(day, tz)
        with self.session_factory() as session:
            found = session.exec(
                select(HabitCompletion.id)
                .join(Habit, Habit.id == HabitCompletion.habit_id)
                .where(Habit.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_at >= start)
                .where(HabitCompletion.completed_at < end)
                .limit(1)
            ).first()
            return found is not None

    def toggle_completion(
        self,
        habit_id: str,
        day: date,
        *,
        user_id: str,
        now: datetime,
        tz: tzinfo | None = None,
    ) -> Optional[bool]:
        """Flip the habit's done state for ``day``; returns the new state.

        Un-marking removes every completion on that day. Marking a day other
        than ``now``'s stamps the completion at local noon so it stays on that
        day. Returns None when the habit does not belong to the user.
        """
        if self.get_by_id(habit_id, user_id=user_id) is None:
            return None
        if self.is_completed_on(habit_id, day, user_id=user_id, tz=tz):
            self.remove_completions_on(habit_id, day, user_id=user_id, tz=tz)
            return False

        if local_date(now, tz) == day:
            stamp = now
        else:
            stamp = datetime.combine(day, time(hour=12), tzinfo=tz)
        self.add_completion(habit_id, user_id=user_id, completed_at=stamp)
        return True
