"""Habit repository protocol."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Protocol, Sequence

from ...models.habit import Habit, HabitCompletion


class HabitRepository(Protocol):
    """Repository for habits and their completion marks."""

    def get_by_id(self, habit_id: str, *, user_id: str) -> Optional[Habit]:
        ...

    def list_all(self, *, user_id: str, include_inactive: bool = False) -> list[Habit]:
        ...

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        ...

    def update(self, habit_id: str, changes: dict, *, user_id: str) -> Optional[Habit]:
        ...

    def delete(self, habit_id: str, *, user_id: str) -> bool:
        """Delete a habit and its completions."""
        ...

    def add_completion(
        self, habit_id: str, *, user_id: str, completed_at: datetime
    ) -> Optional[HabitCompletion]:
        ...

    def remove_completions_on(
        self, habit_id: str, day: date, *, user_id: str, tz: tzinfo | None = None
    ) -> int:
        """Delete every completion on a calendar day (delete-by-day, not by id)."""
        ...

    def completions_for(
        self, habit_ids: Sequence[str], *, user_id: str, since: datetime | None = None
    ) -> list[HabitCompletion]:
        ...

    def is_completed_on(
        self, habit_id: str, day: date, *, user_id: str, tz: tzinfo | None = None
    ) -> bool:
        ...

    def toggle_completion(
        self, habit_id: str, day: date, *, user_id: str, now: datetime, tz: tzinfo | None = None
    ) -> Optional[bool]:
        ...
