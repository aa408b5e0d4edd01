"""Reminder repository protocol."""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Optional, Protocol

from ...models.reminder import Reminder, ReminderSpace


class ReminderRepository(Protocol):
    def get_by_id(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        ...

    def list_all(self, *, user_id: str, space_id: str | None = None) -> list[Reminder]:
        ...

    def list_between(
        self,
        start: date,
        end: date,
        *,
        user_id: str,
        tz: tzinfo | None = None,
        space_id: str | None = None,
    ) -> list[Reminder]:
        ...

    def create(self, reminder: Reminder, *, user_id: str) -> Reminder:
        ...

    def update(self, reminder_id: str, changes: dict, *, user_id: str) -> Optional[Reminder]:
        ...

    def complete(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        ...

    def dismiss(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        ...

    def delete(self, reminder_id: str, *, user_id: str) -> bool:
        ...


class ReminderSpaceRepository(Protocol):
    def get_by_id(self, space_id: str, *, user_id: str) -> Optional[ReminderSpace]:
        ...

    def list_all(self, *, user_id: str) -> list[ReminderSpace]:
        ...

    def create(self, space: ReminderSpace, *, user_id: str) -> ReminderSpace:
        ...

    def get_default(self, *, user_id: str) -> ReminderSpace:
        ...

    def update(self, space_id: str, changes: dict, *, user_id: str) -> Optional[ReminderSpace]:
        ...

    def delete(self, space_id: str, *, user_id: str) -> bool:
        ...
