"""SQLModel implementation of the reminder repository."""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Optional

from sqlmodel import col, select

from ...models.reminder import Reminder, ReminderSpace
from ..database import SessionFactory
from .base import apply_changes, day_bounds, to_storage

REMINDER_FIELDS = (
    "space_id",
    "title",
    "description",
    "reminder_time",
    "status",
    "priority",
    "repeat_frequency",
    "location",
    "tags",
)


def _check_space(session, space_id: str | None, *, user_id: str) -> None:
    if space_id is None:
        return
    owned = session.exec(
        select(ReminderSpace.id).where(ReminderSpace.id == space_id, ReminderSpace.user_id == user_id)
    ).first()
    if owned is None:
        raise ValueError("Reminder space not found")


class SQLModelReminderRepository:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str, space_id: str | None = None) -> list[Reminder]:
        """All reminders, soonest first; ``space_id`` keeps one space only."""
        with self.session_factory() as session:
            statement = (
                select(Reminder)
                .where(Reminder.user_id == user_id)
                .order_by(col(Reminder.reminder_time))
            )
            if space_id is not None:
                statement = statement.where(Reminder.space_id == space_id)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_between(
        self,
        start: date,
        end: date,
        *,
        user_id: str,
        tz: tzinfo | None = None,
        space_id: str | None = None,
    ) -> list[Reminder]:
        """Reminders whose time falls on a local day from ``start`` to ``end`` inclusive."""
        lower, _ = day_bounds(start, tz)
        _, upper = day_bounds(end, tz)
        with self.session_factory() as session:
            statement = (
                select(Reminder)
                .where(Reminder.user_id == user_id)
                .where(Reminder.reminder_time >= lower)
                .where(Reminder.reminder_time < upper)
                .order_by(col(Reminder.reminder_time))
            )
            if space_id is not None:
                statement = statement.where(Reminder.space_id == space_id)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, reminder: Reminder, *, user_id: str) -> Reminder:
        with self.session_factory() as session:
            _check_space(session, reminder.space_id, user_id=user_id)
            reminder.user_id = user_id
            reminder.reminder_time = to_storage(reminder.reminder_time)
            session.add(reminder)
            session.commit()
            session.refresh(reminder)
            session.expunge(reminder)
            return reminder

    def update(self, reminder_id: str, changes: dict, *, user_id: str) -> Optional[Reminder]:
        with self.session_factory() as session:
            reminder = session.exec(
                select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            ).first()
            if reminder is None:
                return None
            _check_space(session, changes.get("space_id"), user_id=user_id)
            apply_changes(reminder, changes, REMINDER_FIELDS)
            session.add(reminder)
            session.commit()
            session.refresh(reminder)
            session.expunge(reminder)
            return reminder

    def complete(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        return self.update(reminder_id, {"status": "completed"}, user_id=user_id)

    def dismiss(self, reminder_id: str, *, user_id: str) -> Optional[Reminder]:
        return self.update(reminder_id, {"status": "dismissed"}, user_id=user_id)

    def delete(self, reminder_id: str, *, user_id: str) -> bool:
        with self.session_factory() as session:
            reminder = session.exec(
                select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            ).first()
            if reminder is None:
                return False
            session.delete(reminder)
            session.commit()
            return True
