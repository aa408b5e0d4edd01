"""SQLModel implementation of the reminder space repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import col, select

from ...models.reminder import DEFAULT_SPACE_NAME, Reminder, ReminderSpace
from ..database import SessionFactory
from .base import apply_changes

SPACE_FIELDS = ("name", "icon", "color", "description")


class SQLModelReminderSpaceRepository:
    """Reminder spaces, oldest first, scoped to one user per call."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, space_id: str, *, user_id: str) -> Optional[ReminderSpace]:
        with self.session_factory() as session:
            obj = session.exec(
                select(ReminderSpace).where(
                    ReminderSpace.id == space_id, ReminderSpace.user_id == user_id
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[ReminderSpace]:
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(ReminderSpace)
                    .where(ReminderSpace.user_id == user_id)
                    .order_by(col(ReminderSpace.created_at))
                ).all()
            )
            session.expunge_all()
            return rows

    def create(self, space: ReminderSpace, *, user_id: str) -> ReminderSpace:
        with self.session_factory() as session:
            space.user_id = user_id
            session.add(space)
            session.commit()
            session.refresh(space)
            session.expunge(space)
            return space

    def get_default(self, *, user_id: str) -> ReminderSpace:
        """Return the user's "General" space, creating it on first use."""

        with self.session_factory() as session:
            space = session.exec(
                select(ReminderSpace)
                .where(ReminderSpace.user_id == user_id)
                .where(ReminderSpace.name == DEFAULT_SPACE_NAME)
                .order_by(col(ReminderSpace.created_at))
            ).first()
            if space is not None:
                session.expunge(space)
                return space
        return self.create(ReminderSpace(name=DEFAULT_SPACE_NAME), user_id=user_id)

    def update(self, space_id: str, changes: dict, *, user_id: str) -> Optional[ReminderSpace]:
        with self.session_factory() as session:
            space = session.exec(
                select(ReminderSpace).where(
                    ReminderSpace.id == space_id, ReminderSpace.user_id == user_id
                )
            ).first()
            if space is None:
                return None
            apply_changes(space, changes, SPACE_FIELDS)
            session.add(space)
            session.commit()
            session.refresh(space)
            session.expunge(space)
            return space

    def delete(self, space_id: str, *, user_id: str) -> bool:
        """Delete a space; its reminders stay, detached from any space."""

        with self.session_factory() as session:
            space = session.exec(
                select(ReminderSpace).where(
                    ReminderSpace.id == space_id, ReminderSpace.user_id == user_id
                )
            ).first()
            if space is None:
                return False
            for reminder in session.exec(select(Reminder).where(Reminder.space_id == space_id)).all():
                reminder.space_id = None
                session.add(reminder)
            session.flush()
            session.delete(space)
            session.commit()
            return True
