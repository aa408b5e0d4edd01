"""SQLModel implementation of the note repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import col, select

from ...models.note import Note
from ...services.notes import text_stats
from ..database import SessionFactory
from .base import apply_changes

NOTE_FIELDS = ("title", "content", "color", "tags", "note_type", "is_pinned", "is_archived")


class SQLModelNoteRepository:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, note_id: str, *, user_id: str) -> Optional[Note]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str, include_archived: bool = False) -> list[Note]:
        """Pinned notes first, then most recently updated."""
        with self.session_factory() as session:
            statement = (
                select(Note)
                .where(Note.user_id == user_id)
                .order_by(col(Note.is_pinned).desc(), col(Note.updated_at).desc())
            )
            if not include_archived:
                statement = statement.where(Note.is_archived == False)  # noqa: E712
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, note: Note, *, user_id: str) -> Note:
        with self.session_factory() as session:
            note.user_id = user_id
            note.word_count, note.character_count = text_stats(note.content)
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def update(self, note_id: str, changes: dict, *, user_id: str) -> Optional[Note]:
        with self.session_factory() as session:
            note = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if note is None:
                return None
            apply_changes(note, changes, NOTE_FIELDS)
            note.word_count, note.character_count = text_stats(note.content)
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def delete(self, note_id: str, *, user_id: str) -> bool:
        with self.session_factory() as session:
            note = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if note is None:
                return False
            session.delete(note)
            session.commit()
            return True
