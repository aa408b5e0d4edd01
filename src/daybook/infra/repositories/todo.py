"""SQLModel implementation of the to-do repository."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlmodel import col, select

from ...models.todo import Todo, TodoNote, TodoTimer
from ..database import SessionFactory
from .base import apply_changes, to_storage

TODO_FIELDS = ("title", "description", "status", "due_date", "priority", "parent_id", "is_expanded")
TIMER_FIELDS = ("duration_minutes", "start_time", "paused_time_remaining", "is_running", "completed")


class SQLModelTodoRepository:
    """To-dos plus their notes and timers, scoped to one user per call."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, todo_id: str, *, user_id: str) -> Optional[Todo]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str, include_archived: bool = False) -> list[Todo]:
        with self.session_factory() as session:
            statement = (
                select(Todo).where(Todo.user_id == user_id).order_by(col(Todo.created_at).desc())
            )
            if not include_archived:
                statement = statement.where(Todo.status != "archived")
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, todo: Todo, *, user_id: str, timer_minutes: int | None = None) -> Todo:
        """Insert a to-do, optionally with a stopped timer of ``timer_minutes``."""
        with self.session_factory() as session:
            if todo.parent_id is not None:
                parent = session.exec(
                    select(Todo.id).where(Todo.id == todo.parent_id, Todo.user_id == user_id)
                ).first()
                if parent is None:
                    raise ValueError("Parent to-do not found")
            todo.user_id = user_id
            todo.due_date = to_storage(todo.due_date)
            session.add(todo)
            session.flush()
            if timer_minutes:
                session.add(TodoTimer(todo_id=todo.id, duration_minutes=timer_minutes))
            session.commit()
            session.refresh(todo)
            session.expunge(todo)
            return todo

    def update(self, todo_id: str, changes: dict, *, user_id: str) -> Optional[Todo]:
        with self.session_factory() as session:
            todo = session.exec(
                select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)
            ).first()
            if todo is None:
                return None
            parent_id = changes.get("parent_id")
            if parent_id == todo_id:
                raise ValueError("A to-do cannot be its own parent")
            if parent_id is not None:
                self._check_new_parent(session, todo_id, parent_id, user_id=user_id)
            apply_changes(todo, changes, TODO_FIELDS)
            session.add(todo)
            session.commit()
            session.refresh(todo)
            session.expunge(todo)
            return todo

    @staticmethod
    def _check_new_parent(session, todo_id: str, parent_id: str, *, user_id: str) -> None:
        """Reject a parent that is missing or sits below ``todo_id`` in the tree."""

        if session.exec(
            select(Todo.id).where(Todo.id == parent_id, Todo.user_id == user_id)
        ).first() is None:
            raise ValueError("Parent to-do not found")

        seen: set[str] = set()
        cursor: Optional[str] = parent_id
        while cursor is not None and cursor not in seen:
            if cursor == todo_id:
                raise ValueError("A to-do cannot be moved under its own subtask")
            seen.add(cursor)
            cursor = session.exec(
                select(Todo.parent_id).where(Todo.id == cursor, Todo.user_id == user_id)
            ).first()

    def delete(self, todo_id: str, *, user_id: str) -> bool:
        """Delete a to-do, all of its subtasks, and their notes and timers."""
        with self.session_factory() as session:
            root = session.exec(
                select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)
            ).first()
            if root is None:
                return False

            doomed = [root.id]
            frontier = [root.id]
            while frontier:
                children = session.exec(
                    select(Todo.id)
                    .where(Todo.user_id == user_id)
                    .where(col(Todo.parent_id).in_(frontier))
                ).all()
                frontier = [child for child in children if child not in doomed]
                doomed.extend(frontier)

            for model in (TodoNote, TodoTimer):
                for row in session.exec(select(model).where(col(model.todo_id).in_(doomed))).all():
                    session.delete(row)
            session.flush()
            # Leaves first so no row points at an already deleted parent.
            for doomed_id in reversed(doomed):
                todo = session.get(Todo, doomed_id)
                if todo is not None:
                    session.delete(todo)
                    session.flush()
            session.commit()
            return True

    # Notes
    def add_note(self, todo_id: str, content: str, *, user_id: str) -> Optional[TodoNote]:
        with self.session_factory() as session:
            owned = session.exec(
                select(Todo.id).where(Todo.id == todo_id, Todo.user_id == user_id)
            ).first()
            if owned is None:
                return None
            note = TodoNote(todo_id=todo_id, content=content)
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def delete_note(self, note_id: str, *, user_id: str) -> bool:
        with self.session_factory() as session:
            note = session.exec(
                select(TodoNote)
                .join(Todo, Todo.id == TodoNote.todo_id)
                .where(TodoNote.id == note_id, Todo.user_id == user_id)
            ).first()
            if note is None:
                return False
            session.delete(note)
            session.commit()
            return True

    def list_notes(self, todo_ids: Sequence[str], *, user_id: str) -> list[TodoNote]:
        if not todo_ids:
            return []
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(TodoNote)
                    .join(Todo, Todo.id == TodoNote.todo_id)
                    .where(Todo.user_id == user_id)
                    .where(col(TodoNote.todo_id).in_(list(todo_ids)))
                    .order_by(col(TodoNote.created_at))
                ).all()
            )
            session.expunge_all()
            return rows

    # Timers
    def get_timer(self, todo_id: str, *, user_id: str) -> Optional[TodoTimer]:
        with self.session_factory() as session:
            timer = session.exec(
                select(TodoTimer)
                .join(Todo, Todo.id == TodoTimer.todo_id)
                .where(TodoTimer.todo_id == todo_id, Todo.user_id == user_id)
            ).first()
            if timer:
                session.expunge(timer)
            return timer

    def list_timers(self, todo_ids: Sequence[str], *, user_id: str) -> list[TodoTimer]:
        if not todo_ids:
            return []
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(TodoTimer)
                    .join(Todo, Todo.id == TodoTimer.todo_id)
                    .where(Todo.user_id == user_id)
                    .where(col(TodoTimer.todo_id).in_(list(todo_ids)))
                ).all()
            )
            session.expunge_all()
            return rows

    def upsert_timer(self, todo_id: str, changes: dict, *, user_id: str) -> Optional[TodoTimer]:
        """Create the to-do's timer or update the existing one."""
        with self.session_factory() as session:
            owned = session.exec(
                select(Todo.id).where(Todo.id == todo_id, Todo.user_id == user_id)
            ).first()
            if owned is None:
                return None
            timer = session.exec(select(TodoTimer).where(TodoTimer.todo_id == todo_id)).first()
            if timer is None:
                timer = TodoTimer(todo_id=todo_id)
            apply_changes(timer, changes, TIMER_FIELDS)
            session.add(timer)
            session.commit()
            session.refresh(timer)
            session.expunge(timer)
            return timer
