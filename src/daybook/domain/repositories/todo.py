"""To-do repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ...models.todo import Todo, TodoNote, TodoTimer


class TodoRepository(Protocol):
    def get_by_id(self, todo_id: str, *, user_id: str) -> Optional[Todo]:
        ...

    def list_all(self, *, user_id: str, include_archived: bool = False) -> list[Todo]:
        ...

    def create(self, todo: Todo, *, user_id: str, timer_minutes: int | None = None) -> Todo:
        ...

    def update(self, todo_id: str, changes: dict, *, user_id: str) -> Optional[Todo]:
        ...

    def delete(self, todo_id: str, *, user_id: str) -> bool:
        """Delete a to-do with its subtasks, notes and timers."""
        ...

    def add_note(self, todo_id: str, content: str, *, user_id: str) -> Optional[TodoNote]:
        ...

    def delete_note(self, note_id: str, *, user_id: str) -> bool:
        ...

    def list_notes(self, todo_ids: Sequence[str], *, user_id: str) -> list[TodoNote]:
        ...

    def get_timer(self, todo_id: str, *, user_id: str) -> Optional[TodoTimer]:
        ...

    def list_timers(self, todo_ids: Sequence[str], *, user_id: str) -> list[TodoTimer]:
        ...

    def upsert_timer(self, todo_id: str, changes: dict, *, user_id: str) -> Optional[TodoTimer]:
        ...
