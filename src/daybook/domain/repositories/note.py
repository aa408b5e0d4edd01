"""Note repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.note import Note


class NoteRepository(Protocol):
    def get_by_id(self, note_id: str, *, user_id: str) -> Optional[Note]:
        ...

    def list_all(self, *, user_id: str, include_archived: bool = False) -> list[Note]:
        ...

    def create(self, note: Note, *, user_id: str) -> Note:
        ...

    def update(self, note_id: str, changes: dict, *, user_id: str) -> Optional[Note]:
        ...

    def delete(self, note_id: str, *, user_id: str) -> bool:
        ...
