"""Note form definitions."""

from __future__ import annotations

from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NoteType = Literal["text", "rich_text", "drawing", "checklist"]


class NoteForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    content: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=16)
    tags: list[str] = Field(default_factory=list)
    note_type: NoteType = "text"
    is_pinned: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: str | Iterable[str] | None) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [tag for tag in (part.strip() for part in value.split(",")) if tag]
        return value


class NoteUpdateForm(NoteForm):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)  # type: ignore[assignment]
    note_type: Optional[NoteType] = None  # type: ignore[assignment]
    is_pinned: Optional[bool] = None  # type: ignore[assignment]
    is_archived: Optional[bool] = None

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in {"content", "color"}
        }


__all__ = ["NoteForm", "NoteUpdateForm"]
