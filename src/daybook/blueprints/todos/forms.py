"""To-do form definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TodoStatus = Literal["pending", "completed", "archived"]
Priority = Literal["low", "medium", "high"]
TimerAction = Literal["start", "pause", "reset", "complete"]

_NON_NULLABLE = frozenset({"title", "status", "is_expanded"})


class TodoForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    parent_id: Optional[str] = None
    timer_minutes: Optional[int] = Field(default=None, ge=1, le=240)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a title.")
        return value

    def todo_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude={"timer_minutes"})


class TodoUpdateForm(BaseModel):
    """Partial update of a to-do; absent fields are left untouched."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TodoStatus] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    parent_id: Optional[str] = None
    is_expanded: Optional[bool] = None

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {key: value for key, value in data.items() if value is not None or key not in _NON_NULLABLE}


class TodoNoteForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=2000)


class TimerForm(BaseModel):
    action: TimerAction
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=240)


__all__ = ["TimerForm", "TodoForm", "TodoNoteForm", "TodoUpdateForm"]
