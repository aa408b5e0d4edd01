"""Reminder form definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Priority = Literal["low", "medium", "high"]
RepeatFrequency = Literal["none", "daily", "weekly", "monthly"]
ReminderStatus = Literal["pending", "completed", "dismissed"]


def _split_tags(value: str | Iterable[str] | None) -> list[str] | Iterable[str]:
    """Convert comma-separated tag strings into a list."""

    if value is None:
        return []
    if isinstance(value, str):
        return [tag for tag in (part.strip() for part in value.split(",")) if tag]
    return value


class ReminderForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    space_id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    reminder_time: datetime
    priority: Priority = "medium"
    repeat_frequency: RepeatFrequency = "none"
    location: Optional[str] = Field(default=None, max_length=200)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return _split_tags(value)


class ReminderUpdateForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    space_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    reminder_time: Optional[datetime] = None
    status: Optional[ReminderStatus] = None
    priority: Optional[Priority] = None
    repeat_frequency: Optional[RepeatFrequency] = None
    location: Optional[str] = Field(default=None, max_length=200)
    tags: Optional[list[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return _split_tags(value)

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in {"space_id", "description", "location"}
        }


class ReminderSpaceForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=80)
    icon: str = Field(default="Bell", min_length=1, max_length=40)
    color: str = Field(default="bg-blue-500", min_length=1, max_length=40)
    description: Optional[str] = Field(default=None, max_length=500)


class ReminderSpaceUpdateForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=40)
    color: Optional[str] = Field(default=None, min_length=1, max_length=40)
    description: Optional[str] = Field(default=None, max_length=500)

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {key: value for key, value in data.items() if value is not None or key == "description"}


__all__ = ["ReminderForm", "ReminderSpaceForm", "ReminderSpaceUpdateForm", "ReminderUpdateForm"]
