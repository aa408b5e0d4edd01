"""Reminder data structures."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


DEFAULT_SPACE_NAME = "General"


class ReminderSpace(SQLModel, table=True):
    """A user-owned group of reminders, shown with its own icon and colour."""

    __tablename__: ClassVar[str] = "reminder_space"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80)
    icon: str = Field(default="Bell", nullable=False, max_length=40)
    color: str = Field(default="bg-blue-500", nullable=False, max_length=40)
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)


class Reminder(SQLModel, table=True):
    """A single-instant reminder."""

    __tablename__: ClassVar[str] = "reminder"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    space_id: Optional[str] = Field(default=None, foreign_key="reminder_space.id", index=True)
    title: str = Field(nullable=False, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    reminder_time: datetime = Field(nullable=False, index=True)
    status: str = Field(default="pending", nullable=False, max_length=16, index=True)
    priority: str = Field(default="medium", nullable=False, max_length=8)
    # Stored for display; nothing re-arms a reminder.
    repeat_frequency: str = Field(default="none", nullable=False, max_length=16)
    location: Optional[str] = Field(default=None, max_length=200)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
