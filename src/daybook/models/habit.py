"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class Habit(SQLModel, table=True):
    """A recurring activity tracked per calendar day as done / not done."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=400)
    frequency: str = Field(default="daily", max_length=16)
    # Weekday tokens ("Mon".."Sun"); empty means every day.
    frequency_days: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    habit_type: Optional[str] = Field(default="builder", max_length=16)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)


class HabitCompletion(SQLModel, table=True):
    """One "done" mark for a habit. Several may land on the same day."""

    __tablename__: ClassVar[str] = "habit_completion"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    habit_id: str = Field(foreign_key="habit.id", nullable=False, index=True)
    # Stored as UTC.
    completed_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
