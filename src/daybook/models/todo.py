"""To-do items with subtasks, notes and a focus timer."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class Todo(SQLModel, table=True):
    """A to-do; ``parent_id`` nests it under another to-do."""

    __tablename__: ClassVar[str] = "todo"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default="pending", nullable=False, max_length=16, index=True)
    due_date: Optional[datetime] = Field(default=None, index=True)
    priority: Optional[str] = Field(default=None, max_length=8)
    parent_id: Optional[str] = Field(default=None, foreign_key="todo.id", index=True)
    is_expanded: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)


class TodoNote(SQLModel, table=True):
    __tablename__: ClassVar[str] = "todo_note"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    todo_id: str = Field(foreign_key="todo.id", nullable=False, index=True)
    content: str = Field(nullable=False, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)


class TodoTimer(SQLModel, table=True):
    """Pomodoro-style countdown attached to a single to-do."""

    __tablename__: ClassVar[str] = "todo_timer"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    todo_id: str = Field(foreign_key="todo.id", nullable=False, unique=True, index=True)
    duration_minutes: int = Field(default=25, nullable=False)
    start_time: Optional[datetime] = Field(default=None)
    paused_time_remaining: Optional[int] = Field(default=None)
    is_running: bool = Field(default=False, nullable=False)
    completed: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
