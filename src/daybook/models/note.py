"""Free-form notes."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class Note(SQLModel, table=True):
    __tablename__: ClassVar[str] = "note"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    content: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None, max_length=16)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    note_type: str = Field(default="text", nullable=False, max_length=16)
    is_pinned: bool = Field(default=False, nullable=False)
    is_archived: bool = Field(default=False, nullable=False)
    word_count: int = Field(default=0, nullable=False)
    character_count: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
