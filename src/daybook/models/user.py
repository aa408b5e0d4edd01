"""User model supporting authentication."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class User(SQLModel, table=True):
    """Account that owns habits, to-dos, reminders and notes."""

    __tablename__: ClassVar[str] = "user"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    password_hash: str = Field(nullable=False, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=120)
    is_onboarded: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    last_login: Optional[datetime] = Field(default=None)
