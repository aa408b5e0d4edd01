"""Column helpers shared by the table models."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4


def new_id() -> str:
    """Opaque primary key for every table."""

    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
