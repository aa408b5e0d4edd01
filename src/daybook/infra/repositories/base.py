"""Helpers shared by the SQLModel repositories."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Iterable, Mapping

from ...models.common import utcnow
from ...services.dates import as_utc


def to_storage(moment: datetime | None) -> datetime | None:
    """Normalise an instant to naive UTC, the form every datetime column holds."""

    if moment is None:
        return None
    return as_utc(moment).replace(tzinfo=None)


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` storage bounds of a local calendar day."""

    start = datetime.combine(day, time.min, tzinfo=tz or timezone.utc)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz or timezone.utc)
    return to_storage(start), to_storage(end)


def apply_changes(obj: Any, changes: Mapping[str, Any], allowed: Iterable[str]) -> bool:
    """Copy whitelisted fields onto ``obj``; returns True when anything was set."""

    allowed = set(allowed)
    touched = False
    for key, value in changes.items():
        if key not in allowed:
            continue
        if isinstance(value, datetime):
            value = to_storage(value)
        setattr(obj, key, value)
        touched = True
    if touched and hasattr(obj, "updated_at"):
        obj.updated_at = utcnow()
    return touched
