"""Calendar-day helpers shared by every habit, calendar and dashboard computation.

Nothing in here reads the system clock: callers pass ``today`` explicitly so
results are reproducible. Instants are mapped to calendar days in a caller
supplied timezone (UTC by default). Naive datetimes are read as UTC because
that is how the store hands them back.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Union

Instant = Union[date, datetime]

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")  # date.weekday() order
CALENDAR_VIEWS = ("year", "month", "week", "day")


class InvalidRangeError(ValueError):
    """Raised when a day range starts after it ends."""

    def __init__(self, start: date, end: date) -> None:
        super().__init__(f"Range start {start.isoformat()} is after end {end.isoformat()}")
        self.start = start
        self.end = end


def local_date(instant: Instant, tz: tzinfo | None = None) -> date:
    """Return the calendar day ``instant`` falls on in ``tz``."""

    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(tz or timezone.utc).date()
    if isinstance(instant, date):
        return instant
    raise TypeError(f"Expected date or datetime, got {type(instant).__name__}")


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` as an aware UTC datetime (naive values are taken as UTC)."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def day_key(instant: Instant, tz: tzinfo | None = None) -> str:
    """Return the canonical ``YYYY-MM-DD`` key for the local calendar day."""

    return local_date(instant, tz).isoformat()


def weekday_name(day: Instant, tz: tzinfo | None = None) -> str:
    return WEEKDAY_NAMES[local_date(day, tz).weekday()]


def is_same_calendar_day(a: Instant, b: Instant, tz: tzinfo | None = None) -> bool:
    return local_date(a, tz) == local_date(b, tz)


def days_between(a: Instant, b: Instant, tz: tzinfo | None = None) -> int:
    """Signed number of calendar days from ``a`` to ``b`` (not elapsed time)."""

    return (local_date(b, tz) - local_date(a, tz)).days


def enumerate_days(start: date, end: date) -> list[date]:
    """Return every date from ``start`` to ``end`` inclusive."""

    start = local_date(start)
    end = local_date(end)
    if start > end:
        raise InvalidRangeError(start, end)
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def is_today(instant: Instant, today: date, tz: tzinfo | None = None) -> bool:
    return local_date(instant, tz) == today


def is_tomorrow(instant: Instant, today: date, tz: tzinfo | None = None) -> bool:
    return local_date(instant, tz) == today + timedelta(days=1)


def is_past(instant: Instant, today: date, tz: tzinfo | None = None) -> bool:
    """True when ``instant`` falls on a calendar day before ``today``."""

    return local_date(instant, tz) < today


# Calendar grid periods ------------------------------------------------------


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``; the calendar grid starts its weeks on Sunday."""

    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def view_range(view: str, anchor: date) -> tuple[date, date]:
    """Return the inclusive ``(start, end)`` shown by a calendar view around ``anchor``."""

    if view == "year":
        return date(anchor.year, 1, 1), date(anchor.year, 12, 31)
    if view == "month":
        return start_of_week(start_of_month(anchor)), end_of_week(end_of_month(anchor))
    if view == "week":
        return start_of_week(anchor), end_of_week(anchor)
    if view == "day":
        return anchor, anchor
    raise ValueError(f"Unknown calendar view: {view!r}")


def view_period(view: str, anchor: date) -> tuple[date, date]:
    """Return the period a view is *about*, excluding the month view's padding days."""

    if view == "month":
        return start_of_month(anchor), end_of_month(anchor)
    return view_range(view, anchor)


__all__ = [
    "CALENDAR_VIEWS",
    "Instant",
    "InvalidRangeError",
    "WEEKDAY_NAMES",
    "as_utc",
    "day_key",
    "days_between",
    "end_of_month",
    "end_of_week",
    "enumerate_days",
    "is_past",
    "is_same_calendar_day",
    "is_today",
    "is_tomorrow",
    "local_date",
    "start_of_month",
    "start_of_week",
    "view_period",
    "view_range",
    "weekday_name",
]
