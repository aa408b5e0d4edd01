"""Activity stream: upcoming habit days, open to-dos and pending reminders in one list."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Iterable, Optional, Sequence

from .calendar import TODO_ARCHIVED, TODO_COMPLETED
from .completions import CompletionIndex, build_indexes
from .dashboard import REMINDER_PENDING
from .dates import as_utc, days_between, is_past, is_today, is_tomorrow
from .schedule import is_due_on

ACTIVITY_TYPES = ("habit", "todo", "reminder")
URGENCY_ORDER = ("overdue", "today", "tomorrow", "upcoming", "future")
# Items more than this many days out are "future" rather than "upcoming".
UPCOMING_DAYS = 3


@dataclass(slots=True)
class ActivityItem:
    id: str
    type: str
    title: str
    day: date
    urgency: str
    days_until: int
    at: Optional[time] = None
    is_completed: bool = False
    category: Optional[str] = None

    def sort_key(self) -> tuple:
        return (URGENCY_ORDER.index(self.urgency), self.day, self.at or time.min)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "date": self.day.isoformat(),
            "time": self.at.isoformat(timespec="minutes") if self.at is not None else None,
            "urgency": self.urgency,
            "days_until": self.days_until,
            "is_completed": self.is_completed,
            "category": self.category,
        }


def classify_urgency(instant: date | datetime, today: date, tz: tzinfo | None = None) -> str:
    """Bucket an instant relative to ``today`` by calendar day."""

    if is_today(instant, today, tz):
        return "today"
    if is_tomorrow(instant, today, tz):
        return "tomorrow"
    if is_past(instant, today, tz):
        return "overdue"
    if days_between(today, instant, tz) > UPCOMING_DAYS:
        return "future"
    return "upcoming"


def _dated_item(kind: str, obj: Any, instant: datetime, today: date, tz: tzinfo | None) -> ActivityItem:
    local = as_utc(instant).astimezone(tz or timezone.utc)
    return ActivityItem(
        id=obj.id,
        type=kind,
        title=obj.title,
        day=local.date(),
        at=local.time(),
        urgency=classify_urgency(instant, today, tz),
        days_until=days_between(today, instant, tz),
    )


def build_activity(
    habits: Sequence[Any],
    completions: Iterable[Any],
    todos: Iterable[Any],
    reminders: Iterable[Any],
    today: date,
    *,
    tz: tzinfo | None = None,
    horizon_days: int = 7,
) -> list[ActivityItem]:
    """Return the activity stream as of ``today``, most urgent first.

    Each habit contributes one item per due day from ``today`` over the next
    ``horizon_days`` days. Open to-dos are dated by their due date, or by their
    creation day when they have none. Only pending reminders are listed.
    """

    indexes = build_indexes(completions, tz)
    items: list[ActivityItem] = []

    for habit in habits:
        index = indexes.get(habit.id, CompletionIndex(tz=tz))
        for offset in range(horizon_days):
            day = today + timedelta(days=offset)
            if not is_due_on(habit, day):
                continue
            items.append(
                ActivityItem(
                    id=f"{habit.id}-{day.isoformat()}",
                    type="habit",
                    title=habit.title,
                    day=day,
                    urgency=classify_urgency(day, today),
                    days_until=offset,
                    is_completed=index.is_completed_on(day),
                    category=getattr(habit, "habit_type", None),
                )
            )

    for todo in todos:
        if todo.status in (TODO_COMPLETED, TODO_ARCHIVED):
            continue
        instant = todo.due_date if todo.due_date is not None else todo.created_at
        items.append(_dated_item("todo", todo, instant, today, tz))

    for reminder in reminders:
        if reminder.status != REMINDER_PENDING:
            continue
        item = _dated_item("reminder", reminder, reminder.reminder_time, today, tz)
        item.category = getattr(reminder, "priority", None)
        items.append(item)

    items.sort(key=ActivityItem.sort_key)
    return items


def _normalize_type(kind: str) -> str:
    kind = kind.strip().lower()
    singular = kind[:-1] if kind.endswith("s") else kind
    if singular not in ACTIVITY_TYPES:
        raise ValueError(f"Unknown activity type: {kind!r}")
    return singular


def filter_activity(
    items: Iterable[ActivityItem],
    *,
    kind: str | None = None,
    urgency: str | None = None,
    search: str | None = None,
) -> list[ActivityItem]:
    """Narrow the stream by type (``habit`` or ``habits``), urgency and title text.

    ``"all"`` or an empty value leaves that filter off.
    """

    if kind and kind != "all":
        wanted_type = _normalize_type(kind)
        items = [item for item in items if item.type == wanted_type]
    if urgency and urgency != "all":
        if urgency not in URGENCY_ORDER:
            raise ValueError(f"Unknown urgency: {urgency!r}")
        items = [item for item in items if item.urgency == urgency]
    query = (search or "").strip().lower()
    if query:
        items = [item for item in items if query in item.title.lower()]
    return list(items)


__all__ = [
    "ACTIVITY_TYPES",
    "URGENCY_ORDER",
    "ActivityItem",
    "build_activity",
    "classify_urgency",
    "filter_activity",
]
