"""Per-day summaries of habits, to-dos and reminders for calendar and dashboard views."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Any, Iterable, Mapping, Optional, Sequence

from .completions import CompletionIndex, build_indexes
from .dates import enumerate_days, is_same_calendar_day, local_date
from .schedule import is_due_on

TODO_COMPLETED = "completed"
TODO_ARCHIVED = "archived"
REMINDER_COMPLETED = "completed"

_EMPTY_INDEX = CompletionIndex()


@dataclass(slots=True)
class DayItem:
    id: str
    title: str
    completed: bool
    category: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "completed": self.completed, "category": self.category}


@dataclass(slots=True)
class DayBucket:
    items: list[DayItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def completed(self) -> int:
        return sum(1 for item in self.items if item.completed)

    def to_dict(self) -> dict:
        return {
            "completed": self.completed,
            "total": self.total,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(slots=True)
class CalendarDay:
    date: date
    is_current_period: bool
    is_today: bool
    habits: DayBucket = field(default_factory=DayBucket)
    todos: DayBucket = field(default_factory=DayBucket)
    reminders: DayBucket = field(default_factory=DayBucket)

    @property
    def has_items(self) -> bool:
        return bool(self.habits.total or self.todos.total or self.reminders.total)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "is_current_period": self.is_current_period,
            "is_today": self.is_today,
            "has_items": self.has_items,
            "habits": self.habits.to_dict(),
            "todos": self.todos.to_dict(),
            "reminders": self.reminders.to_dict(),
        }


@dataclass(slots=True)
class PeriodSummary:
    days: int
    habits_completed: int
    habits_due: int
    todos_completed: int
    todos_total: int
    reminders_total: int

    @property
    def habit_completion_rate(self) -> int:
        if not self.habits_due:
            return 0
        return int(self.habits_completed * 100 / self.habits_due + 0.5)

    def to_dict(self) -> dict:
        return {
            "days": self.days,
            "habits_completed": self.habits_completed,
            "habits_due": self.habits_due,
            "habit_completion_rate": self.habit_completion_rate,
            "todos_completed": self.todos_completed,
            "todos_total": self.todos_total,
            "reminders_total": self.reminders_total,
        }


def todo_anchor(todo: Any):
    """Instant a to-do is filed under: its due date, else when it was created."""

    return todo.due_date if todo.due_date is not None else todo.created_at


def _bucket_by_day(records: Iterable[Any], anchor, tz: tzinfo | None) -> dict[date, list[Any]]:
    buckets: dict[date, list[Any]] = defaultdict(list)
    for record in records:
        instant = anchor(record)
        if instant is None:
            continue
        buckets[local_date(instant, tz)].append(record)
    return buckets


def build_day_summaries(
    habits: Sequence[Any],
    todos: Iterable[Any],
    reminders: Iterable[Any],
    date_range: tuple[date, date],
    today: date,
    *,
    completions: Iterable[Any] | Mapping[str, CompletionIndex] = (),
    current_period: tuple[date, date] | None = None,
    tz: tzinfo | None = None,
) -> list[CalendarDay]:
    """Build one :class:`CalendarDay` per date in ``date_range``, in order.

    ``completions`` is either the flat list of completion records for
    ``habits`` or an already built ``habit_id -> CompletionIndex`` mapping.
    Archived to-dos are left out. Inputs are snapshots; nothing is cached
    between calls.
    """

    start, end = date_range
    days = enumerate_days(start, end)

    if isinstance(completions, Mapping):
        indexes = completions
    else:
        indexes = build_indexes(completions, tz)

    todos_by_day = _bucket_by_day(
        (todo for todo in todos if todo.status != TODO_ARCHIVED), todo_anchor, tz
    )
    reminders_by_day = _bucket_by_day(reminders, lambda reminder: reminder.reminder_time, tz)

    summaries: list[CalendarDay] = []
    for day in days:
        in_period = current_period is None or current_period[0] <= day <= current_period[1]
        summary = CalendarDay(
            date=day,
            is_current_period=in_period,
            is_today=is_same_calendar_day(day, today),
        )

        for habit in habits:
            if not is_due_on(habit, day):
                continue
            index = indexes.get(habit.id, _EMPTY_INDEX)
            summary.habits.items.append(
                DayItem(
                    id=habit.id,
                    title=habit.title,
                    completed=index.is_completed_on(day),
                    category=getattr(habit, "habit_type", None),
                )
            )

        for todo in todos_by_day.get(day, ()):
            summary.todos.items.append(
                DayItem(
                    id=todo.id,
                    title=todo.title,
                    completed=todo.status == TODO_COMPLETED,
                    category=getattr(todo, "priority", None),
                )
            )

        for reminder in reminders_by_day.get(day, ()):
            summary.reminders.items.append(
                DayItem(
                    id=reminder.id,
                    title=reminder.title,
                    completed=reminder.status == REMINDER_COMPLETED,
                    category=getattr(reminder, "priority", None),
                )
            )

        summaries.append(summary)

    return summaries


def summarize_period(days: Iterable[CalendarDay]) -> PeriodSummary:
    """Roll a run of calendar days up into totals (the year view's month cards)."""

    totals = PeriodSummary(0, 0, 0, 0, 0, 0)
    for day in days:
        totals.days += 1
        totals.habits_completed += day.habits.completed
        totals.habits_due += day.habits.total
        totals.todos_completed += day.todos.completed
        totals.todos_total += day.todos.total
        totals.reminders_total += day.reminders.total
    return totals


__all__ = [
    "CalendarDay",
    "DayBucket",
    "DayItem",
    "PeriodSummary",
    "build_day_summaries",
    "summarize_period",
    "todo_anchor",
]
