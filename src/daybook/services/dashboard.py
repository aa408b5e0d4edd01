"""Dashboard rollup built from the same habit and calendar helpers as every other view."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import Any, Iterable, Sequence

from .calendar import TODO_ARCHIVED, TODO_COMPLETED
from .completions import CompletionIndex, build_indexes
from .dates import as_utc, is_past, is_today, is_tomorrow, local_date
from .habits import HabitSummary, summarize_habit

REMINDER_PENDING = "pending"


@dataclass(slots=True)
class DashboardSummary:
    today: date
    habits: list[HabitSummary] = field(default_factory=list)
    habits_due_today: int = 0
    habits_completed_today: int = 0
    best_streak: int = 0
    average_weekly_rate: int = 0
    todos_pending: int = 0
    todos_completed: int = 0
    todos_overdue: int = 0
    upcoming_reminders: list[dict] = field(default_factory=list)
    overdue_reminders: list[dict] = field(default_factory=list)

    @property
    def todo_completion_rate(self) -> int:
        total = self.todos_pending + self.todos_completed
        if not total:
            return 0
        return int(self.todos_completed * 100 / total + 0.5)

    def to_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "habits": [summary.to_dict() for summary in self.habits],
            "habits_due_today": self.habits_due_today,
            "habits_completed_today": self.habits_completed_today,
            "best_streak": self.best_streak,
            "average_weekly_rate": self.average_weekly_rate,
            "todos": {
                "pending": self.todos_pending,
                "completed": self.todos_completed,
                "overdue": self.todos_overdue,
                "completion_rate": self.todo_completion_rate,
            },
            "upcoming_reminders": list(self.upcoming_reminders),
            "overdue_reminders": list(self.overdue_reminders),
        }


def _reminder_card(reminder: Any, today: date, tz: tzinfo | None) -> dict:
    return {
        "id": reminder.id,
        "title": reminder.title,
        "reminder_time": as_utc(reminder.reminder_time).isoformat(),
        "priority": getattr(reminder, "priority", None),
        "is_today": is_today(reminder.reminder_time, today, tz),
        "is_tomorrow": is_tomorrow(reminder.reminder_time, today, tz),
    }


def build_dashboard(
    habits: Sequence[Any],
    completions: Iterable[Any],
    todos: Iterable[Any],
    reminders: Iterable[Any],
    today: date,
    *,
    tz: tzinfo | None = None,
    upcoming_days: int = 7,
) -> DashboardSummary:
    """Summarise habits, to-dos and reminders as of ``today``."""

    indexes = build_indexes(completions, tz)
    summary = DashboardSummary(today=today)

    for habit in habits:
        card = summarize_habit(habit, indexes.get(habit.id, CompletionIndex(tz=tz)), today)
        summary.habits.append(card)
        if card.due_today:
            summary.habits_due_today += 1
            if card.completed_today:
                summary.habits_completed_today += 1

    summary.best_streak = max((card.current_streak for card in summary.habits), default=0)
    if summary.habits:
        rate_total = sum(card.weekly_rate for card in summary.habits)
        summary.average_weekly_rate = int(rate_total / len(summary.habits) + 0.5)

    for todo in todos:
        if todo.status == TODO_ARCHIVED:
            continue
        if todo.status == TODO_COMPLETED:
            summary.todos_completed += 1
            continue
        summary.todos_pending += 1
        if todo.due_date is not None and is_past(todo.due_date, today, tz):
            summary.todos_overdue += 1

    horizon = today + timedelta(days=upcoming_days)
    pending = sorted(
        (reminder for reminder in reminders if reminder.status == REMINDER_PENDING),
        key=lambda reminder: as_utc(reminder.reminder_time),
    )
    for reminder in pending:
        day = local_date(reminder.reminder_time, tz)
        if day < today:
            summary.overdue_reminders.append(_reminder_card(reminder, today, tz))
        elif day < horizon:
            summary.upcoming_reminders.append(_reminder_card(reminder, today, tz))

    return summary


__all__ = ["DashboardSummary", "build_dashboard"]
