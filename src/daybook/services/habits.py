"""Habit streaks, weekly completion rate and per-habit summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Optional

from .completions import CompletionIndex, completed_dates
from .schedule import is_due_on, ordered_recurrence

WEEKLY_WINDOW_DAYS = 7


def current_streak(index: CompletionIndex, today: date) -> int:
    """Return the run of consecutive completed days ending on ``today``.

    A habit not yet done today has a streak of 0, even if yesterday was done.
    """

    if not index.is_completed_on(today):
        return 0

    # Can never exceed the number of distinct completed days.
    limit = len(index)
    streak = 0
    cursor = today
    while streak < limit and index.is_completed_on(cursor):
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(index: CompletionIndex) -> int:
    """Return the longest run of consecutive completed days in the history."""

    longest = 0
    run = 0
    last_day: date | None = None
    for day in completed_dates(index):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def weekly_rate(habit: Any, index: CompletionIndex, today: date) -> int:
    """Percent of the trailing seven days (today included) that were completed.

    The denominator is always seven, whatever the habit's recurrence, so a
    twice-a-week habit tops out at 29%.
    """

    completed = sum(
        1
        for offset in range(WEEKLY_WINDOW_DAYS)
        if index.is_completed_on(today - timedelta(days=offset))
    )
    return int(completed * 100 / WEEKLY_WINDOW_DAYS + 0.5)


@dataclass(slots=True)
class HabitSummary:
    habit_id: str
    title: str
    habit_type: Optional[str]
    recurrence: list[str]
    due_today: bool
    completed_today: bool
    current_streak: int
    longest_streak: int
    weekly_rate: int
    completion_count: int
    last_completed_on: Optional[date]
    history: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.habit_id,
            "title": self.title,
            "habit_type": self.habit_type,
            "frequency_days": list(self.recurrence),
            "due_today": self.due_today,
            "completed_today": self.completed_today,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "weekly_rate": self.weekly_rate,
            "completion_count": self.completion_count,
            "last_completed_on": self.last_completed_on.isoformat() if self.last_completed_on else None,
            "history": list(self.history),
        }


def summarize_habit(
    habit: Any, index: CompletionIndex, today: date, *, history_days: int = WEEKLY_WINDOW_DAYS
) -> HabitSummary:
    """Compose schedule, streak and rate figures for one habit card."""

    history_start = today - timedelta(days=history_days - 1)
    history = []
    for offset in range(history_days):
        day = history_start + timedelta(days=offset)
        history.append(
            {
                "date": day.isoformat(),
                "due": is_due_on(habit, day),
                "completed": index.is_completed_on(day),
            }
        )

    return HabitSummary(
        habit_id=habit.id,
        title=habit.title,
        habit_type=getattr(habit, "habit_type", None),
        recurrence=ordered_recurrence(habit),
        due_today=is_due_on(habit, today),
        completed_today=index.is_completed_on(today),
        current_streak=current_streak(index, today),
        longest_streak=longest_streak(index),
        weekly_rate=weekly_rate(habit, index, today),
        completion_count=index.completion_count,
        last_completed_on=index.last_completed_on,
        history=history,
    )


__all__ = [
    "HabitSummary",
    "WEEKLY_WINDOW_DAYS",
    "current_streak",
    "longest_streak",
    "summarize_habit",
    "weekly_rate",
]
