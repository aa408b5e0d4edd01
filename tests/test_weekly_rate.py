"""Tests for the trailing seven-day completion rate and habit summaries."""

from __future__ import annotations

from datetime import date, timedelta
from itertools import combinations

import pytest

from daybook.models import Habit
from daybook.services.completions import CompletionIndex
from daybook.services.habits import summarize_habit, weekly_rate

TODAY = date(2024, 6, 5)
WINDOW = [TODAY - timedelta(days=offset) for offset in range(7)]


def _habit(days=()):
    return Habit(id="h1", user_id="u1", title="Read", frequency_days=list(days), habit_type="builder")


@pytest.mark.parametrize("count", range(8))
def test_rate_stays_within_bounds(count):
    for chosen in combinations(WINDOW, count):
        rate = weekly_rate(_habit(), CompletionIndex.build(chosen), TODAY)
        assert isinstance(rate, int)
        assert 0 <= rate <= 100


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, 0), (1, 14), (2, 29), (3, 43), (4, 57), (5, 71), (6, 86), (7, 100)],
)
def test_rate_rounds_half_up_over_seven_days(count, expected):
    index = CompletionIndex.build(WINDOW[:count])
    assert weekly_rate(_habit(), index, TODAY) == expected


def test_denominator_is_seven_even_for_weekday_habits():
    habit = _habit(["Mon", "Wed"])
    index = CompletionIndex.build([date(2024, 6, 3), date(2024, 6, 5)])
    assert weekly_rate(habit, index, TODAY) == 29


def test_completions_outside_window_do_not_count():
    index = CompletionIndex.build([TODAY - timedelta(days=7), TODAY + timedelta(days=1)])
    assert weekly_rate(_habit(), index, TODAY) == 0


def test_summary_combines_figures():
    habit = _habit(["Mon", "Wed", "Fri"])
    index = CompletionIndex.build([TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)])

    summary = summarize_habit(habit, index, TODAY)
    data = summary.to_dict()

    assert data["id"] == "h1"
    assert data["frequency_days"] == ["Mon", "Wed", "Fri"]
    assert data["due_today"] is True
    assert data["completed_today"] is True
    assert data["current_streak"] == 3
    assert data["longest_streak"] == 3
    assert data["weekly_rate"] == 43
    assert data["last_completed_on"] == "2024-06-05"
    assert len(data["history"]) == 7
    assert data["history"][-1] == {"date": "2024-06-05", "due": True, "completed": True}
    assert data["history"][0]["date"] == "2024-05-30"
