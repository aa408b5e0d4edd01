"""Tests for the activity stream."""

from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from daybook.models import Habit, Reminder, Todo
from daybook.services.activity import build_activity, classify_urgency, filter_activity

TODAY = date(2024, 6, 5)  # a Wednesday


def _stream():
    hike = Habit(id="hike", user_id="u1", title="Hike", frequency_days=["Sat", "Sun"])
    todos = [
        Todo(id="late", user_id="u1", title="Late", due_date=datetime(2024, 6, 4, 9)),
        Todo(id="someday", user_id="u1", title="Someday", created_at=datetime(2024, 6, 1, 8)),
        Todo(id="soon", user_id="u1", title="Tomorrow", due_date=datetime(2024, 6, 6, 10)),
        Todo(id="done", user_id="u1", title="Done", status="completed", due_date=datetime(2024, 6, 5)),
    ]
    reminders = [
        Reminder(id="r1", user_id="u1", title="Standup", reminder_time=datetime(2024, 6, 5, 9)),
        Reminder(id="r2", user_id="u1", title="Ignored", status="dismissed", reminder_time=datetime(2024, 6, 5, 9)),
        Reminder(id="r3", user_id="u1", title="Conference", reminder_time=datetime(2024, 6, 20, 8)),
    ]
    return build_activity([hike], [], todos, reminders, TODAY)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 6, 1), "overdue"),
        (date(2024, 6, 5), "today"),
        (date(2024, 6, 6), "tomorrow"),
        (date(2024, 6, 8), "upcoming"),
        (date(2024, 6, 9), "future"),
    ],
)
def test_classify_urgency(day, expected):
    assert classify_urgency(day, TODAY) == expected


def test_stream_sorted_by_urgency_then_date():
    items = _stream()

    assert [item.title for item in items] == [
        "Someday",
        "Late",
        "Standup",
        "Tomorrow",
        "Hike",
        "Hike",
        "Conference",
    ]
    assert [item.urgency for item in items] == [
        "overdue",
        "overdue",
        "today",
        "tomorrow",
        "upcoming",
        "future",
        "future",
    ]
    assert items[0].days_until == -4
    assert items[4].to_dict()["id"] == "hike-2024-06-08"
    assert items[4].to_dict()["time"] is None
    assert items[2].to_dict()["time"] == "09:00"


def test_habit_days_carry_completion():
    water = Habit(id="water", user_id="u1", title="Water", frequency_days=[])
    done_today = SimpleNamespace(habit_id="water", completed_at=datetime(2024, 6, 5, 7))

    items = build_activity([water], [done_today], [], [], TODAY, horizon_days=3)

    assert [item.day for item in items] == [date(2024, 6, 5), date(2024, 6, 6), date(2024, 6, 7)]
    assert [item.is_completed for item in items] == [True, False, False]
    assert items[0].category == "builder"


def test_local_day_decides_urgency():
    late_call = Reminder(
        id="r1", user_id="u1", title="Call", reminder_time=datetime(2024, 6, 6, 2, tzinfo=timezone.utc)
    )

    utc_item = build_activity([], [], [], [late_call], TODAY)[0]
    local_item = build_activity([], [], [], [late_call], TODAY, tz=ZoneInfo("America/New_York"))[0]

    assert utc_item.urgency == "tomorrow"
    assert (local_item.urgency, local_item.to_dict()["time"]) == ("today", "22:00")


def test_filters():
    items = _stream()

    assert [item.id for item in filter_activity(items, kind="todos")] == ["someday", "late", "soon"]
    assert [item.title for item in filter_activity(items, urgency="future")] == ["Hike", "Conference"]
    assert len(filter_activity(items, kind="habit", search="  HIK ")) == 2
    assert filter_activity(items, kind="all", urgency="all") == items
    with pytest.raises(ValueError):
        filter_activity(items, kind="events")
    with pytest.raises(ValueError):
        filter_activity(items, urgency="someday")
