"""Calendar routes: year, month, week and day views over habits, to-dos and reminders."""

from __future__ import annotations

from datetime import datetime, time
from itertools import groupby

from flask import abort, jsonify, request

from ...extensions import get_session_factory
from ...infra.repositories import (
    SQLModelHabitRepository,
    SQLModelReminderRepository,
    SQLModelTodoRepository,
)
from ...services.calendar import build_day_summaries, summarize_period
from ...services.dates import CALENDAR_VIEWS, view_period, view_range
from ..common import current_user_id, login_required, parse_day, request_today, user_tz
from . import bp


@bp.get("/")
@login_required
def show_calendar():
    """Per-day buckets for ``?view=`` around ``?date=`` (defaults: month, today)."""

    view = request.args.get("view", "month").strip().lower()
    if view not in CALENDAR_VIEWS:
        abort(400, description=f"Unknown view; expected one of {', '.join(CALENDAR_VIEWS)}")

    user_id = current_user_id()
    tz = user_tz()
    today = request_today()
    anchor = parse_day(request.args.get("date"), param="date") or today
    start, end = view_range(view, anchor)
    period = view_period(view, anchor)

    session_factory = get_session_factory()
    habit_repo = SQLModelHabitRepository(session_factory)
    habits = habit_repo.list_all(user_id=user_id)
    completions = habit_repo.completions_for(
        [habit.id for habit in habits],
        user_id=user_id,
        since=datetime.combine(start, time.min, tzinfo=tz),
    )
    todos = SQLModelTodoRepository(session_factory).list_all(user_id=user_id)
    reminders = SQLModelReminderRepository(session_factory).list_between(
        start, end, user_id=user_id, tz=tz
    )

    days = build_day_summaries(
        habits,
        todos,
        reminders,
        (start, end),
        today,
        completions=completions,
        current_period=period,
        tz=tz,
    )
    in_period = [day for day in days if day.is_current_period]

    payload = {
        "view": view,
        "date": anchor.isoformat(),
        "today": today.isoformat(),
        "range": {"start": start.isoformat(), "end": end.isoformat()},
        "days": [day.to_dict() for day in days],
        "summary": summarize_period(in_period).to_dict(),
    }
    if view == "year":
        payload["months"] = [
            {"month": f"{year:04d}-{month:02d}", **summarize_period(month_days).to_dict()}
            for (year, month), month_days in groupby(days, key=lambda day: (day.date.year, day.date.month))
        ]
    return jsonify(payload)
