"""Activity stream route."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_session_factory
from ...infra.repositories import (
    SQLModelHabitRepository,
    SQLModelReminderRepository,
    SQLModelTodoRepository,
)
from ...services.activity import build_activity, filter_activity
from ..common import current_user_id, login_required, request_today, user_tz
from . import bp


@bp.get("/")
@login_required
def list_activity():
    """Habit days, open to-dos and pending reminders, most urgent first.

    ``type``, ``urgency`` and ``q`` narrow the stream; ``days`` sets how far
    ahead habit days are listed.
    """

    user_id = current_user_id()
    horizon_days = request.args.get("days", 7, type=int)
    session_factory = get_session_factory()
    habit_repo = SQLModelHabitRepository(session_factory)

    habits = habit_repo.list_all(user_id=user_id)
    completions = habit_repo.completions_for([habit.id for habit in habits], user_id=user_id)
    today = request_today()
    items = build_activity(
        habits,
        completions,
        SQLModelTodoRepository(session_factory).list_all(user_id=user_id),
        SQLModelReminderRepository(session_factory).list_all(user_id=user_id),
        today,
        tz=user_tz(),
        horizon_days=min(max(1, horizon_days), 31),
    )
    try:
        items = filter_activity(
            items,
            kind=request.args.get("type"),
            urgency=request.args.get("urgency"),
            search=request.args.get("q"),
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"today": today.isoformat(), "items": [item.to_dict() for item in items]})
