"""Dashboard route."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_session_factory
from ...infra.repositories import (
    SQLModelHabitRepository,
    SQLModelReminderRepository,
    SQLModelTodoRepository,
)
from ...services.dashboard import build_dashboard
from ..common import current_user_id, login_required, request_today, user_tz
from . import bp


@bp.get("/")
@login_required
def show_dashboard():
    """Today's habits, to-do counts and reminders in one payload."""

    user_id = current_user_id()
    upcoming_days = request.args.get("upcoming_days", 7, type=int)
    session_factory = get_session_factory()
    habit_repo = SQLModelHabitRepository(session_factory)

    habits = habit_repo.list_all(user_id=user_id)
    completions = habit_repo.completions_for([habit.id for habit in habits], user_id=user_id)
    summary = build_dashboard(
        habits,
        completions,
        SQLModelTodoRepository(session_factory).list_all(user_id=user_id),
        SQLModelReminderRepository(session_factory).list_all(user_id=user_id),
        request_today(),
        tz=user_tz(),
        upcoming_days=max(1, upcoming_days),
    )
    return jsonify(summary.to_dict())
