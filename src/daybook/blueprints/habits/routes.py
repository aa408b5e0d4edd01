"""Habit routes."""

from __future__ import annotations

from flask import jsonify

from ...domain.repositories import HabitRepository
from ...extensions import get_session_factory
from ...infra.repositories import SQLModelHabitRepository
from ...logging_config import get_logger
from ...models import Habit
from ...services.completions import CompletionIndex, build_indexes
from ...services.habits import summarize_habit
from ..common import (
    current_user_id,
    json_payload,
    login_required,
    not_found,
    request_now,
    request_today,
    serialize,
    user_tz,
)
from . import bp
from .forms import HabitForm, HabitUpdateForm, ToggleForm

logger = get_logger("blueprints.habits")


def _repository() -> HabitRepository:
    return SQLModelHabitRepository(get_session_factory())


def _habit_payload(habit: Habit, index: CompletionIndex, today) -> dict:
    payload = serialize(habit)
    payload["summary"] = summarize_habit(habit, index, today).to_dict()
    return payload


def _index_for(repo: HabitRepository, habit: Habit, user_id: str) -> CompletionIndex:
    completions = repo.completions_for([habit.id], user_id=user_id)
    return CompletionIndex.build(completions, user_tz())


@bp.get("/")
@login_required
def list_habits():
    """Active habits with streak and weekly-rate figures as of today."""

    user_id = current_user_id()
    today = request_today()
    tz = user_tz()
    repo = _repository()

    habits = repo.list_all(user_id=user_id)
    # Full history so streaks are never truncated by a fetch window.
    completions = repo.completions_for([habit.id for habit in habits], user_id=user_id)
    indexes = build_indexes(completions, tz)

    return jsonify(
        {
            "today": today.isoformat(),
            "habits": [
                _habit_payload(habit, indexes.get(habit.id, CompletionIndex(tz=tz)), today)
                for habit in habits
            ],
        }
    )


@bp.post("/")
@login_required
def create_habit():
    form = HabitForm.model_validate(json_payload())
    habit = Habit(**form.model_dump(mode="json"))
    habit = _repository().create(habit, user_id=current_user_id())
    logger.info("Habit created", extra={"habit_id": habit.id})
    return jsonify(_habit_payload(habit, CompletionIndex(tz=user_tz()), request_today())), 201


@bp.get("/<habit_id>")
@login_required
def get_habit(habit_id: str):
    user_id = current_user_id()
    repo = _repository()
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        return not_found("Habit")
    return jsonify(_habit_payload(habit, _index_for(repo, habit, user_id), request_today()))


@bp.patch("/<habit_id>")
@login_required
def update_habit(habit_id: str):
    user_id = current_user_id()
    form = HabitUpdateForm.model_validate(json_payload())
    repo = _repository()
    habit = repo.update(habit_id, form.changes(), user_id=user_id)
    if habit is None:
        return not_found("Habit")
    return jsonify(_habit_payload(habit, _index_for(repo, habit, user_id), request_today()))


@bp.delete("/<habit_id>")
@login_required
def delete_habit(habit_id: str):
    if not _repository().delete(habit_id, user_id=current_user_id()):
        return not_found("Habit")
    logger.info("Habit deleted", extra={"habit_id": habit_id})
    return "", 204


@bp.post("/<habit_id>/toggle")
@login_required
def toggle_habit(habit_id: str):
    """Flip the habit's completion for a day (today unless ``date`` is given)."""

    user_id = current_user_id()
    form = ToggleForm.model_validate(json_payload())
    today = request_today()
    day = form.day or today
    repo = _repository()

    state = repo.toggle_completion(
        habit_id, day, user_id=user_id, now=request_now(), tz=user_tz()
    )
    if state is None:
        return not_found("Habit")

    habit = repo.get_by_id(habit_id, user_id=user_id)
    return jsonify(
        {
            "habit_id": habit_id,
            "date": day.isoformat(),
            "completed": state,
            "summary": summarize_habit(habit, _index_for(repo, habit, user_id), today).to_dict(),
        }
    )
