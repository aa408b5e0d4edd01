"""To-do routes: the nested list, subtasks, notes and focus timers."""

from __future__ import annotations

from flask import jsonify, request

from ...domain.repositories import TodoRepository
from ...extensions import get_session_factory
from ...infra.repositories import SQLModelTodoRepository
from ...logging_config import get_logger
from ...models import Todo, TodoTimer
from ...services.todos import build_todo_tree, timer_remaining_seconds, timer_transition
from ..common import current_user_id, json_payload, login_required, not_found, request_now, serialize
from . import bp
from .forms import TimerForm, TodoForm, TodoNoteForm, TodoUpdateForm

logger = get_logger("blueprints.todos")


def _repository() -> TodoRepository:
    return SQLModelTodoRepository(get_session_factory())


def _timer_payload(timer: TodoTimer | None, now) -> dict | None:
    if timer is None:
        return None
    payload = serialize(timer)
    payload["remaining_seconds"] = timer_remaining_seconds(timer, now)
    return payload


@bp.get("/")
@login_required
def list_todos():
    """All to-dos as a tree, each with its notes and timer."""

    user_id = current_user_id()
    include_archived = request.args.get("archived", "").lower() in {"1", "true", "yes"}
    repo = _repository()
    todos = repo.list_all(user_id=user_id, include_archived=include_archived)
    todo_ids = [todo.id for todo in todos]

    notes_by_todo: dict[str, list[dict]] = {}
    for note in repo.list_notes(todo_ids, user_id=user_id):
        notes_by_todo.setdefault(note.todo_id, []).append(serialize(note))
    timers = {timer.todo_id: timer for timer in repo.list_timers(todo_ids, user_id=user_id)}
    now = request_now()

    def render(todo: Todo) -> dict:
        payload = serialize(todo, exclude=("user_id",))
        payload["notes"] = notes_by_todo.get(todo.id, [])
        payload["timer"] = _timer_payload(timers.get(todo.id), now)
        return payload

    return jsonify({"todos": [node.to_dict(render) for node in build_todo_tree(todos)]})


@bp.post("/")
@login_required
def create_todo():
    form = TodoForm.model_validate(json_payload())
    try:
        todo = _repository().create(
            Todo(**form.todo_fields()), user_id=current_user_id(), timer_minutes=form.timer_minutes
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    logger.info("To-do created", extra={"todo_id": todo.id, "parent_id": todo.parent_id})
    return jsonify(serialize(todo, exclude=("user_id",))), 201


@bp.patch("/<todo_id>")
@login_required
def update_todo(todo_id: str):
    form = TodoUpdateForm.model_validate(json_payload())
    try:
        todo = _repository().update(todo_id, form.changes(), user_id=current_user_id())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if todo is None:
        return not_found("To-do")
    return jsonify(serialize(todo, exclude=("user_id",)))


@bp.delete("/<todo_id>")
@login_required
def delete_todo(todo_id: str):
    """Delete a to-do and every subtask below it."""

    if not _repository().delete(todo_id, user_id=current_user_id()):
        return not_found("To-do")
    logger.info("To-do deleted", extra={"todo_id": todo_id})
    return "", 204


@bp.post("/<todo_id>/notes")
@login_required
def add_note(todo_id: str):
    form = TodoNoteForm.model_validate(json_payload())
    note = _repository().add_note(todo_id, form.content, user_id=current_user_id())
    if note is None:
        return not_found("To-do")
    return jsonify(serialize(note)), 201


@bp.delete("/notes/<note_id>")
@login_required
def delete_note(note_id: str):
    if not _repository().delete_note(note_id, user_id=current_user_id()):
        return not_found("Note")
    return "", 204


@bp.put("/<todo_id>/timer")
@login_required
def update_timer(todo_id: str):
    """Start, pause, reset or complete the to-do's focus timer."""

    user_id = current_user_id()
    form = TimerForm.model_validate(json_payload())
    repo = _repository()
    if repo.get_by_id(todo_id, user_id=user_id) is None:
        return not_found("To-do")

    now = request_now()
    changes = timer_transition(
        repo.get_timer(todo_id, user_id=user_id),
        form.action,
        now,
        duration_minutes=form.duration_minutes,
    )
    timer = repo.upsert_timer(todo_id, changes, user_id=user_id)
    return jsonify(_timer_payload(timer, now))
