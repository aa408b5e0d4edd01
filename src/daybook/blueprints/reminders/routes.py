"""Reminder and reminder space routes."""

from __future__ import annotations

from flask import jsonify, request

from ...domain.repositories import ReminderRepository, ReminderSpaceRepository
from ...extensions import get_session_factory
from ...infra.repositories import SQLModelReminderRepository, SQLModelReminderSpaceRepository
from ...models import Reminder, ReminderSpace
from ...services.dates import InvalidRangeError
from ..common import (
    current_user_id,
    json_payload,
    login_required,
    not_found,
    parse_day,
    serialize,
    user_tz,
)
from . import bp
from .forms import ReminderForm, ReminderSpaceForm, ReminderSpaceUpdateForm, ReminderUpdateForm


def _repository() -> ReminderRepository:
    return SQLModelReminderRepository(get_session_factory())


def _space_repository() -> ReminderSpaceRepository:
    return SQLModelReminderSpaceRepository(get_session_factory())


def _payload(reminder: Reminder) -> dict:
    return serialize(reminder, exclude=("user_id",))


def _space_payload(space: ReminderSpace) -> dict:
    return serialize(space, exclude=("user_id",))


@bp.get("/")
@login_required
def list_reminders():
    """Reminders soonest first; ``start``/``end`` narrow to local days inclusive.

    ``space`` keeps only the reminders filed in that reminder space.
    """

    user_id = current_user_id()
    start = parse_day(request.args.get("start"), param="start")
    end = parse_day(request.args.get("end"), param="end")
    space_id = request.args.get("space") or None
    if space_id is not None and _space_repository().get_by_id(space_id, user_id=user_id) is None:
        return not_found("Reminder space")
    repo = _repository()

    if start is None and end is None:
        reminders = repo.list_all(user_id=user_id, space_id=space_id)
    else:
        start = start or end
        end = end or start
        if start > end:
            raise InvalidRangeError(start, end)
        reminders = repo.list_between(start, end, user_id=user_id, tz=user_tz(), space_id=space_id)
    return jsonify({"reminders": [_payload(reminder) for reminder in reminders]})


@bp.post("/")
@login_required
def create_reminder():
    form = ReminderForm.model_validate(json_payload())
    try:
        reminder = _repository().create(Reminder(**form.model_dump()), user_id=current_user_id())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(_payload(reminder)), 201


@bp.patch("/<reminder_id>")
@login_required
def update_reminder(reminder_id: str):
    form = ReminderUpdateForm.model_validate(json_payload())
    try:
        reminder = _repository().update(reminder_id, form.changes(), user_id=current_user_id())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if reminder is None:
        return not_found("Reminder")
    return jsonify(_payload(reminder))


@bp.post("/<reminder_id>/complete")
@login_required
def complete_reminder(reminder_id: str):
    reminder = _repository().complete(reminder_id, user_id=current_user_id())
    if reminder is None:
        return not_found("Reminder")
    return jsonify(_payload(reminder))


@bp.post("/<reminder_id>/dismiss")
@login_required
def dismiss_reminder(reminder_id: str):
    reminder = _repository().dismiss(reminder_id, user_id=current_user_id())
    if reminder is None:
        return not_found("Reminder")
    return jsonify(_payload(reminder))


@bp.delete("/<reminder_id>")
@login_required
def delete_reminder(reminder_id: str):
    if not _repository().delete(reminder_id, user_id=current_user_id()):
        return not_found("Reminder")
    return "", 204


# Spaces


@bp.get("/spaces")
@login_required
def list_spaces():
    spaces = _space_repository().list_all(user_id=current_user_id())
    return jsonify({"spaces": [_space_payload(space) for space in spaces]})


@bp.get("/spaces/default")
@login_required
def default_space():
    """The user's "General" space, created on first request."""

    space = _space_repository().get_default(user_id=current_user_id())
    return jsonify(_space_payload(space))


@bp.post("/spaces")
@login_required
def create_space():
    form = ReminderSpaceForm.model_validate(json_payload())
    space = _space_repository().create(ReminderSpace(**form.model_dump()), user_id=current_user_id())
    return jsonify(_space_payload(space)), 201


@bp.patch("/spaces/<space_id>")
@login_required
def update_space(space_id: str):
    form = ReminderSpaceUpdateForm.model_validate(json_payload())
    space = _space_repository().update(space_id, form.changes(), user_id=current_user_id())
    if space is None:
        return not_found("Reminder space")
    return jsonify(_space_payload(space))


@bp.delete("/spaces/<space_id>")
@login_required
def delete_space(space_id: str):
    """Delete a space; its reminders are kept without a space."""

    if not _space_repository().delete(space_id, user_id=current_user_id()):
        return not_found("Reminder space")
    return "", 204
