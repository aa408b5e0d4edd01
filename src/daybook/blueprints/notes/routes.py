"""Note routes."""

from __future__ import annotations

from flask import jsonify, request

from ...domain.repositories import NoteRepository
from ...extensions import get_session_factory
from ...infra.repositories import SQLModelNoteRepository
from ...models import Note
from ..common import current_user_id, json_payload, login_required, not_found, serialize
from . import bp
from .forms import NoteForm, NoteUpdateForm


def _repository() -> NoteRepository:
    return SQLModelNoteRepository(get_session_factory())


@bp.get("/")
@login_required
def list_notes():
    include_archived = request.args.get("archived", "").lower() in {"1", "true", "yes"}
    notes = _repository().list_all(user_id=current_user_id(), include_archived=include_archived)
    return jsonify({"notes": [serialize(note, exclude=("user_id",)) for note in notes]})


@bp.post("/")
@login_required
def create_note():
    form = NoteForm.model_validate(json_payload())
    note = _repository().create(Note(**form.model_dump()), user_id=current_user_id())
    return jsonify(serialize(note, exclude=("user_id",))), 201


@bp.patch("/<note_id>")
@login_required
def update_note(note_id: str):
    form = NoteUpdateForm.model_validate(json_payload())
    note = _repository().update(note_id, form.changes(), user_id=current_user_id())
    if note is None:
        return not_found("Note")
    return jsonify(serialize(note, exclude=("user_id",)))


@bp.delete("/<note_id>")
@login_required
def delete_note(note_id: str):
    if not _repository().delete(note_id, user_id=current_user_id()):
        return not_found("Note")
    return "", 204
