"""Signup, login and session routes."""

from __future__ import annotations

from flask import jsonify, session

from ...extensions import get_session_factory
from ...logging_config import get_logger
from ...services import auth as auth_service
from ..common import SESSION_USER_KEY, current_user_id, json_payload, login_required, serialize
from . import bp
from .forms import LoginForm, SignupForm

logger = get_logger("blueprints.auth")

_PRIVATE_FIELDS = ("password_hash",)


@bp.post("/signup")
def signup():
    form = SignupForm.model_validate(json_payload())
    try:
        user = auth_service.create_user(
            username=form.username,
            password=form.password,
            full_name=form.full_name,
            session_factory=get_session_factory(),
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 409

    session.clear()
    session[SESSION_USER_KEY] = user.id
    return jsonify(serialize(user, exclude=_PRIVATE_FIELDS)), 201


@bp.post("/login")
def login():
    form = LoginForm.model_validate(json_payload())
    user = auth_service.authenticate(
        username=form.username,
        password=form.password,
        session_factory=get_session_factory(),
    )
    if user is None:
        return jsonify({"error": "Invalid username or password"}), 401

    session.clear()
    session[SESSION_USER_KEY] = user.id
    logger.info("User logged in", extra={"user_id": user.id})
    return jsonify(serialize(user, exclude=_PRIVATE_FIELDS))


@bp.post("/logout")
def logout():
    session.clear()
    return "", 204


@bp.get("/me")
@login_required
def me():
    user = auth_service.get_user(current_user_id(), get_session_factory())
    if user is None:
        # Stale cookie for a deleted account.
        session.clear()
        return jsonify({"error": "Authentication required"}), 401
    return jsonify(serialize(user, exclude=_PRIVATE_FIELDS))


@bp.post("/onboarding")
@login_required
def complete_onboarding():
    try:
        user = auth_service.complete_onboarding(
            user_id=current_user_id(), session_factory=get_session_factory()
        )
    except ValueError:
        session.clear()
        return jsonify({"error": "Authentication required"}), 401
    logger.info("User onboarded", extra={"user_id": user.id})
    return jsonify(serialize(user, exclude=_PRIVATE_FIELDS))
