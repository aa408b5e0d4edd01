"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from functools import wraps
from typing import Any, Iterable

from flask import abort, current_app, jsonify, request, session
from pydantic import ValidationError

from ..config import BaseConfig
from ..services.dates import as_utc

SESSION_USER_KEY = "user_id"


def app_config() -> BaseConfig:
    return current_app.config["DAYBOOK_CONFIG"]


def user_tz() -> tzinfo:
    return app_config().tzinfo()


def current_user_id() -> str | None:
    return session.get(SESSION_USER_KEY)


def login_required(view):
    """Reject the request with 401 unless a user is logged in."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user_id() is None:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def parse_day(raw: str | None, *, param: str) -> date | None:
    if raw is None or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        abort(400, description=f"Invalid {param}: expected YYYY-MM-DD")


def request_now() -> datetime:
    """The request's notion of "now"; the clock is read here and nowhere deeper."""

    return datetime.now(timezone.utc)


def request_today() -> date:
    """``?today=YYYY-MM-DD`` when given, else the current date in the configured zone."""

    override = parse_day(request.args.get("today"), param="today")
    if override is not None:
        return override
    return request_now().astimezone(user_tz()).date()


def json_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object")
    return payload


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into ``field -> messages``."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


def not_found(kind: str):
    return jsonify({"error": f"{kind} not found"}), 404


def serialize(obj: Any, *, exclude: Iterable[str] = ()) -> dict:
    """Dump a table model to JSON-safe primitives; datetimes come out as UTC ISO strings."""

    data = obj.model_dump(exclude=set(exclude))
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = as_utc(value).isoformat()
        elif isinstance(value, date):
            data[key] = value.isoformat()
    return data
