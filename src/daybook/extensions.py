"""Database wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database

EXTENSION_KEY = "daybook"


def init_db(app: Flask) -> None:
    """Create the engine for the app's configuration and attach a session factory."""

    config: BaseConfig = app.config["DAYBOOK_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    state = app.extensions.setdefault(EXTENSION_KEY, {})
    state["engine"] = engine
    state["session_factory"] = session_factory


def get_session_factory() -> SessionFactory:
    """Return the session factory of the active application."""

    state = current_app.extensions.get(EXTENSION_KEY, {})
    factory = state.get("session_factory")
    if factory is None:  # pragma: no cover - exercised only when misconfigured
        raise RuntimeError("Database not initialized; call init_db(app) first")
    return factory


def get_engine():
    state = current_app.extensions.get(EXTENSION_KEY, {})
    if "engine" not in state:  # pragma: no cover
        raise RuntimeError("Database engine not initialized")
    return state["engine"]
