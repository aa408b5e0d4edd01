"""Daybook application factory."""

from __future__ import annotations

import os
from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .blueprints.common import validation_errors
from .config import BaseConfig, DevConfig, TestConfig
from .logging_config import get_logger, setup_logging
from .services.dates import InvalidRangeError

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "daybook.blueprints.auth"
    yield "daybook.blueprints.habits"
    yield "daybook.blueprints.todos"
    yield "daybook.blueprints.reminders"
    yield "daybook.blueprints.notes"
    yield "daybook.blueprints.calendar"
    yield "daybook.blueprints.dashboard"
    yield "daybook.blueprints.activity"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name or os.getenv("DAYBOOK_ENV"))
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["DAYBOOK_CONFIG"] = config_obj

    setup_logging(config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)

    # Imported lazily so that importing the package does not configure SQLModel mappers.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    """Every error leaves the API as a JSON body."""

    logger = get_logger("app")

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify({"errors": validation_errors(exc)}), 400

    @app.errorhandler(InvalidRangeError)
    def handle_invalid_range(exc: InvalidRangeError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error", extra={"error_type": type(exc).__name__})
        if app.testing or app.config.get("PROPAGATE_EXCEPTIONS"):
            raise exc
        return jsonify({"error": "Internal server error"}), 500


__all__ = ["create_app"]
