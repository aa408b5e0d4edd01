"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Daybook"
    DB_FILENAME = "daybook.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("DAYBOOK_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DAYBOOK_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("DAYBOOK_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("DAYBOOK_TIMEZONE", "UTC")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("DAYBOOK_SECRET_KEY must be set in non-dev mode.")
        # Fail at startup rather than on the first request.
        self.tzinfo()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("DAYBOOK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = Path(self.DATA_DIR) / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def tzinfo(self) -> ZoneInfo:
        """Return the zone used to decide which calendar day an instant falls on."""

        try:
            return ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.TIMEZONE!r}") from exc

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for the test suite; always a throwaway SQLite file."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = self._build_sqlite_url()
