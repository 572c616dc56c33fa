"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytz
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Habitual"
    DB_FILENAME = "habitual.db"
    DEFAULT_TIMEZONE = "UTC"
    DEFAULT_HEATMAP_DAYS = 30

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITUAL_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITUAL_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("HABITUAL_TIMEZONE", self.DEFAULT_TIMEZONE)
        self.HEATMAP_DAYS = _env_int("HABITUAL_HEATMAP_DAYS", self.DEFAULT_HEATMAP_DAYS)
        if self.TIMEZONE not in pytz.all_timezones_set:
            raise ValueError(f"HABITUAL_TIMEZONE is not a known timezone: {self.TIMEZONE}")
        if self.HEATMAP_DAYS < 1:
            raise ValueError("HABITUAL_HEATMAP_DAYS must be at least 1.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITUAL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def tz(self):
        """The configured timezone as a pytz tzinfo."""

        return pytz.timezone(self.TIMEZONE)

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options
