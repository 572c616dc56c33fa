"""Logging for the habitual engine.

Records go to the console in a human format and to ``<DATA_DIR>/logs/habitual.log``
as one JSON object per line. Service modules pass identifiers such as
``habit_id`` or ``period`` through ``extra=``; the JSON formatter lifts those
into a ``context`` object so log lines can be filtered per user or habit.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url

from .config import BaseConfig

ROOT_LOGGER_NAME = "habitual"
LOG_FILENAME = "habitual.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Identifiers the services attach to records; anything else lands in "extra".
CONTEXT_FIELDS = (
    "user_id",
    "habit_id",
    "completion_id",
    "relationship_id",
    "target_user_id",
    "period",
    "status",
)

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with service identifiers under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            if key in CONTEXT_FIELDS:
                context[key] = value
            else:
                extra[key] = value
        if context:
            payload["context"] = context
        if extra:
            payload["extra"] = extra

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(payload, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if dev_mode:
        handler.setLevel(logging.INFO)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
        )
    else:
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    return handler


def _file_handler(logs_dir: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=logs_dir / LOG_FILENAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach the console and JSON file handlers to the ``habitual`` logger.

    Calling it again replaces the handlers rather than stacking them.
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(config.DEV_MODE))
    logger.addHandler(_file_handler(logs_dir))

    logger.info(
        "Logging initialized",
        extra={
            "database": make_url(config.DATABASE_URL).render_as_string(hide_password=True),
            "timezone": config.TIMEZONE,
            "dev_mode": config.DEV_MODE,
        },
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``habitual`` namespace, e.g. ``get_logger("cli")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
