"""Structured logging utilities for the fitness tracker."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable

from utils.personal_data import scrub_sensitive_mapping

__all__ = ["get_logger"]

LOG_DIR = Path("logs")
LOG_FILE_NAME = "fitness.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

_EXTRA_FIELDS = ("athlete_id", "record_id", "athlete_name", "path")


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited doc
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            payload[name] = getattr(record, name, None)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        scrub_sensitive_mapping(payload)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _ensure_log_dir() -> Path:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR


def _file_handler() -> logging.Handler:
    handler = RotatingFileHandler(
        _ensure_log_dir() / LOG_FILE_NAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    return handler


def _stream_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(logging.WARNING)
    return handler


# Handler kind -> factory. get_logger attaches each kind at most once per
# logger, tagging the handler under HANDLER_KIND_ATTR.
_HANDLER_FACTORIES: dict[str, Callable[[], logging.Handler]] = {
    "stream": _stream_handler,
    "file": _file_handler,
}
HANDLER_KIND_ATTR = "fitness_log_kind"


def get_logger(name: str) -> logging.Logger:
    """Return logger writing JSON lines to stderr and the rotating log file."""

    logger = logging.getLogger(name)
    present = {getattr(handler, HANDLER_KIND_ATTR, None) for handler in logger.handlers}

    for kind, factory in _HANDLER_FACTORIES.items():
        if kind in present:
            continue
        handler = factory()
        handler.setFormatter(JsonLogFormatter())
        setattr(handler, HANDLER_KIND_ATTR, kind)
        logger.addHandler(handler)

    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
