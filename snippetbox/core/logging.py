"""SnippetBox logging setup.

Two output formats: one JSON object per line for deployments and a readable
line format for local work. Security-relevant records (rejected credentials,
ownership denials, admission rejections) carry request context through
``extra=``; the JSON formatter lifts those fields to top-level keys.
"""

import json
import logging
import sys
from typing import Literal

LogFormat = Literal["structured", "dev"]

DEV_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DEV_DATEFMT = "%H:%M:%S"

# Context attached by the middleware and the ownership guard
CONTEXT_FIELDS = ("method", "path", "client", "identity", "resource_id", "reason")

NOISY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line, request context included."""

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", format_type: LogFormat = "dev") -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Root log level name
        format_type: 'structured' for JSON lines, 'dev' for readable lines
    """
    numeric_level = getattr(logging, level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt=DEV_DATEFMT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL statements only at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if numeric_level <= logging.DEBUG else logging.WARNING
    )

    get_logger("logging").debug(f"Logging ready: level={level}, format={format_type}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``snippetbox`` namespace."""
    return logging.getLogger(f"snippetbox.{name}")
