"""Structured logging for telekit.

All records go to the ``telekit`` logger as one JSON object per line.  Call
sites attach context through ``extra`` (the Bot API method, the poll offset,
an update id) and those keys become top-level JSON fields::

    {"timestamp": "...", "level": "WARNING", "message": "Lost connection ...",
     "api_endpoint": "getUpdates", "poll_timeout": 10, ...}

Output goes to stderr.  Setting ``TELEKIT_LOG_FILE`` adds a size-rotated copy
on disk.  The level comes from ``TELEKIT_LOG_LEVEL``.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from telekit.config import LOG_FILE, LOG_LEVEL

LOGGER_NAME = "telekit"
ROTATE_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord(
    name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
))) | {"message", "asctime", "taskName"}


class JsonLineFormatter(logging.Formatter):
    """Render a record, plus its ``extra`` context, as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    """Console handler, plus a rotating file handler when *log_file* is set."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=ROTATE_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8"))

    formatter = JsonLineFormatter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


class TelekitLogger:
    """Process-wide owner of the ``telekit`` logger.

    The first instantiation configures the logger; later ones return the
    same object.  Modules normally just do::

        logger = TelekitLogger.get_logger()
    """

    _instance: Optional["TelekitLogger"] = None

    def __new__(cls, level: int = LOG_LEVEL, log_file: Optional[str] = LOG_FILE) -> "TelekitLogger":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.logger = logging.getLogger(LOGGER_NAME)
            instance.logger.setLevel(level)
            # A reloaded module finds the handlers already attached.
            if not instance.logger.handlers:
                for handler in _build_handlers(level, log_file):
                    instance.logger.addHandler(handler)
            cls._instance = instance
        return cls._instance

    @classmethod
    def get_logger(cls, level: int = LOG_LEVEL) -> logging.Logger:
        """The shared logger.  *level* only matters on the very first call."""
        return cls(level).logger

    def cleanup(self) -> None:
        """Flush, close and detach every handler."""
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)
