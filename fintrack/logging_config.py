"""Logging configuration for FinTrack.

Library modules log through ``logging.getLogger(__name__)`` under the
``fintrack`` logger and never configure handlers themselves. Applications
(and the CLI) call ``setup_logging`` once with an ``AppSettings``.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone

from .config import AppSettings

LOGGER_NAME = "fintrack"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    # Standard LogRecord attributes that should not be treated as extra fields
    _STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Fields passed via logger.info(..., extra={...})
        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def setup_logging(settings: AppSettings) -> logging.Logger:
    """Configure the ``fintrack`` logger from *settings*.

    Args:
        settings: Application settings (log_level, debug, log_file)

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if settings.debug:
        console_format = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
    else:
        console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        fmt=console_format,
        datefmt="%H:%M:%S" if settings.debug else "%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.debug(
        "Logging initialized",
        extra={"log_level": settings.log_level, "log_file": str(settings.log_file)},
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger (``fintrack.<name>``)."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
