"""
Logging setup.

Everything goes through the stdlib logging module configured with
dictConfig. Records carry a correlation_id taken from the request ID of
the request being served, so one request's lines can be grepped together.

Formats:
- console: human-readable lines (development)
- json: one JSON object per line through python-json-logger (production)

When LOG_FILE_ENABLED is set, records are also written to a rotating log
file, and ERROR records to a separate error.log next to it.
"""

import logging
import logging.config
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from src.core.config import settings

# Set by RequestIDMiddleware for the duration of a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="no-request-id")

CONSOLE_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(correlation_id)s] %(name)s: %(message)s"
)
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(correlation_id)s %(message)s"

# Third-party loggers and the level they are capped at
LIBRARY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
    "sqlalchemy.engine": "WARNING",
    "slowapi": "WARNING",
}


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = request_id_var.get()
        return True


def _rotating_file(filename: str, level: str, formatter: str) -> dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": filename,
        "maxBytes": settings.log_file_max_bytes,
        "backupCount": settings.log_file_backup_count,
        "encoding": "utf-8",
        "filters": ["correlation_id"],
    }


def get_logging_config() -> dict[str, Any]:
    """
    Build the dictConfig for the current settings.

    Returns:
        Dictionary for logging.config.dictConfig()
    """
    formatter = "json" if settings.log_format == "json" else "console"

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.log_level,
            "formatter": formatter,
            "stream": sys.stdout,
            "filters": ["correlation_id"],
        },
    }

    if settings.log_file_enabled:
        log_path = Path(settings.log_file_path)
        handlers["file"] = _rotating_file(str(log_path), settings.log_level, formatter)
        handlers["error_file"] = _rotating_file(
            str(log_path.parent / "error.log"), "ERROR", formatter
        )

    handler_names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {"()": "pythonjsonlogger.json.JsonFormatter", "format": JSON_FORMAT},
        },
        "filters": {
            "correlation_id": {"()": CorrelationIdFilter},
        },
        "handlers": handlers,
        "root": {
            "level": settings.log_level,
            "handlers": handler_names,
        },
        "loggers": {
            name: {"level": level, "handlers": handler_names, "propagate": False}
            for name, level in LIBRARY_LEVELS.items()
        },
    }


def setup_logging() -> None:
    """Apply the logging configuration. Call once, before the app is built."""
    if settings.log_file_enabled:
        Path(settings.log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config())

    logging.getLogger(__name__).info(
        f"Logging ready (level={settings.log_level}, format={settings.log_format}, "
        f"files={'on' if settings.log_file_enabled else 'off'})"
    )
