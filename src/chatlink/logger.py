"""
chatlink.logger

Logging setup for the chatlink package.

- `logger` is the package logger ("chatlink"); modules obtain children through
    `get_logger(__name__)`.
- `configure_logging(settings)` installs a JSON lines file handler
    (python-json-logger) and a plain console handler. Applications call it once
    at startup; importing the package never touches the filesystem.
- `log_event(name, **fields)` records an analytics event on the "chatlink.events"
    child logger with the event name in `extra`.
"""

import logging
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from chatlink.config import LoggingSettings, get_settings
from chatlink.utils import get_time

LOGGER_NAME = "chatlink"

logger: T_Logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())
event_logger = logger.getChild("events")


def get_logger(name: str) -> T_Logger:
    """Return a child of the package logger for a module name."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        name = name[len(LOGGER_NAME) + 1:] or "root"
    return logger.getChild(name)


def build_logging_config(log_file: Path, log_level: str) -> dict[str, Any]:
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file),
                "formatter": "json",
                "level": level,
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "handlers": ["file", "console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def _archive_log_file(log_file: Path, keep: int = 10) -> None:
    """Rename an existing log file with a timestamp and prune old archives."""
    if log_file.exists() and log_file.stat().st_size > 0:
        timestamp = get_time().strftime("%Y%m%d_%H%M%S")
        log_file.rename(log_file.with_name(f"{log_file.stem}_{timestamp}{log_file.suffix}"))

    archives = sorted(
        log_file.parent.glob(f"{log_file.stem}_*{log_file.suffix}"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    for archive in archives[keep:]:
        archive.unlink()


def configure_logging(settings: Optional[LoggingSettings] = None) -> T_Logger:
    """Install file and console handlers on the package logger."""
    settings = settings or get_settings(LoggingSettings)
    log_file = Path(settings.log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    _archive_log_file(log_file)

    dictConfig(build_logging_config(log_file, settings.log_level))
    logger.getChild("SYSTEM").debug("Logger for chatlink initialized.")
    return logger


def log_event(name: str, **fields: Any) -> None:
    event_logger.info(name, extra={"event": name, **fields})
