"""Structured session event logging."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

from ..config.settings import settings

DEFAULT_LOG_DIR = ".watchman"
DEFAULT_LOG_FILE = "watchman-events.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
BACKUP_LOG_FILES = 5
_ROOT_LOGGER_NAME = "watchman"
_LOGGER_NAME = "watchman.tui.events"


def _resolve_log_path() -> Path:
    configured_path = settings.logging.file_path
    if configured_path:
        return Path(configured_path).expanduser()
    return Path.home() / DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def _configure_rotating_handler() -> logging.Logger:
    # Attached to the package logger so service loggers never reach stderr
    # underneath the full-screen UI.
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    log_path = _resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_LOG_FILES,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.logging.level, logging.INFO))
    logger.propagate = False
    return logger


_configure_rotating_handler()
structlog.configure(
    processors=[
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
_logger = structlog.get_logger(_LOGGER_NAME)


def log_session_event(event: str, **payload: Any) -> None:
    """Emit a structured session event."""
    _logger.info(event, **payload)
