"""Application-wide logger writing to platformdirs user_log_dir.

Modules log through ``logging.getLogger(__name__)``; the handler installed on
the ``pomo_cli`` logger here receives their records. The terminal belongs to
the TUI, so nothing is written to stdout/stderr.

A line looks like::

    2026-01-01T09:25:00 INFO     [models.machine] Entered break: session=1/4 duration=300s
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomo_cli"
_LOG_FILE = "pomo.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


class _TimerFormatter(logging.Formatter):
    """Formatter that drops the ``pomo_cli.`` prefix from logger names."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _APP_NAME + "."
        name = record.name
        record.component = name[len(prefix):] if name.startswith(prefix) else name
        return super().format(record)


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        _TimerFormatter(
            fmt="%(asctime)s %(levelname)-8s [%(component)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def set_log_level(level: str) -> None:
    """Apply a level name from configuration (``"DEBUG"``, ``"INFO"``...)."""
    get_logger().setLevel(level.upper())
