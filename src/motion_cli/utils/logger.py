"""Application logging.

A single ``motion_cli`` logger writes to a rotating file in the platform log
directory. Modules log through ``logging.getLogger(__name__)``; those loggers
are its children and reach the file once ``get_logger()`` has run (commands
and tools call it on entry). Nothing is logged to the terminal.

``MOTION_LOG_LEVEL`` (``DEBUG``, ``INFO``, ``WARNING``...) sets the threshold.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

LOG_LEVEL_ENV = "MOTION_LOG_LEVEL"

_APP_NAME = "motion_cli"
_LOG_FILE = "motion.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _configured_level() -> int:
    level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "DEBUG").strip().upper())
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.DEBUG


def _has_file_handler(logger: logging.Logger) -> bool:
    # Only a file handler counts; capture handlers may already be attached
    return any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)


def get_logger() -> logging.Logger:
    """Return the application logger, attaching the file handler on first call."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_configured_level())
    logger.propagate = False
    if not _has_file_handler(logger):
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    _logger = logger
    return _logger
