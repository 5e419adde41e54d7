"""Logging configuration for the sync client."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .config import (
    LOG_BACKUP_COUNT,
    LOG_FILE_NAME,
    LOG_FORMAT,
    LOG_LEVEL_ENV,
    LOG_MAX_BYTES,
    log_level,
)
from .paths import get_log_dir

LOGGER_NAME = "goobox_sync_common"


def setup_logging(level: int | str | None = None, log_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger with a rotating log file and the console.

    Calling it again returns the already configured logger unchanged.

    Args:
        level: Log level, defaults to ``GOOBOX_LOG_LEVEL`` or INFO.
        log_dir: Directory of the log file, defaults to the user log dir.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger  # already configured

    unknown_level = None
    if level is None:
        level = log_level()
        if not isinstance(logging.getLevelName(level), int):
            unknown_level, level = level, logging.INFO
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT)

    log_dir = log_dir if log_dir is not None else get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if unknown_level is not None:
        logger.warning("Unknown log level %r in %s, using INFO", unknown_level, LOG_LEVEL_ENV)

    return logger
