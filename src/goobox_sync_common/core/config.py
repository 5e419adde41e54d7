"""Application-wide constants and environment configuration.

Nothing here is persisted. Values that deployments need to tune are read
from environment variables at call time so tests can override them with
``monkeypatch.setenv``.
"""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "Goobox"

# Directory holding overlay_<STATE>.icns and tray-*.png icons
RESOURCE_DIR_ENV = "GOOBOX_RESOURCE"
LOG_LEVEL_ENV = "GOOBOX_LOG_LEVEL"

LOG_FILE_NAME = "goobox.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# The native service port may still be held by a previous run
OVERLAY_RECONNECT_DELAY = 30.0  # seconds
ICON_REGISTRATION_DELAY = 1.0  # seconds


def resource_dir() -> Path:
    """Return the directory icons are loaded from."""
    return Path(os.environ.get(RESOURCE_DIR_ENV, "."))


def log_level() -> str:
    """Return the configured log level name (``INFO`` when unset)."""
    return os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
