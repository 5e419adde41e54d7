"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import os

import pytest

# Qt must not need a display for the tray tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def sync_dir(tmp_path):
    """Provide an empty Goobox sync dir."""
    path = tmp_path / "Goobox"
    path.mkdir()
    return path


@pytest.fixture
def fixed_identity(monkeypatch):
    """Pin the user name and date used in conflicted copy names."""
    from goobox_sync_common.core import utils

    monkeypatch.setattr(utils, "_current_user", lambda: "example")
    monkeypatch.setattr(utils, "_today", lambda: "1970-01-01")
    return "example", "1970-01-01"


@pytest.fixture
def clean_package_logger():
    """Remove handlers added to the package logger during a test."""
    logger = logging.getLogger("goobox_sync_common")
    saved = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved:
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(level)
