"""Error types and global exception handling.

This module defines the exceptions raised by the helpers and installs a
custom exception hook that:
- Logs every uncaught exception with its traceback
- Displays an error dialog when a Qt application is running

The hook is installed early in client startup so failures in tray or
overlay callbacks end up in the log file instead of a closed console.
"""

from __future__ import annotations

import contextlib
import logging
import sys
import traceback

logger = logging.getLogger(__name__)


def _application():  # type: ignore[no-untyped-def]
    """Return the running QApplication, or None."""
    from PySide6.QtWidgets import QApplication

    return QApplication.instance()


class SyncCommonError(Exception):
    """Base error for the sync client helpers."""


class HomeDirectoryError(SyncCommonError):
    """The user home directory could not be determined."""


class ConflictedCopyError(SyncCommonError):
    """No free conflicted-copy name was found within the allowed counter."""


def install_exception_hook(
    error_dialog_factory=None,
) -> None:
    """Log uncaught exceptions and present them in a dialog.

    Args:
        error_dialog_factory: Optional callable(exc_type, exc, tb) that
            creates and returns a dialog with an ``exec()`` method. If None,
            a plain critical QMessageBox is shown.
    """

    def excepthook(exc_type, exc, tb):  # type: ignore[no-untyped-def]
        with contextlib.suppress(Exception):
            logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))

        with contextlib.suppress(Exception):
            # The tray client has no console, only show a dialog with a GUI
            if not _application():
                return

            if error_dialog_factory:
                dialog = error_dialog_factory(exc_type, exc, tb)
            else:
                # Qt is only imported once a dialog is shown
                from PySide6.QtWidgets import QMessageBox

                dialog = QMessageBox(
                    QMessageBox.Icon.Critical,
                    "Goobox error",
                    f"{exc_type.__name__}: {exc}",
                )
                dialog.setDetailedText("".join(traceback.format_exception(exc_type, exc, tb)))
            dialog.exec()

    sys.excepthook = excepthook
