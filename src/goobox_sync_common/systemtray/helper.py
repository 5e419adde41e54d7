"""System tray icon and menu.

The tray icon shows whether the client is idle or synchronizing and offers
a small menu:
- A disabled status line
- Open Goobox Folder
- Quit Goobox

The tray is created lazily on first use. Without a running QApplication or
a system tray on the desktop, every call is a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, Qt, QUrl, Signal, Slot
from PySide6.QtGui import QAction, QBrush, QColor, QDesktopServices, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from ..core.config import APP_NAME, resource_dir
from ..core.exceptions import HomeDirectoryError
from ..core.paths import get_sync_dir

logger = logging.getLogger(__name__)

ICON_IDLE = "tray-idle.png"
ICON_SYNC = "tray-sync.png"

TOOLTIP_IDLE = "Idle"
TOOLTIP_SYNC = "Synchronizing"


def _tray_available() -> bool:
    return QApplication.instance() is not None and QSystemTrayIcon.isSystemTrayAvailable()


def _paint_icon(color: QColor) -> QIcon:
    """Paint a round tray icon in *color*, used when no icon file is shipped."""
    size = 32
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(color))
    margin = 2
    painter.drawEllipse(margin, margin, size - 2 * margin, size - 2 * margin)
    painter.end()

    return QIcon(pixmap)


def _load_icon(file_name: str, fallback: QColor) -> QIcon:
    path = resource_dir() / file_name
    if path.exists():
        return QIcon(str(path))
    return _paint_icon(fallback)


class SystemTrayHelper(QObject):
    """Tray icon reflecting the synchronization state of the client.

    Create it on the GUI thread. The state setters may be called from any
    thread: they emit a signal and the tray is updated on the GUI thread.
    """

    _state_requested = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.tray: QSystemTrayIcon | None = None
        self.menu: QMenu | None = None
        self.action_status: QAction
        self.action_open: QAction
        self.action_quit: QAction
        self._icon_idle: QIcon
        self._icon_sync: QIcon
        self._shutdown_listener: Callable[[], None] | None = None
        self._state_requested.connect(self._on_state_requested)

    def set_idle(self) -> None:
        """Set the tray icon to idle mode."""
        self._state_requested.emit(TOOLTIP_IDLE)

    def set_synchronizing(self) -> None:
        """Set the tray icon to synchronizing mode."""
        self._state_requested.emit(TOOLTIP_SYNC)

    @Slot(str)
    def _on_state_requested(self, state: str) -> None:
        if not self._initialized():
            return
        if state == TOOLTIP_SYNC:
            self._show_state(self._icon_sync, TOOLTIP_SYNC)
        else:
            self._show_state(self._icon_idle, TOOLTIP_IDLE)

    def set_shutdown_listener(self, listener: Callable[[], None] | None) -> None:
        """Set the callback invoked by the Quit action.

        Lets the client shut down gracefully. Without a listener, Quit
        quits the Qt application.
        """
        self._shutdown_listener = listener

    def _show_state(self, icon: QIcon, text: str) -> None:
        assert self.tray is not None
        self.tray.setIcon(icon)
        self.action_status.setText(text)
        self.tray.setToolTip(text)

    def _initialized(self) -> bool:
        return self.tray is not None or self._init()

    def _init(self) -> bool:
        if not _tray_available():
            logger.debug("System tray is not available")
            return False

        self._icon_idle = _load_icon(ICON_IDLE, QColor(46, 204, 113))
        self._icon_sync = _load_icon(ICON_SYNC, QColor(52, 152, 219))

        menu = QMenu()
        self.action_status = QAction("", menu)
        self.action_status.setEnabled(False)
        menu.addAction(self.action_status)
        menu.addSeparator()

        self.action_open = QAction(f"&Open {APP_NAME} Folder", menu)
        self.action_open.triggered.connect(self.on_open_folder)
        menu.addAction(self.action_open)
        menu.addSeparator()

        self.action_quit = QAction(f"&Quit {APP_NAME}", menu)
        self.action_quit.triggered.connect(self.on_quit)
        menu.addAction(self.action_quit)

        tray = QSystemTrayIcon(self._icon_idle, self)
        tray.setContextMenu(menu)
        tray.show()

        self.menu = menu
        self.tray = tray
        return True

    @Slot()
    def on_open_folder(self) -> None:
        """Open the sync dir in the platform file manager."""
        try:
            path = get_sync_dir()
        except HomeDirectoryError:
            logger.exception("Cannot open %s folder", APP_NAME)
            return

        if not QDesktopServices.openUrl(QUrl.fromLocalFile(str(path))):
            logger.warning("Cannot open folder %s", path)

    @Slot()
    def on_quit(self) -> None:
        """Remove the tray icon and shut the client down."""
        if self.tray is not None:
            self.tray.hide()

        if self._shutdown_listener is None:
            QApplication.quit()
        else:
            self._shutdown_listener()
