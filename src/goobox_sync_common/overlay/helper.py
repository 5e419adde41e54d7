"""Shell overlay icons for the synchronized folder.

OverlayHelper connects to the native shell integration and answers its
icon queries for files below the sync dir. It runs one background thread:
- Connects to the native service, retrying every 30 seconds while the
  port is still held by a previous run of the client
- Registers the overlay icons and the sync dir as filter folder
- Serves icon refresh requests one at a time from a queue

Overlay icons are only supported on Windows and macOS. On other platforms
every public method is a no-op.
"""

from __future__ import annotations

import logging
import os
import queue
import sys
import threading
import time
from collections.abc import Iterator
from pathlib import Path

from ..core.config import ICON_REGISTRATION_DELAY, OVERLAY_RECONNECT_DELAY, resource_dir
from .icons import OverlayIcon, OverlayIconProvider
from .nativity import ContextMenuItem, FileIconControl, NativityControl

logger = logging.getLogger(__name__)

FILE_ATTRIBUTE_SYSTEM = 0x4
SHUTDOWN_JOIN_TIMEOUT = 5.0  # seconds


def _platform() -> str:
    return sys.platform


def _is_windows() -> bool:
    return _platform() == "win32"


def _is_apple() -> bool:
    return _platform() == "darwin"


def _is_linux() -> bool:
    return _platform().startswith("linux")


def _overlay_supported() -> bool:
    return _is_windows() or _is_apple()


def _set_system_attribute(path: Path) -> None:
    """Mark *path* as a Windows system folder so Explorer loads desktop.ini."""
    import ctypes

    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    attrs = kernel32.GetFileAttributesW(str(path))
    if attrs == -1 or not kernel32.SetFileAttributesW(str(path), attrs | FILE_ATTRIBUTE_SYSTEM):
        raise ctypes.WinError()  # type: ignore[attr-defined]


def _raise(err: OSError) -> None:
    raise err


def _walk(root: Path) -> Iterator[Path]:
    """Yield *root* and every file and directory below it, not following links."""
    root.lstat()
    yield root
    if root.is_dir() and not root.is_symlink():
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            base = Path(dirpath)
            for name in dirnames + filenames:
                yield base / name


class OverlayHelper:
    """Bridge between the sync engine and the native overlay icon service."""

    def __init__(
        self,
        sync_dir: Path,
        icon_provider: OverlayIconProvider,
        control: NativityControl | None = None,
        reconnect_delay: float = OVERLAY_RECONNECT_DELAY,
        icon_registration_delay: float = ICON_REGISTRATION_DELAY,
    ) -> None:
        self.sync_dir = Path(sync_dir)
        self.icon_provider = icon_provider
        self.reconnect_delay = reconnect_delay
        self.icon_registration_delay = icon_registration_delay
        self._control = control
        self._file_icon_control: FileIconControl | None = None
        self._queue: queue.Queue[list[str] | None] = queue.Queue()
        self._global_state = OverlayIcon.NONE
        self._shutdown = False
        self._cond = threading.Condition()
        self._thread: threading.Thread | None = None

        if not _overlay_supported():
            return

        if self._control is not None:
            self._thread = threading.Thread(target=self._init, name="Init overlay icons", daemon=True)
            self._thread.start()

    def _init(self) -> None:
        assert self._control is not None

        with self._cond:
            while not self._shutdown:
                if self._control.connect():
                    logger.debug("Successfully connected to native service.")
                    break

                logger.debug(
                    "Connection to native service failed. Retry in %s seconds.",
                    self.reconnect_delay,
                )
                self._cond.wait(self.reconnect_delay)

        if self._shutdown:
            return

        if _is_windows():
            try:
                _set_system_attribute(self.sync_dir)
            except OSError:
                logger.exception("Cannot set system folder")

        file_icon_control = self._control.get_file_icon_control(self)
        self._file_icon_control = file_icon_control
        file_icon_control.enable_file_icons()

        if _is_apple() or _is_linux():
            self._register_icons(file_icon_control)

        self._control.set_filter_folder(str(self.sync_dir))

        logger.debug("OverlayHelper has been initialized")
        while True:
            paths = self._queue.get()
            if paths is None:
                break
            file_icon_control.refresh_icons(paths)

    def _register_icons(self, file_icon_control: FileIconControl) -> None:
        icons_dir = resource_dir()
        for state in OverlayIcon:
            icon = (icons_dir / f"overlay_{state.name}.icns").absolute()
            if not icon.exists():
                logger.warning("Cannot find overlay icon %s for ID %d (%s)", icon, state.id(), state.name)
                continue

            logger.debug("Register %s with ID %d (%s)", icon, state.id(), state.name)
            file_icon_control.register_icon_with_id(str(icon), state.name, str(state.id()))
            # Space out registrations for the shell extension
            time.sleep(self.icon_registration_delay)

    @property
    def global_state(self) -> OverlayIcon:
        """Icon shown on the sync dir itself."""
        return self._global_state

    def set_ok(self) -> None:
        if not _overlay_supported():
            return
        self._global_state = OverlayIcon.OK
        self._refresh_root()

    def set_synchronizing(self) -> None:
        if not _overlay_supported():
            return
        self._global_state = OverlayIcon.SYNCING
        self._refresh_root()

    def shutdown(self) -> None:
        """Stop the background thread and disconnect from the native service."""
        if not _overlay_supported():
            return

        # Interrupt the connection retry loop if it is still running
        with self._cond:
            self._shutdown = True
            self._cond.notify_all()

        self._global_state = OverlayIcon.NONE
        # The consumer may still be starting up, so the final refresh is
        # queued even before the file icon control exists
        self._queue.put([str(self.sync_dir)])
        self._queue.put(None)

        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(SHUTDOWN_JOIN_TIMEOUT)

        if self._control is not None:
            self._control.disconnect()

    def refresh(self, path: Path | None) -> None:
        """Request a badge refresh for *path* and its parents inside the sync dir.

        Called by the sync engine whenever the sync state of a file changes.
        """
        if self._file_icon_control is None or path is None:
            return
        path = Path(path)
        if not path.is_relative_to(self.sync_dir):
            return

        depth = len(path.relative_to(self.sync_dir).parts)
        paths = [path, *path.parents][:depth]
        self._queue.put([str(p) for p in paths])

    def _refresh_root(self) -> None:
        if self._file_icon_control is not None:
            self._queue.put([str(self.sync_dir)])

    # FileIconControlCallback, queried by Explorer and Finder

    def get_icon_for_file(self, path: str) -> int:
        p = Path(path)
        if p == self.sync_dir:
            return self._global_state.id()
        if not p.is_relative_to(self.sync_dir):
            return OverlayIcon.NONE.id()

        try:
            return max(
                (self.icon_provider.get_icon(entry).id() for entry in _walk(p)),
                default=OverlayIcon.NONE.id(),
            )
        except OSError:
            logger.exception("Failed walking the file tree")
        return OverlayIcon.NONE.id()

    def get_context_menu_items(self, paths: list[str]) -> list[ContextMenuItem]:
        """Return the context menu entries for the selected *paths*.

        Finder Sync only shows the top level of the menu, so there is a
        single entry.
        """

        def on_selection(selected: list[str]) -> None:
            logger.info("Context menu selection: %s", "; ".join(selected))

        return [ContextMenuItem("Goobox", on_selection)]
