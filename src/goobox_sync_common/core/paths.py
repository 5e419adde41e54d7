"""Platform-specific application directories.

Directory layout used by the client:
    ~/Goobox                - the synchronized folder
    <user data dir>/Goobox  - client state owned by the sync engine
    <user log dir>/Goobox   - log files

The per-user data and log locations come from platformdirs so they follow
each OS's conventions (AppData on Windows, Library on macOS, XDG on Linux).
"""

from __future__ import annotations

import functools
import platform
from pathlib import Path

from platformdirs import PlatformDirs

from .config import APP_NAME
from .exceptions import HomeDirectoryError


@functools.cache
def _os_name() -> str:
    return platform.system()


def _is_windows() -> bool:
    return _os_name().startswith("Windows")


def _app_dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False)


def _short_path(path: str) -> str:
    """Return the 8.3 short form of *path* (Windows only)."""
    import ctypes

    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    size = kernel32.GetShortPathNameW(path, None, 0)
    if size == 0:
        raise ctypes.WinError()  # type: ignore[attr-defined]
    buf = ctypes.create_unicode_buffer(size)
    if kernel32.GetShortPathNameW(path, buf, size) == 0:
        raise ctypes.WinError()  # type: ignore[attr-defined]
    return buf.value


def get_home_dir() -> Path:
    """Return the user home directory.

    On Windows a home path with non-ASCII characters is converted to its
    short (8.3) form, which native shell integrations can handle. Other
    platforms use the home directory as is.

    Raises:
        HomeDirectoryError: If the short path cannot be determined.
    """
    path = str(Path.home())
    if _is_windows() and not path.isascii():
        try:
            path = _short_path(path)
        except OSError as e:
            raise HomeDirectoryError("Cannot determine user home dir") from e
    return Path(path)


def get_sync_dir() -> Path:
    """Return the synchronized folder root."""
    return get_home_dir() / APP_NAME


def get_data_dir() -> Path:
    """Return the per-user data directory."""
    return _app_dirs().user_data_path


def get_log_dir() -> Path:
    """Return the per-user log directory."""
    return _app_dirs().user_log_path
