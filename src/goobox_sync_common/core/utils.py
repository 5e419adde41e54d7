"""Exclusion filtering and conflicted-copy naming.

Both helpers are pure functions of their input plus, for conflicted copies,
today's date, the login name and the contents of the target directory.

Conflicted copies follow the pattern:
    <name> (<user>'s conflicted copy <YYYY-MM-DD>)<ext>
    <name> (<user>'s conflicted copy <YYYY-MM-DD>) <N><ext>

The returned name is not reserved. Another process may create a file with
the same name before the caller does, so callers that need uniqueness must
create the file exclusively and ask for a new name on collision.
"""

from __future__ import annotations

import getpass
import logging
import os
from datetime import date
from pathlib import Path

from .exceptions import ConflictedCopyError

logger = logging.getLogger(__name__)

SYSTEM_FILES = frozenset({"desktop.ini", "thumbs.db", ".ds_store"})
TEMP_PREFIXES = ("~$", ".~")

_CONFLICT_TEMPLATE = "{name} ({user}'s conflicted copy {date}){ext}"
_NUMBERED_CONFLICT_TEMPLATE = "{name} ({user}'s conflicted copy {date}) {counter}{ext}"


def is_excluded(path: str | os.PathLike[str]) -> bool:
    """Return True if the given path should be excluded from synchronization.

    Only the last path component is checked, case-insensitively:
    - system files: desktop.ini, thumbs.db, .ds_store
    - temporary files: names starting with ``~$`` or ``.~``, and names
      starting with ``~`` and ending with ``.tmp``
    - files and directories whose names end with a space

    The filesystem is never consulted, so the path does not need to exist.
    """
    filename = Path(path).name.lower()
    if filename in SYSTEM_FILES:
        return True
    if filename.startswith(TEMP_PREFIXES):
        return True
    if filename.startswith("~") and filename.endswith(".tmp"):
        return True
    return filename.endswith(" ")


def _current_user() -> str:
    return getpass.getuser()


def _today() -> str:
    return date.today().isoformat()


def _split_name(filename: str) -> tuple[str, str]:
    """Split at the first dot, so ``a.tar.gz`` gives ``("a", ".tar.gz")``."""
    idx = filename.find(".")
    if idx == -1:
        return filename, ""
    return filename[:idx], filename[idx:]


def _occupied(path: Path) -> bool:
    # lstat: a dangling symlink still takes the name
    try:
        path.lstat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True


def conflicted_copy_path(
    local_path: str | os.PathLike[str], *, max_counter: int | None = None
) -> Path:
    """Return a path for a conflicted copy of the given local file.

    The copy lives next to *local_path*. The counter is omitted while it is
    0 and incremented until the candidate does not exist.

    Args:
        local_path: File for which a conflicted copy path is created.
        max_counter: Optional upper bound for the counter. No bound when None.

    Returns:
        A path of which the corresponding file does not exist.

    Raises:
        OSError: If the existence of a candidate cannot be verified.
        ConflictedCopyError: If every name up to *max_counter* is taken.
    """
    local_path = Path(local_path)
    name, ext = _split_name(local_path.name)
    user = _current_user()
    today = _today()
    parent = local_path.parent

    candidate = parent / _CONFLICT_TEMPLATE.format(name=name, user=user, date=today, ext=ext)
    counter = 0
    while _occupied(candidate):
        counter += 1
        if max_counter is not None and counter > max_counter:
            raise ConflictedCopyError(
                f"No free conflicted copy name for {local_path} after {max_counter} attempts"
            )
        candidate = parent / _NUMBERED_CONFLICT_TEMPLATE.format(
            name=name, user=user, date=today, counter=counter, ext=ext
        )

    if counter:
        logger.debug("Conflicted copy name for %s needed counter %d", local_path, counter)
    return candidate
