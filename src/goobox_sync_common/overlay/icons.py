"""Overlay icon states."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Protocol


class OverlayIcon(IntEnum):
    """Badge shown on a file in the OS file manager.

    Ids are ordered by priority: a folder shows the highest id found
    in its subtree.
    """

    NONE = 0
    OK = 1
    SYNCING = 2

    def id(self) -> int:
        return int(self.value)


class OverlayIconProvider(Protocol):
    """Answers the sync state of a single file, implemented by the sync engine."""

    def get_icon(self, path: Path) -> OverlayIcon: ...
