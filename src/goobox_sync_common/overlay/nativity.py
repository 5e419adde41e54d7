"""Interfaces of the native shell integration.

The shell extensions (Windows Explorer, macOS Finder Sync) are driven by a
native control object. OverlayHelper only talks to these interfaces, the
platform integration supplies the implementation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class FileIconControlCallback(Protocol):
    def get_icon_for_file(self, path: str) -> int: ...


class FileIconControl(Protocol):
    def enable_file_icons(self) -> None: ...

    def register_icon_with_id(self, path: str, label: str, icon_id: str) -> None: ...

    def refresh_icons(self, paths: list[str]) -> None: ...


class NativityControl(Protocol):
    def connect(self) -> bool:
        """Connect to the native service, returning False on failure."""
        ...

    def disconnect(self) -> bool: ...

    def set_filter_folder(self, folder: str) -> None:
        """Limit icon queries from the shell to *folder*."""
        ...

    def get_file_icon_control(self, callback: FileIconControlCallback) -> FileIconControl: ...


@dataclass(frozen=True)
class ContextMenuItem:
    """Entry of the file manager context menu."""

    title: str
    action: Callable[[list[str]], None] | None = None

    def on_selection(self, paths: list[str]) -> None:
        if self.action is not None:
            self.action(paths)
