"""goobox sync common - helper utilities for the Goobox desktop sync client.

This package provides the pieces of the client that sit next to the sync
engine rather than inside it:
- Exclusion filtering of files that must never be synchronized
- Conflicted-copy file naming
- Platform-specific application directories
- Shell overlay icon integration
- System tray icon and menu
"""

from .core.config import APP_NAME
from .core.utils import conflicted_copy_path, is_excluded

__all__ = ["APP_NAME", "conflicted_copy_path", "is_excluded"]
