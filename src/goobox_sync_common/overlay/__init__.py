"""Shell overlay icon integration."""

from .helper import OverlayHelper
from .icons import OverlayIcon, OverlayIconProvider
from .nativity import ContextMenuItem, FileIconControl, FileIconControlCallback, NativityControl

__all__ = [
    "ContextMenuItem",
    "FileIconControl",
    "FileIconControlCallback",
    "NativityControl",
    "OverlayHelper",
    "OverlayIcon",
    "OverlayIconProvider",
]
