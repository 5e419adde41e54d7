"""System tray integration."""

from .helper import TOOLTIP_IDLE, TOOLTIP_SYNC, SystemTrayHelper

__all__ = ["TOOLTIP_IDLE", "TOOLTIP_SYNC", "SystemTrayHelper"]
