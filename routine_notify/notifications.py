from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
from PySide6.QtWidgets import QSystemTrayIcon
from PySide6.QtGui import QIcon

from .store import RecordStore

logger = logging.getLogger(__name__)

APP_TITLE = "Routine Notify"
MESSAGE_DURATION_MS = 10_000


class Notifier:
    def __init__(self, tray: QSystemTrayIcon, store: RecordStore):
        self.tray = tray
        self.store = store

    def resolve_icon(self, icon_ref: Optional[str]) -> Optional[Path]:
        """Stored icon path for a rule's icon reference, or None (never raises)."""
        if not icon_ref or icon_ref == "undefined" or "." not in icon_ref:
            return None
        path = self.store.icon_path(icon_ref)
        if path is None:
            logger.info("Custom icon %s not found, showing notification without icon", icon_ref)
        return path

    def notify(self, message: str, icon_ref: Optional[str] = "") -> None:
        icon_path = self.resolve_icon(icon_ref)
        # Cross-platform "native-ish" balloon/toast; returns immediately
        if icon_path is not None:
            logger.info("Showing notification with icon: %s", icon_path)
            self.tray.showMessage(APP_TITLE, message, QIcon(str(icon_path)), MESSAGE_DURATION_MS)
        else:
            logger.info("Showing notification without icon")
            self.tray.showMessage(APP_TITLE, message, QSystemTrayIcon.MessageIcon.Information, MESSAGE_DURATION_MS)
