from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QSpinBox, QComboBox, QFileDialog, QMessageBox
)

from ..models import IconStoreError, NotificationRule, ValidationError
from ..service import RoutineService
from ..validation import MAX_MESSAGE_LENGTH, validate_rule_fields

logger = logging.getLogger(__name__)


class RuleEditor(QDialog):
    """Add/edit form for one notification. Result is read via values()."""

    def __init__(self, service: RoutineService, rule: Optional[NotificationRule] = None, parent=None):
        super().__init__(parent)
        self.service = service
        self.rule = rule
        self.setWindowTitle("Edit Notification" if rule else "Add Notification")
        self.setMinimumWidth(420)

        self._hour = 0
        self._minute = 0
        self._message = ""
        self._icon = ""

        layout = QVBoxLayout(self)

        layout.addWidget(QLabel("Time (hour : minute)"))
        time_row = QHBoxLayout()
        self.hour = QSpinBox()
        self.hour.setRange(0, 23)
        self.hour.setValue(9)
        time_row.addWidget(self.hour)
        time_row.addWidget(QLabel(":"))
        self.minute = QSpinBox()
        self.minute.setRange(0, 59)
        time_row.addWidget(self.minute)
        layout.addLayout(time_row)

        layout.addWidget(QLabel("Message"))
        self.message = QLineEdit()
        self.message.setMaxLength(MAX_MESSAGE_LENGTH)
        layout.addWidget(self.message)

        layout.addWidget(QLabel("Icon"))
        icon_row = QHBoxLayout()
        self.icon = QComboBox()
        icon_row.addWidget(self.icon, 1)
        self.btn_upload = QPushButton("Upload…")
        self.btn_upload.clicked.connect(self.upload_icon)
        icon_row.addWidget(self.btn_upload)
        layout.addLayout(icon_row)

        self.selected_file = QLabel("")
        self.selected_file.setStyleSheet("QLabel { color: #888; font-size: 11px; }")
        self.selected_file.hide()
        layout.addWidget(self.selected_file)

        btns = QHBoxLayout()
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.reject)
        btns.addWidget(self.btn_cancel)

        self.btn_save = QPushButton("Save")
        self.btn_save.clicked.connect(self.save)
        btns.addWidget(self.btn_save)
        layout.addLayout(btns)

        self._populate_icons(self.service.available_icons())
        if rule is not None:
            self._load(rule)

    def _populate_icons(self, names: List[str]) -> None:
        self.icon.clear()
        self.icon.addItem("No icon", "")
        for n in names:
            self.icon.addItem(n, n)

    def _select_icon(self, name: str, label: Optional[str] = None) -> None:
        idx = self.icon.findData(name)
        if idx < 0:
            self.icon.addItem(label or name, name)
            idx = self.icon.count() - 1
        self.icon.setCurrentIndex(idx)

    def _load(self, rule: NotificationRule) -> None:
        self.hour.setValue(rule.hour)
        self.minute.setValue(rule.minute)
        self.message.setText(rule.message)
        if rule.icon and "." in rule.icon:
            self._select_icon(rule.icon)

    def upload_icon(self) -> None:
        file_name, _ = QFileDialog.getOpenFileName(
            self, "Choose icon", "", "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.ico *.svg)"
        )
        if not file_name:
            return

        original = Path(file_name).name
        try:
            data = Path(file_name).read_bytes()
            stored = self.service.upload_icon(data, original)
        except ValidationError as e:
            QMessageBox.warning(self, "Invalid icon", str(e))
            return
        except (IconStoreError, OSError) as e:
            logger.error("Error uploading custom icon: %s", e)
            QMessageBox.critical(self, "Upload failed", "Failed to upload icon. Please try again with a different image.")
            return

        self._select_icon(stored, f"Custom: {original}")
        self.selected_file.setText(f"Selected: {original}")
        self.selected_file.show()

    def save(self) -> None:
        try:
            message = validate_rule_fields(self.hour.value(), self.minute.value(), self.message.text())
        except ValidationError as e:
            QMessageBox.warning(self, "Invalid notification", str(e))
            return

        self._hour = int(self.hour.value())
        self._minute = int(self.minute.value())
        self._message = message
        self._icon = self.icon.currentData() or ""
        self.accept()

    def values(self) -> tuple:
        return self._hour, self._minute, self._message, self._icon
