from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton, QListWidget,
    QListWidgetItem, QMessageBox, QTabWidget, QWidget
)

from .. import records
from ..models import ValidationError
from ..periods import now_local
from ..service import RoutineService
from ..validation import MAX_TASK_TEXT_LENGTH, validate_task_text
from .rule_editor import RuleEditor


class MainWindow(QDialog):
    def __init__(self, service: RoutineService, parent=None):
        super().__init__(parent)
        self.service = service
        self.setWindowTitle("Routine Notify")
        self.resize(900, 700)
        self.setAttribute(Qt.WA_DeleteOnClose, False)

        layout = QVBoxLayout(self)
        self.tabs = QTabWidget()
        self.tabs.addTab(self._build_notifications_tab(), "Notifications")
        self.tabs.addTab(self._build_tasks_tab(), "Tasks")
        layout.addWidget(self.tabs)

        self.refresh()

    # ---------- layout ----------
    def _build_notifications_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        self.rules_empty = QLabel("No notifications\nAdd your first notification to get started")
        self.rules_empty.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.rules_empty)

        self.rules_list = QListWidget()
        self.rules_list.itemDoubleClicked.connect(lambda _item: self.edit_rule())
        layout.addWidget(self.rules_list)

        row = QHBoxLayout()
        self.btn_add_rule = QPushButton("Add notification…")
        self.btn_add_rule.clicked.connect(self.add_rule)
        row.addWidget(self.btn_add_rule)

        self.btn_toggle_rule = QPushButton("Enable / disable")
        self.btn_toggle_rule.clicked.connect(self.toggle_rule)
        row.addWidget(self.btn_toggle_rule)

        self.btn_edit_rule = QPushButton("Edit…")
        self.btn_edit_rule.clicked.connect(self.edit_rule)
        row.addWidget(self.btn_edit_rule)

        self.btn_delete_rule = QPushButton("Delete")
        self.btn_delete_rule.clicked.connect(self.delete_rule)
        row.addWidget(self.btn_delete_rule)
        layout.addLayout(row)
        return page

    def _build_tasks_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        row = QHBoxLayout()
        self.new_task = QLineEdit()
        self.new_task.setPlaceholderText("New task…")
        self.new_task.setMaxLength(MAX_TASK_TEXT_LENGTH)
        self.new_task.returnPressed.connect(self.add_task)
        row.addWidget(self.new_task, 1)
        self.btn_add_task = QPushButton("Add")
        self.btn_add_task.clicked.connect(self.add_task)
        row.addWidget(self.btn_add_task)
        layout.addLayout(row)

        self.tasks_empty = QLabel("No tasks yet\nAdd your first task to get organized")
        self.tasks_empty.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.tasks_empty)

        self.tasks_list = QListWidget()
        self.tasks_list.itemChanged.connect(self._task_item_changed)
        layout.addWidget(self.tasks_list)

        self.btn_delete_task = QPushButton("Delete task")
        self.btn_delete_task.clicked.connect(self.delete_task)
        layout.addWidget(self.btn_delete_task)
        return page

    # ---------- refresh ----------
    def refresh(self) -> None:
        self._refresh_rules()
        self._refresh_tasks()

    def _refresh_rules(self) -> None:
        selected_id = _selected_id(self.rules_list)
        rules = records.sorted_rules(self.service.rules())

        self.rules_list.clear()
        for r in rules:
            text = f"{r.hhmm}  {r.message}"
            if not r.enabled:
                text += "  [DISABLED]"
            it = QListWidgetItem(text)
            it.setData(Qt.UserRole, r.id)
            self.rules_list.addItem(it)
            if r.id == selected_id:
                self.rules_list.setCurrentItem(it)

        self.rules_empty.setVisible(not rules)
        self.rules_list.setVisible(bool(rules))

    def _refresh_tasks(self) -> None:
        tasks = records.sorted_tasks(self.service.tasks())

        self.tasks_list.blockSignals(True)
        try:
            self.tasks_list.clear()
            for t in tasks:
                it = QListWidgetItem(t.text)
                it.setData(Qt.UserRole, t.id)
                it.setFlags(it.flags() | Qt.ItemIsUserCheckable)
                it.setCheckState(Qt.Checked if t.completed else Qt.Unchecked)
                if t.completed:
                    font = it.font()
                    font.setStrikeOut(True)
                    it.setFont(font)
                self.tasks_list.addItem(it)
        finally:
            self.tasks_list.blockSignals(False)

        self.tasks_empty.setVisible(not tasks)
        self.tasks_list.setVisible(bool(tasks))

    # ---------- notification actions ----------
    def add_rule(self) -> None:
        dlg = RuleEditor(self.service, rule=None, parent=self)
        if dlg.exec():
            hour, minute, message, icon = dlg.values()
            self._save_rules(records.add_rule(self.service.rules(), hour, minute, message, icon))

    def edit_rule(self) -> None:
        rid = self._require_selection(self.rules_list)
        if rid is None:
            return
        rule = next((r for r in self.service.rules() if r.id == rid), None)
        if rule is None:
            return
        dlg = RuleEditor(self.service, rule=rule, parent=self)
        if dlg.exec():
            hour, minute, message, icon = dlg.values()
            self._save_rules(records.update_rule(self.service.rules(), rid, hour, minute, message, icon))

    def toggle_rule(self) -> None:
        rid = self._require_selection(self.rules_list)
        if rid is None:
            return
        self._save_rules(records.toggle_rule(self.service.rules(), rid))

    def delete_rule(self) -> None:
        rid = self._require_selection(self.rules_list)
        if rid is None:
            return
        confirm = QMessageBox.question(self, "Delete notification", "Are you sure you want to delete this notification?")
        if confirm == QMessageBox.StandardButton.Yes:
            self._save_rules(records.delete_rule(self.service.rules(), rid))

    def _save_rules(self, rules) -> None:
        if not self.service.replace_rules(rules):
            QMessageBox.warning(self, "Save failed", "Failed to save notifications. Please try again.")
        self._refresh_rules()

    # ---------- task actions ----------
    def add_task(self) -> None:
        try:
            text = validate_task_text(self.new_task.text())
        except ValidationError as e:
            QMessageBox.warning(self, "Invalid task", str(e))
            return
        self._save_tasks(records.add_task(self.service.tasks(), text, now_local()))
        self.new_task.clear()

    def _task_item_changed(self, item: QListWidgetItem) -> None:
        tid = int(item.data(Qt.UserRole))
        # the list is rebuilt after this slot returns, not while Qt still holds the item
        self._save_tasks(records.toggle_task(self.service.tasks(), tid, now_local()), deferred=True)

    def delete_task(self) -> None:
        tid = self._require_selection(self.tasks_list)
        if tid is None:
            return
        confirm = QMessageBox.question(self, "Delete task", "Are you sure you want to delete this task?")
        if confirm == QMessageBox.StandardButton.Yes:
            self._save_tasks(records.delete_task(self.service.tasks(), tid))

    def _save_tasks(self, tasks, deferred: bool = False) -> None:
        if not self.service.replace_tasks(tasks):
            QMessageBox.warning(self, "Save failed", "Failed to save tasks. Please try again.")
        if deferred:
            QTimer.singleShot(0, self._refresh_tasks)
        else:
            self._refresh_tasks()

    def _require_selection(self, lst: QListWidget) -> Optional[int]:
        rid = _selected_id(lst)
        if rid is None:
            QMessageBox.information(self, "No selection", "Select an item first.")
        return rid

    def closeEvent(self, event):
        event.ignore()
        self.hide()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.refresh()


def _selected_id(lst: QListWidget) -> Optional[int]:
    item = lst.currentItem()
    if not item:
        return None
    return int(item.data(Qt.UserRole))
