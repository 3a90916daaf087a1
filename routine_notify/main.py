from __future__ import annotations
import logging
import sys
import signal

from PySide6.QtWidgets import QApplication, QSystemTrayIcon, QMenu
from PySide6.QtGui import QAction
from PySide6.QtCore import QTimer

from .logging_setup import setup_logging
from .notifications import Notifier, APP_TITLE
from .paths import data_dir
from .resources import app_icon
from .scheduler import Scheduler, ReminderEvent
from .service import RoutineService
from .store import RecordStore
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName(APP_TITLE)
    app.setWindowIcon(app_icon())
    app.setQuitOnLastWindowClosed(False)

    # Qt's event loop eats SIGINT unless we pump it. This makes Ctrl-C behave.
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    _sig_timer = QTimer()
    _sig_timer.start(250)
    _sig_timer.timeout.connect(lambda: None)

    base = data_dir()
    setup_logging(base)
    logger.info("Starting %s (data dir: %s)", APP_TITLE, base)

    store = RecordStore(base)
    scheduler = Scheduler()
    service = RoutineService(store, scheduler)

    tray = QSystemTrayIcon()
    tray.setIcon(app_icon())
    tray.setToolTip(APP_TITLE)

    window = MainWindow(service)
    notifier = Notifier(tray, store)
    scheduler.reminder_due.connect(lambda ev: _on_reminder(ev, notifier))

    menu = QMenu()

    act_open = QAction("Open Settings")
    act_open.triggered.connect(lambda: _show_window(window))
    menu.addAction(act_open)

    menu.addSeparator()

    def quit_cleanly():
        # Ensure tray icon disappears immediately; avoids some Qt shutdown warnings.
        scheduler.cancel_all()
        tray.hide()
        window.hide()
        app.quit()

    act_quit = QAction("Exit")
    act_quit.triggered.connect(quit_cleanly)
    menu.addAction(act_quit)

    tray.setContextMenu(menu)
    tray.activated.connect(lambda reason: _tray_click(reason, window))
    tray.messageClicked.connect(lambda: _show_window(window))

    service.start()
    window.refresh()

    tray.show()
    return app.exec()


def _tray_click(reason: QSystemTrayIcon.ActivationReason, window: MainWindow) -> None:
    if reason == QSystemTrayIcon.ActivationReason.DoubleClick:
        _show_window(window)


def _show_window(window: MainWindow) -> None:
    window.refresh()
    window.show()
    window.raise_()
    window.activateWindow()


def _on_reminder(ev: ReminderEvent, notifier: Notifier) -> None:
    logger.info("Notification %s due", ev.rule_id)
    notifier.notify(ev.message, ev.icon)
