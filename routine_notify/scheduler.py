from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional
from PySide6.QtCore import QObject, QTimer, Signal

from .models import NotificationRule
from .periods import now_local, fire_time_today, msecs_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderEvent:
    rule_id: int
    message: str
    icon: str


@dataclass
class ArmedTimer:
    fire_at: datetime
    event: ReminderEvent
    timer: QTimer


class Scheduler(QObject):
    """
    One single-shot timer per enabled rule, for today only.

    A rule whose time is already past today is not armed (no rollover to
    tomorrow, no catch-up). It fires again only once the rules are re-armed on
    a later day.
    """

    reminder_due = Signal(object)  # ReminderEvent

    def __init__(self, now: Optional[Callable[[], datetime]] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.now = now or now_local
        self.armed: Dict[int, ArmedTimer] = {}

    def rearm(self, rules: Iterable[NotificationRule]) -> None:
        self.cancel_all()

        nowl = self.now()
        for rule in rules:
            if not rule.enabled:
                continue
            if rule.id in self.armed:
                # one timer per id, or cancel_all could lose track of one
                logger.warning("Duplicate rule id %s; only the first is armed", rule.id)
                continue

            target = fire_time_today(nowl, rule.hour, rule.minute)
            if target <= nowl:
                logger.debug("Rule %s (%s) already passed today; not armed", rule.id, rule.hhmm)
                continue

            self._arm(rule, target, msecs_until(nowl, target))

        logger.info("Armed %d notification timer(s)", len(self.armed))

    def cancel_all(self) -> None:
        for armed in self.armed.values():
            armed.timer.stop()
            armed.timer.deleteLater()
        self.armed.clear()

    def pending(self) -> Dict[int, datetime]:
        return {rid: a.fire_at for rid, a in self.armed.items()}

    def _arm(self, rule: NotificationRule, target: datetime, delay_ms: int) -> None:
        event = ReminderEvent(rule_id=rule.id, message=rule.message, icon=rule.icon)
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda rid=rule.id: self._fire(rid))
        timer.start(delay_ms)
        self.armed[rule.id] = ArmedTimer(fire_at=target, event=event, timer=timer)
        logger.debug("Rule %s armed for %s (in %d ms)", rule.id, target.isoformat(), delay_ms)

    def _fire(self, rule_id: int) -> None:
        armed = self.armed.pop(rule_id, None)
        if armed is None:
            return
        armed.timer.deleteLater()
        self.reminder_due.emit(armed.event)
