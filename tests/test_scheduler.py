from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from PySide6.QtCore import QTimer

from routine_notify.models import NotificationRule
from routine_notify.scheduler import ReminderEvent, Scheduler
from conftest import dt_local


NOW = dt_local(2026, 2, 18, 8, 0)


def _rule(id, hour, minute, enabled=True, message=None, icon=""):
    return NotificationRule(id=id, hour=hour, minute=minute, message=message or f"r{id}", icon=icon, enabled=enabled)


def _scheduler(now=NOW):
    return Scheduler(now=lambda: now)


def test_future_rule_arms_one_timer_at_that_instant(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 9, 0, message="Morning routine")])

    assert s.pending() == {1: dt_local(2026, 2, 18, 9, 0, 0)}
    armed = s.armed[1]
    assert armed.timer.isSingleShot()
    assert armed.timer.isActive()
    assert armed.timer.interval() == 3_600_000
    assert armed.event == ReminderEvent(rule_id=1, message="Morning routine", icon="")


def test_rule_at_or_before_now_is_not_armed(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 8, 0), _rule(2, 7, 59), _rule(3, 0, 0)])
    assert s.pending() == {}


def test_one_minute_ahead_is_armed(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 8, 1)])
    assert s.armed[1].timer.interval() == 60_000


def test_disabled_rules_are_not_armed(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 9, 0, enabled=False), _rule(2, 10, 0)])
    assert list(s.pending()) == [2]


def test_no_rollover_to_tomorrow(qapp):
    s = _scheduler(dt_local(2026, 2, 18, 23, 30))
    s.rearm([_rule(1, 9, 0)])
    assert s.pending() == {}


def test_rearm_replaces_previous_timers(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 9, 0), _rule(2, 10, 0)])
    old_timers = [a.timer for a in s.armed.values()]

    s.rearm([_rule(2, 11, 0), _rule(3, 12, 0)])

    assert s.pending() == {2: dt_local(2026, 2, 18, 11, 0), 3: dt_local(2026, 2, 18, 12, 0)}
    assert not any(t.isActive() for t in old_timers)


def test_rearm_with_no_rules_cancels_everything(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 9, 0)])
    timer = s.armed[1].timer
    s.rearm([])
    assert s.pending() == {}
    assert not timer.isActive()


def test_fire_emits_event_captured_at_arm_time(qapp):
    s = _scheduler()
    fired = []
    s.reminder_due.connect(fired.append)

    s.rearm([_rule(1, 9, 0, message="Stretch", icon="custom_a.png")])
    s._fire(1)

    assert fired == [ReminderEvent(rule_id=1, message="Stretch", icon="custom_a.png")]
    assert s.pending() == {}

    # already fired: nothing left to fire
    s._fire(1)
    assert len(fired) == 1


def test_dst_day_timer_fires_at_wall_clock_time(qapp):
    ny = ZoneInfo("America/New_York")
    s = _scheduler(datetime(2026, 3, 8, 1, 0, tzinfo=ny))
    s.rearm([_rule(1, 9, 0)])

    assert s.pending()[1].astimezone(timezone.utc) == datetime(2026, 3, 8, 13, 0, tzinfo=timezone.utc)
    # 7 real hours, not the 8 on the wall clock
    assert s.armed[1].timer.interval() == 7 * 3_600_000


def test_duplicate_ids_arm_one_timer_and_all_are_cancelled(qapp):
    s = _scheduler()
    s.rearm([_rule(1, 9, 0, message="first"), _rule(1, 10, 0, message="second")])

    assert s.pending() == {1: dt_local(2026, 2, 18, 9, 0)}
    assert s.armed[1].event.message == "first"
    timers = [c for c in s.children() if isinstance(c, QTimer) and c.isActive()]
    assert len(timers) == 1

    s.rearm([])
    assert not any(t.isActive() for t in timers)
