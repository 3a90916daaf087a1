import os
import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

import routine_notify.periods as periods
from conftest import TZ, dt_local


def test_fire_time_today_same_date_and_tz():
    now = dt_local(2026, 2, 18, 8, 30, 15)
    target = periods.fire_time_today(now, 9, 0)
    assert target == dt_local(2026, 2, 18, 9, 0, 0)
    assert target.tzinfo is TZ


def test_fire_time_today_rejects_naive():
    with pytest.raises(ValueError):
        periods.fire_time_today(datetime(2026, 2, 18, 8, 0), 9, 0)


def test_msecs_until():
    now = dt_local(2026, 2, 18, 8, 0)
    assert periods.msecs_until(now, dt_local(2026, 2, 18, 9, 0)) == 3_600_000
    assert periods.msecs_until(now, dt_local(2026, 2, 18, 8, 0, 1)) == 1_000


def test_now_local_uses_local_tz(monkeypatch):
    monkeypatch.setattr(periods, "local_tz", lambda: TZ)
    assert periods.now_local().tzinfo is TZ


def test_iso_timestamp_is_utc_with_z_suffix():
    assert periods.iso_timestamp(dt_local(2026, 2, 18, 9, 0)) == "2026-02-18T08:00:00.000Z"
    assert periods.iso_timestamp(datetime(2026, 2, 18, 8, 0, tzinfo=timezone.utc)) == "2026-02-18T08:00:00.000Z"


NEW_YORK = ZoneInfo("America/New_York")


def test_fire_time_across_dst_start_keeps_wall_clock():
    # 2026-03-08: clocks jump 02:00 EST -> 03:00 EDT
    now = datetime(2026, 3, 8, 1, 0, tzinfo=NEW_YORK)
    target = periods.fire_time_today(now, 9, 0)

    assert target.astimezone(timezone.utc) == datetime(2026, 3, 8, 13, 0, tzinfo=timezone.utc)
    assert periods.msecs_until(now, target) == 7 * 3_600_000


def test_fire_time_across_dst_end_keeps_wall_clock():
    # 2026-11-01: clocks fall back 02:00 EDT -> 01:00 EST
    now = datetime(2026, 11, 1, 0, 30, tzinfo=NEW_YORK)
    target = periods.fire_time_today(now, 9, 0)

    assert target.astimezone(timezone.utc) == datetime(2026, 11, 1, 14, 0, tzinfo=timezone.utc)
    assert periods.msecs_until(now, target) == int(9.5 * 3_600_000)


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
def test_fixed_offset_now_resolves_target_in_system_zone():
    old = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    try:
        # what now_local() produces: a fixed EST offset
        now = datetime(2026, 3, 8, 1, 0).astimezone()
        target = periods.fire_time_today(now, 9, 0)
        assert target.astimezone(timezone.utc) == datetime(2026, 3, 8, 13, 0, tzinfo=timezone.utc)
    finally:
        if old is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = old
        time.tzset()


def test_parse_iso():
    assert periods.parse_iso("2026-02-18T08:00:00.000Z") == datetime(2026, 2, 18, 8, 0, tzinfo=timezone.utc)
    assert periods.parse_iso("2026-02-18T08:00:00") == datetime(2026, 2, 18, 8, 0, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        periods.parse_iso("yesterday")
