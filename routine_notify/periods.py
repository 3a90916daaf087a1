from __future__ import annotations
from datetime import datetime, time, timezone, tzinfo


def local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo  # type: ignore


def now_local() -> datetime:
    return datetime.now(local_tz())


def fire_time_today(dt_local: datetime, hour: int, minute: int) -> datetime:
    """
    Today at hour:minute:00 local wall-clock time.

    The offset is resolved for the target time itself, so a DST change between
    dt_local and the target does not shift it. A fixed-offset tzinfo (what
    astimezone() gives) cannot know about DST, so that case goes through the
    system zone instead.
    """
    if dt_local.tzinfo is None:
        raise ValueError("dt_local must be timezone-aware")
    wall = datetime.combine(dt_local.date(), time(hour, minute, 0))
    if isinstance(dt_local.tzinfo, timezone):
        return wall.astimezone()
    return wall.replace(tzinfo=dt_local.tzinfo)


def msecs_until(now: datetime, target: datetime) -> int:
    # Same-tzinfo subtraction ignores offsets; compare as UTC.
    delta = target.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    return int(delta.total_seconds() * 1000)


def parse_iso(s: str) -> datetime:
    """ISO-8601 timestamp as written in todos.json ("Z" allowed); naive = UTC."""
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def iso_timestamp(dt: datetime) -> str:
    # UTC with millisecond precision and a Z suffix, like the files already on disk
    if dt.tzinfo is None:
        raise ValueError("dt must be timezone-aware")
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
