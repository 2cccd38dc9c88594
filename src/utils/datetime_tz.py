from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

# Reference timezone for farm users (reminders are meant to arrive around 06:00 here)
DEFAULT_TIMEZONE_NAME = "Asia/Bangkok"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, assuming DEFAULT_TZ for naive values."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=DEFAULT_TZ)
    return dt.astimezone(timezone.utc)


def utc_today(now: datetime | None = None) -> date:
    """Calendar date of ``now`` (default: current time) in UTC."""
    return to_utc(now).date() if now is not None else utc_now().date()

