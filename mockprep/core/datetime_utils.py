from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo


def now_utc_naive() -> datetime:
    """Return current UTC time as naive datetime for DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime, tz: ZoneInfo) -> datetime:
    """Normalize a datetime to UTC and strip tzinfo; naive input is read as ``tz`` local time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_calendar_day(value: date | datetime, tz: ZoneInfo) -> date:
    """Return the calendar day ``value`` falls on in ``tz``.

    Aware datetimes are converted into ``tz`` first; naive datetimes are taken
    as already being ``tz`` local time; plain dates are returned unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


@dataclass(frozen=True)
class DayWindow:
    day: date
    start_at: datetime
    end_at: datetime

    def contains(self, value: datetime) -> bool:
        return self.start_at <= value <= self.end_at


def day_window(value: date | datetime, tz: ZoneInfo) -> DayWindow:
    """Inclusive bounds of the local calendar day as naive UTC datetimes.

    ``end_at`` is the last representable instant before the next local midnight,
    so DST days are 23 or 25 hours long.
    """
    day = local_calendar_day(value, tz)
    start_local = datetime.combine(day, time.min, tzinfo=tz)
    next_local = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    start_at = start_local.astimezone(timezone.utc).replace(tzinfo=None)
    end_at = next_local.astimezone(timezone.utc).replace(tzinfo=None) - timedelta(microseconds=1)
    return DayWindow(day=day, start_at=start_at, end_at=end_at)
