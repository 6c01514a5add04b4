from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday week containing `day`."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def hours_between(start: time, end: time) -> float:
    """Hours from `start` to `end` on the same day; negative spans count as zero."""
    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    return max(delta.total_seconds(), 0) / 3600


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1
