from __future__ import annotations

import calendar
from datetime import date, datetime, time

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_calendar_date(value: str) -> date:
    """Parse a YYYY-MM-DD string or an ISO date-time, dropping the time of day."""
    value = value.strip()
    try:
        return parse_iso_date(value)
    except ValueError:
        if value[10:11] != "T":
            raise
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_datetime(value: date) -> datetime:
    """Promote a calendar date to its midnight; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def day_key(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_label(value: date) -> str:
    """Human readable month, e.g. "February 2026"."""
    return f"{MONTH_NAMES[value.month - 1]} {value.year}"


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """Inclusive bounds of a calendar month: first day 00:00 to last day 23:59:59.999."""
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1),
        datetime.combine(date(year, month, last_day), END_OF_DAY),
    )


def day_window(start: date, end: date) -> tuple[datetime, datetime]:
    """Inclusive bounds from start 00:00 through end 23:59:59.999."""
    return as_datetime(start), datetime.combine(end, END_OF_DAY)


def in_window(value: date, window: tuple[datetime, datetime]) -> bool:
    start, end = window
    return start <= as_datetime(value) <= end
