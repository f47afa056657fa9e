"""Calendar-date helpers shared by the schedule and streak services.

Every date here is a local calendar day. Entry keys use the canonical
``YYYY-MM-DD`` form and weeks run Monday through Sunday.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

DATE_FORMAT = "%Y-%m-%d"
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def to_date_string(value: date) -> str:
    """Return the ``YYYY-MM-DD`` key for a calendar date."""

    return value.strftime(DATE_FORMAT)


def parse_date_string(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string; raises ``ValueError`` when malformed."""

    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def coerce_date(value: date | str) -> date:
    """Accept either a ``date`` or its string form."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_string(value)


def weekday_index(value: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""

    return (value.weekday() + 1) % 7


def week_bounds(value: date) -> tuple[date, date]:
    """Return (monday, sunday) of the week containing ``value``."""

    start = value - timedelta(days=value.weekday())
    return start, start + timedelta(days=6)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each date from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def month_bounds(value: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``value``."""

    first = value.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


__all__ = [
    "DATE_FORMAT",
    "DAY_NAMES",
    "coerce_date",
    "iter_days",
    "month_bounds",
    "parse_date_string",
    "to_date_string",
    "week_bounds",
    "weekday_index",
]
