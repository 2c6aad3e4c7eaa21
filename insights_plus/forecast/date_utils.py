from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional

SECONDS_PER_DAY = 86400.0

MONTH_ABBREVIATIONS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def resolve_now(now: Optional[datetime] = None) -> datetime:
    return now if now is not None else datetime.now()


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    # Last millisecond of the day, inclusive bound for "today".
    return dt.replace(hour=23, minute=59, second=59, microsecond=999000)


def days_between(start: datetime, end: datetime) -> float:
    """Signed fractional number of days from ``start`` to ``end``."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def add_days(dt: datetime, days: float) -> datetime:
    return dt + timedelta(days=days)


def js_round(value: float) -> int:
    """Round half up (``2.5 -> 3``, ``-2.5 -> -2``)."""
    return int(math.floor(value + 0.5))


def to_timestamp_ms(dt: datetime) -> float:
    return dt.timestamp() * 1000.0


def from_timestamp_ms(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000.0)


def month_from_abbreviation(name: str) -> Optional[int]:
    """``"Jan"`` -> 1; ``None`` for anything that is not an English month."""
    return MONTH_ABBREVIATIONS.get(name.lower())


def calendar_date(year: int, month: int, day: int) -> Optional[datetime]:
    """Midnight of the given date, rolling over out-of-range months and days.

    ``calendar_date(2026, 2, 30)`` is March 2nd and ``calendar_date(2026, 1, 0)``
    is December 31st of the previous year. Returns ``None`` when the result
    falls outside the years ``datetime`` can represent.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return datetime(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None
