from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_millis() -> int:
    """Epoch milliseconds, the timestamp unit stored on records."""
    return int(now_local().timestamp() * 1000)


def days_until(target: date, today: date) -> int:
    """Days from today to target (negative if target is in the past)."""
    return (target - today).days


def add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def format_de(value: date) -> str:
    """German short date, e.g. 03.06.2024."""
    return value.strftime("%d.%m.%Y")
