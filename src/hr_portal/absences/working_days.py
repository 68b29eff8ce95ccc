from __future__ import annotations

from datetime import date, timedelta

from ..common.datetime_utils import as_date

_SATURDAY = 5


def is_weekend(day: date) -> bool:
    return day.weekday() >= _SATURDAY


def working_days(start_date: date | str, end_date: date | str) -> int:
    """Count Mon-Fri days between start_date and end_date, both inclusive.

    Public holidays are not excluded. Caller guarantees start_date <= end_date.
    """
    current = as_date(start_date)
    end = as_date(end_date)

    count = 0
    while current <= end:
        if not is_weekend(current):
            count += 1
        current += timedelta(days=1)
    return count
