from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import add_months, days_until


def halfway_date(start_date: date, end_date: date) -> date:
    """Midpoint of the probation period, rounded down to a whole day."""
    return start_date + timedelta(days=(end_date - start_date).days // 2)


def calculate_probation_end(start_date: date, months: int) -> Optional[date]:
    if not start_date or months == 0:
        return None
    return add_months(start_date, months)


def is_in_probation(probation_end_date: Optional[date], today: date) -> bool:
    if not probation_end_date:
        return False
    return days_until(probation_end_date, today) > 0
