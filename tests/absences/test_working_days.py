from __future__ import annotations

from datetime import date

from hr_portal.absences.working_days import is_weekend, working_days


def test_full_work_week_counts_five_days():
    # 2024-06-03 is a Monday
    assert working_days(date(2024, 6, 3), date(2024, 6, 7)) == 5


def test_weekend_only_range_counts_zero():
    assert working_days(date(2024, 6, 8), date(2024, 6, 9)) == 0


def test_single_weekday_counts_one():
    assert working_days(date(2024, 6, 5), date(2024, 6, 5)) == 1


def test_range_spanning_two_weekends():
    assert working_days(date(2024, 6, 1), date(2024, 6, 16)) == 10


def test_public_holidays_are_still_counted():
    # 2024-05-01 (Labour Day) is a Wednesday
    assert working_days(date(2024, 4, 29), date(2024, 5, 3)) == 5


def test_accepts_iso_strings():
    assert working_days("2024-06-03", "2024-06-10") == 6


def test_is_weekend():
    assert is_weekend(date(2024, 6, 8))
    assert is_weekend(date(2024, 6, 9))
    assert not is_weekend(date(2024, 6, 10))


def test_monday_to_sunday_counts_five():
    assert working_days("2024-01-01", "2024-01-07") == 5


def test_saturday_alone_counts_zero():
    assert working_days("2024-01-06", "2024-01-06") == 0
