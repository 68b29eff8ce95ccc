from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

import holidays

from ..absences.model import Absence
from ..absences.repository import AbsenceRepository
from ..absences.working_days import is_weekend
from ..core.enums import AbsenceStatus, AbsenceType
from ..employees.repository import EmployeeRepository

logger = logging.getLogger(__name__)

HOLIDAY_COUNTRY = "DE"
_SICK_TYPES = (AbsenceType.SICK, AbsenceType.SICK_CHILD)
_HIDDEN_STATUSES = (AbsenceStatus.REJECTED, AbsenceStatus.CANCELLED)


@dataclass(frozen=True)
class DayInfo:
    day: int
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None


@dataclass(frozen=True)
class CalendarUser:
    user_id: str
    display_name: str
    email: str
    avatar: str
    department_id: Optional[str]
    absences: list[Absence] = field(default_factory=list)


@dataclass(frozen=True)
class TeamCalendar:
    year: int
    month: int
    days: list[DayInfo]
    users: list[CalendarUser]

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "days": [d.__dict__ for d in self.days],
            "users": [
                {
                    "user_id": u.user_id,
                    "display_name": u.display_name,
                    "email": u.email,
                    "avatar": u.avatar,
                    "department_id": u.department_id,
                    "absences": [a.to_dict() for a in u.absences],
                }
                for u in self.users
            ],
        }


def parse_holiday_region(holiday_region: Optional[str]) -> Optional[str]:
    """'de-by' -> 'BY'; anything not shaped like '<country>-<state>' -> None."""
    if not holiday_region:
        return None
    parts = holiday_region.split("-")
    if len(parts) != 2:
        return None
    return parts[1].upper()


def public_holidays(year: int, month: int, state_code: Optional[str] = None) -> dict[int, str]:
    """Public holidays of one month as {day_of_month: name}."""
    try:
        calendar_ = holidays.country_holidays(HOLIDAY_COUNTRY, subdiv=state_code, years=year)
    except NotImplementedError:
        logger.warning("unknown holiday region, using nationwide holidays", extra={"state_code": state_code})
        calendar_ = holidays.country_holidays(HOLIDAY_COUNTRY, years=year)

    return {d.day: name for d, name in sorted(calendar_.items()) if d.year == year and d.month == month}


def is_visible(absence: Absence) -> bool:
    """Approved absences, plus sick notes that are still pending."""
    if absence.status in _HIDDEN_STATUSES:
        return False
    return absence.status == AbsenceStatus.APPROVED or absence.type in _SICK_TYPES


def absence_on(user: CalendarUser, day: date) -> Optional[Absence]:
    for absence in user.absences:
        if absence.start_date <= day <= absence.end_date:
            return absence
    return None


class TeamCalendarService:
    def __init__(self, absences: AbsenceRepository, employees: EmployeeRepository):
        self._absences = absences
        self._employees = employees

    def month_view(
        self,
        *,
        company_id: str,
        year: int,
        month: int,
        department_id: Optional[str] = None,
        holiday_region: Optional[str] = None,
    ) -> TeamCalendar:
        total_days = calendar.monthrange(year, month)[1]
        month_start = date(year, month, 1)
        month_end = date(year, month, total_days)

        holiday_names = public_holidays(year, month, parse_holiday_region(holiday_region))
        days = [
            DayInfo(
                day=d,
                is_weekend=is_weekend(date(year, month, d)),
                is_holiday=d in holiday_names,
                holiday_name=holiday_names.get(d),
            )
            for d in range(1, total_days + 1)
        ]

        employees = self._employees.list_active(company_id=company_id, department_id=department_id)
        relevant: Sequence[Absence] = [
            a
            for a in self._absences.list_for_company(company_id=company_id)
            if is_visible(a) and a.start_date <= month_end and a.end_date >= month_start
        ]

        users = [
            CalendarUser(
                user_id=e.user_id,
                display_name=e.name,
                email=e.email,
                avatar=e.avatar,
                department_id=e.department_id,
                absences=[a for a in relevant if a.user_id == e.user_id],
            )
            for e in employees
        ]
        return TeamCalendar(year=year, month=month, days=days, users=users)
