from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.constants import DEFAULT_VACATION_ENTITLEMENT
from ..core.enums import AbsenceStatus, AbsenceType
from .model import Absence

_SICK_STATUSES = (AbsenceStatus.APPROVED, AbsenceStatus.REQUESTED)


@dataclass(frozen=True)
class EntitlementSnapshot:
    """Vacation balance and sick-day totals for one user and one calendar year.

    Derived only, never stored.
    """

    vacation_total: int
    vacation_taken: int
    vacation_planned: int
    vacation_remaining: int
    sick_days_self: int
    sick_days_child: int

    def to_dict(self) -> dict:
        return asdict(self)


def _sum_days(absences: Iterable[Absence], type_: AbsenceType, statuses: tuple[AbsenceStatus, ...]) -> int:
    return sum(a.working_days or 0 for a in absences if a.type == type_ and a.status in statuses)


def compute_entitlement(
    annual_allowance: Optional[int],
    absences: Iterable[Absence],
    *,
    today: Optional[date] = None,
    default_allowance: int = DEFAULT_VACATION_ENTITLEMENT,
) -> EntitlementSnapshot:
    """Aggregate one user's absences for the year of `today` (default: local today).

    An absence counts towards the year its start_date falls in. A missing or zero
    allowance falls back to the default entitlement.
    """
    year = (today or date.today()).year
    current = [a for a in absences if a.start_date.year == year]

    total = annual_allowance or default_allowance
    taken = _sum_days(current, AbsenceType.VACATION, (AbsenceStatus.APPROVED,))
    planned = _sum_days(current, AbsenceType.VACATION, (AbsenceStatus.REQUESTED,))

    return EntitlementSnapshot(
        vacation_total=total,
        vacation_taken=taken,
        vacation_planned=planned,
        vacation_remaining=total - taken - planned,
        sick_days_self=_sum_days(current, AbsenceType.SICK, _SICK_STATUSES),
        sick_days_child=_sum_days(current, AbsenceType.SICK_CHILD, _SICK_STATUSES),
    )
