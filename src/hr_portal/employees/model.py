from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee profile as far as the absence core needs it.

    Plain data object, no DB access code.
    """

    user_id: str
    company_id: str
    email: str
    display_name: str
    role: Role
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    employee_id: Optional[str] = None
    department_id: Optional[str] = None
    holiday_region: Optional[str] = None
    start_date: Optional[date] = None
    probation_end_date: Optional[date] = None
    vacation_entitlement: Optional[int] = None

    @property
    def name(self) -> str:
        return self.display_name or self.email

    @property
    def avatar(self) -> str:
        return self.display_name[0].upper() if self.display_name else "U"
