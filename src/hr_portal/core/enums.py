from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for permission checks."""

    GLOBAL_ADMIN = "global_admin"
    COMPANY_ADMIN = "company_admin"
    HR_MANAGER = "hr_manager"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"


REVIEWER_ROLES = frozenset({Role.HR_MANAGER, Role.COMPANY_ADMIN, Role.GLOBAL_ADMIN})


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INVITED = "invited"
    DISABLED = "disabled"


class AbsenceType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    SICK_CHILD = "sick_child"
    WORK_REMOTE_ABROAD = "work_remote_abroad"
    BUSINESS_TRIP = "business_trip"


class AbsenceStatus(str, Enum):
    """Lifecycle of an absence: requested -> approved | rejected | cancelled."""

    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class MilestoneType(str, Enum):
    HALFWAY = "halfway"
    THIRTY_DAYS = "30_days"

    @property
    def notification_type(self) -> str:
        return f"probation_{self.value}"
