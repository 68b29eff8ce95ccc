from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import days_until, format_de, now_millis
from ..core.constants import PROBATION_REMINDER_DAYS_BEFORE_END
from ..core.enums import REVIEWER_ROLES, MilestoneType
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..notifications.model import NewNotification
from ..notifications.repository import NotificationRepository
from .dates import halfway_date

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    checked: int = 0
    sent: list[tuple[str, MilestoneType]] = field(default_factory=list)
    skipped_existing: list[tuple[str, MilestoneType]] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def due_milestones(employee: Employee, today: date) -> list[MilestoneType]:
    """Milestones that fall exactly on `today` for this employee."""
    if not employee.start_date or not employee.probation_end_date:
        return []

    remaining = days_until(employee.probation_end_date, today)
    if remaining <= 0:
        return []

    due = []
    if halfway_date(employee.start_date, employee.probation_end_date) == today:
        due.append(MilestoneType.HALFWAY)
    if remaining == PROBATION_REMINDER_DAYS_BEFORE_END:
        due.append(MilestoneType.THIRTY_DAYS)
    return due


def _texts(employee: Employee, milestone: MilestoneType) -> tuple[str, str]:
    end = format_de(employee.probation_end_date)
    if milestone == MilestoneType.HALFWAY:
        return (
            f"{employee.name} erreicht heute die Hälfte der Probezeit",
            f"Die Probezeit von {employee.name} endet am {end}. Bitte bereiten Sie das Zwischengespräch vor.",
        )
    return (
        f"Probezeit von {employee.name} endet in {PROBATION_REMINDER_DAYS_BEFORE_END} Tagen",
        f"Die Probezeit endet am {end}. Bitte planen Sie das Abschlussgespräch und die Dokumentation.",
    )


class ProbationScanner:
    """Checks active employees for probation milestones and notifies HR.

    At most one reminder per (employee, milestone) is intended. The guard is a
    lookup before the write, so two scans running at the same time can both send.
    """

    def __init__(self, employees: EmployeeRepository, notifications: NotificationRepository):
        self._employees = employees
        self._notifications = notifications

    def scan(self, company_id: str, *, today: Optional[date] = None) -> ScanResult:
        today = today or date.today()
        result = ScanResult()

        for employee in self._employees.list_active(company_id=company_id):
            result.checked += 1
            try:
                for milestone in due_milestones(employee, today):
                    if self._send(employee, milestone):
                        result.sent.append((employee.user_id, milestone))
                    else:
                        result.skipped_existing.append((employee.user_id, milestone))
            except Exception:
                logger.exception("probation check failed", extra={"user_id": employee.user_id})
                result.failed.append(employee.user_id)

        return result

    def _send(self, employee: Employee, milestone: MilestoneType) -> bool:
        notification_type = milestone.notification_type
        if self._notifications.exists(
            user_id=employee.user_id,
            type=notification_type,
            company_id=employee.company_id,
        ):
            logger.info(
                "probation reminder already sent",
                extra={"user_id": employee.user_id, "milestone": milestone.value},
            )
            return False

        title, message = _texts(employee, milestone)
        recipients = self._employees.list_active_by_roles(company_id=employee.company_id, roles=REVIEWER_ROLES)

        # One write per recipient; a failure midway leaves the earlier ones in place.
        for recipient in recipients:
            self._notifications.create(
                NewNotification(
                    user_id=employee.user_id,
                    recipient_id=recipient.user_id,
                    company_id=employee.company_id,
                    type=notification_type,
                    title=title,
                    message=message,
                    read=False,
                    created_at=now_millis(),
                    metadata={
                        "probation_end_date": employee.probation_end_date.isoformat(),
                        "employee_name": employee.name,
                        "employee_id": employee.employee_id,
                        "department_id": employee.department_id,
                    },
                )
            )

        logger.info(
            "probation reminder sent",
            extra={"user_id": employee.user_id, "milestone": milestone.value, "recipients": len(recipients)},
        )
        return True
