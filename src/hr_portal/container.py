from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .absences.mysql_absence_repository import MySQLAbsenceRepository
from .absences.repository import AbsenceRepository
from .absences.review import AbsenceReviewService
from .absences.service import AbsenceService
from .core.constants import DEFAULT_VACATION_ENTITLEMENT
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .probation.scanner import ProbationScanner
from .storage.file_storage import LocalFileStorage
from .team_calendar.service import TeamCalendarService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    absences_repo: AbsenceRepository
    notifications_repo: NotificationRepository
    storage: LocalFileStorage

    notification_service: NotificationService
    absence_service: AbsenceService
    review_service: AbsenceReviewService
    calendar_service: TeamCalendarService
    probation_scanner: ProbationScanner


def wire(
    *,
    employees_repo: EmployeeRepository,
    absences_repo: AbsenceRepository,
    notifications_repo: NotificationRepository,
    storage: LocalFileStorage,
    conn: Optional[DatabaseConnection] = None,
    default_entitlement: int = DEFAULT_VACATION_ENTITLEMENT,
) -> Container:
    """Build the services on top of already constructed repositories."""
    notification_service = NotificationService(notifications_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        absences_repo=absences_repo,
        notifications_repo=notifications_repo,
        storage=storage,
        notification_service=notification_service,
        absence_service=AbsenceService(
            absences_repo,
            employees_repo,
            storage,
            default_entitlement=default_entitlement,
        ),
        review_service=AbsenceReviewService(absences_repo, employees_repo, notification_service),
        calendar_service=TeamCalendarService(absences_repo, employees_repo),
        probation_scanner=ProbationScanner(employees_repo, notifications_repo),
    )


def build_container(
    *,
    db_config: dict,
    upload_dir: str,
    upload_base_url: str = "/uploads",
    default_entitlement: int = DEFAULT_VACATION_ENTITLEMENT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        absences_repo=MySQLAbsenceRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        storage=LocalFileStorage(upload_dir, base_url=upload_base_url),
        default_entitlement=default_entitlement,
    )
