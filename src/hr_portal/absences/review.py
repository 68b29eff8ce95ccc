from __future__ import annotations

import logging
from typing import Sequence

from ..common.datetime_utils import now_millis
from ..core.constants import ABSENCES_LINK
from ..core.enums import AbsenceStatus, NotificationType
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .labels import approved_message, rejected_message
from .model import Absence, AbsenceWithUser
from .repository import AbsenceRepository

logger = logging.getLogger(__name__)


class AbsenceReviewService:
    """Reviewer side of the absence lifecycle.

    approve/reject trust the record handed in by the caller (the last one it
    read) and do not re-check its status before writing. Guarding against two
    reviewers deciding the same request is left to the caller.
    """

    def __init__(
        self,
        absences: AbsenceRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
    ):
        self._absences = absences
        self._employees = employees
        self._notifications = notifications

    def _with_user(self, absence: Absence) -> AbsenceWithUser:
        try:
            employee = self._employees.get_by_id(absence.user_id)
        except Exception:
            logger.exception("requester lookup failed", extra={"user_id": absence.user_id})
            employee = None

        if not employee:
            return AbsenceWithUser(
                absence=absence,
                user_name="Unknown User",
                user_email=absence.user_id,
                user_avatar="U",
            )
        return AbsenceWithUser(
            absence=absence,
            user_name=employee.name,
            user_email=employee.email,
            user_avatar=employee.avatar,
        )

    def list_pending(self, *, company_id: str) -> Sequence[AbsenceWithUser]:
        rows = self._absences.list_for_company(company_id=company_id, status=AbsenceStatus.REQUESTED)
        return [self._with_user(a) for a in rows]

    def list_all(self, *, company_id: str) -> Sequence[AbsenceWithUser]:
        rows = self._absences.list_for_company(company_id=company_id, descending=True)
        return [self._with_user(a) for a in rows]

    def approve_absence(self, *, absence_id: str, reviewer_id: str, record: Absence) -> None:
        now = now_millis()
        ok = self._absences.update(
            str(absence_id),
            {
                "status": AbsenceStatus.APPROVED,
                "approved_by": str(reviewer_id),
                "approved_at": now,
                "updated_at": now,
            },
        )
        if not ok:
            raise NotFoundError("Abwesenheit nicht gefunden")

        logger.info("absence approved", extra={"absence_id": absence_id, "reviewer_id": reviewer_id})
        self._notifications.notify(
            user_id=record.user_id,
            title="Antrag genehmigt",
            message=approved_message(record.type, record.start_date),
            type=NotificationType.SUCCESS,
            link=ABSENCES_LINK,
        )

    def reject_absence(self, *, absence_id: str, reviewer_id: str, record: Absence, reason: str) -> None:
        now = now_millis()
        ok = self._absences.update(
            str(absence_id),
            {
                "status": AbsenceStatus.REJECTED,
                "approved_by": str(reviewer_id),
                "rejected_reason": reason,
                "rejected_at": now,
                "updated_at": now,
            },
        )
        if not ok:
            raise NotFoundError("Abwesenheit nicht gefunden")

        logger.info("absence rejected", extra={"absence_id": absence_id, "reviewer_id": reviewer_id})
        self._notifications.notify(
            user_id=record.user_id,
            title="Antrag abgelehnt",
            message=rejected_message(record.type, record.start_date, reason),
            type=NotificationType.ERROR,
            link=ABSENCES_LINK,
        )
