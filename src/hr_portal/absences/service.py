from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import now_millis
from ..common.validators import optional_text
from ..core.constants import CERTIFICATE_PREFIX, DEFAULT_VACATION_ENTITLEMENT
from ..core.enums import AbsenceStatus, AbsenceType
from ..core.exceptions import NotFoundError, StateError, ValidationError
from ..employees.repository import EmployeeRepository
from ..storage.file_storage import FileStorage, UploadedFile, safe_name
from .entitlement import EntitlementSnapshot, compute_entitlement
from .model import Absence, AbsenceRequestData, NewAbsence
from .repository import AbsenceRepository
from .working_days import working_days

logger = logging.getLogger(__name__)


class AbsenceService:
    """Use cases of the requesting employee: request, list, cancel."""

    def __init__(
        self,
        absences: AbsenceRepository,
        employees: EmployeeRepository,
        storage: FileStorage,
        *,
        default_entitlement: int = DEFAULT_VACATION_ENTITLEMENT,
    ):
        self._absences = absences
        self._employees = employees
        self._storage = storage
        self._default_entitlement = default_entitlement

    def get_absence(self, absence_id: str) -> Absence:
        absence = self._absences.get(str(absence_id))
        if not absence:
            raise NotFoundError("Abwesenheit nicht gefunden")
        return absence

    def list_my_absences(self, *, user_id: str, company_id: str) -> Sequence[Absence]:
        return self._absences.list_for_company(company_id=company_id, user_id=user_id, descending=True)

    def get_stats(self, *, user_id: str, company_id: str, today=None) -> EntitlementSnapshot:
        employee = self._employees.get_by_id(user_id)
        allowance = employee.vacation_entitlement if employee else None
        absences = self.list_my_absences(user_id=user_id, company_id=company_id)
        return compute_entitlement(allowance, absences, today=today, default_allowance=self._default_entitlement)

    def request_absence(
        self,
        *,
        user_id: str,
        company_id: str,
        data: AbsenceRequestData,
        file: Optional[UploadedFile] = None,
        current_entitlement: Optional[EntitlementSnapshot] = None,
    ) -> str:
        try:
            absence_type = AbsenceType(data.type)
        except ValueError:
            raise ValidationError("Unbekannte Abwesenheitsart")

        if data.end_date < data.start_date:
            raise ValidationError("Enddatum muss nach dem Startdatum liegen")

        days = working_days(data.start_date, data.end_date)

        if absence_type == AbsenceType.VACATION:
            if current_entitlement is None:
                current_entitlement = self.get_stats(user_id=user_id, company_id=company_id)
            if days > current_entitlement.vacation_remaining:
                raise ValidationError(
                    "Nicht genug Urlaubstage verfügbar. "
                    f"Verfügbar: {current_entitlement.vacation_remaining} Tage, Beantragt: {days} Tage"
                )

        destination = optional_text(data.destination_country)
        if absence_type == AbsenceType.WORK_REMOTE_ABROAD and not destination:
            raise ValidationError("Zielland ist bei Workation Pflicht (für A1-Bescheinigung)")

        # Upload errors propagate before anything is written.
        certificate_url = None
        if file is not None:
            path = f"{CERTIFICATE_PREFIX}/{user_id}/{now_millis()}_{safe_name(file.filename)}"
            certificate_url = self._storage.upload(path, file)

        absence_id = self._absences.create(
            NewAbsence(
                user_id=str(user_id),
                company_id=str(company_id),
                type=absence_type,
                start_date=data.start_date,
                end_date=data.end_date,
                working_days=days,
                created_at=now_millis(),
                note=optional_text(data.note),
                certificate_url=certificate_url,
                destination_country=destination,
            )
        )
        logger.info(
            "absence requested",
            extra={"absence_id": absence_id, "user_id": user_id, "type": absence_type.value, "working_days": days},
        )
        return absence_id

    def cancel_absence(self, *, absence_id: str, current_status: AbsenceStatus) -> None:
        try:
            status = AbsenceStatus(current_status)
        except ValueError:
            raise StateError(f"Unbekannter Status: {current_status}")
        if status != AbsenceStatus.REQUESTED:
            raise StateError("Nur beantragte Abwesenheiten können storniert werden")

        ok = self._absences.update(
            str(absence_id),
            {"status": AbsenceStatus.CANCELLED, "updated_at": now_millis()},
        )
        if not ok:
            raise NotFoundError("Abwesenheit nicht gefunden")
