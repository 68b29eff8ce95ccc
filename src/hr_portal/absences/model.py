from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..core.enums import AbsenceStatus, AbsenceType


@dataclass(frozen=True)
class Absence:
    """Domain entity: one leave/travel request by one employee."""

    absence_id: str
    user_id: str
    company_id: str
    type: AbsenceType
    status: AbsenceStatus
    start_date: date
    end_date: date
    working_days: int
    created_at: int
    updated_at: int
    note: Optional[str] = None
    certificate_url: Optional[str] = None
    destination_country: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[int] = None
    rejected_reason: Optional[str] = None
    rejected_at: Optional[int] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        data["status"] = self.status.value
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat()
        return data


@dataclass(frozen=True)
class NewAbsence:
    """Fields written when an absence is first requested."""

    user_id: str
    company_id: str
    type: AbsenceType
    start_date: date
    end_date: date
    working_days: int
    created_at: int
    note: Optional[str] = None
    certificate_url: Optional[str] = None
    destination_country: Optional[str] = None


@dataclass(frozen=True)
class AbsenceRequestData:
    """What the employee submits from the request form."""

    type: str
    start_date: date
    end_date: date
    note: Optional[str] = None
    destination_country: Optional[str] = None


@dataclass(frozen=True)
class AbsenceWithUser:
    """Read-model for the review screens (absence joined with requester)."""

    absence: Absence
    user_name: str
    user_email: str
    user_avatar: str

    def to_dict(self) -> dict:
        data = self.absence.to_dict()
        data.update(user_name=self.user_name, user_email=self.user_email, user_avatar=self.user_avatar)
        return data
