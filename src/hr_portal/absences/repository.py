from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import AbsenceStatus
from .model import Absence, NewAbsence


class AbsenceRepository(Protocol):
    def create(self, new: NewAbsence) -> str:
        """Persist a new `requested` absence and return its id."""

        raise NotImplementedError

    def get(self, absence_id: str) -> Optional[Absence]:
        raise NotImplementedError

    def list_for_company(
        self,
        *,
        company_id: str,
        user_id: Optional[str] = None,
        status: Optional[AbsenceStatus] = None,
        descending: bool = False,
    ) -> Sequence[Absence]:
        """Query by (company, user?, status?), ordered by start_date."""

        raise NotImplementedError

    def update(self, absence_id: str, fields: dict[str, Any]) -> bool:
        """Plain field update, no status guard. Returns False if the id is unknown."""

        raise NotImplementedError
