from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Read-side repository for the employee directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, *, company_id: str, department_id: Optional[str] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active_by_roles(self, *, company_id: str, roles: Iterable[Role]) -> Sequence[Employee]:
        raise NotImplementedError
