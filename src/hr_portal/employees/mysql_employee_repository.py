from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    user_id, company_id, email, display_name, role, status, employee_id,
    department_id, holiday_region, start_date, probation_end_date, vacation_entitlement
"""


def _to_employee(r: Dict[str, Any]) -> Employee:
    entitlement = r.get("vacation_entitlement")
    return Employee(
        user_id=str(r["user_id"]),
        company_id=str(r["company_id"]),
        email=r["email"],
        display_name=r.get("display_name") or "",
        role=Role(r["role"]),
        status=EmployeeStatus(r["status"]),
        employee_id=r.get("employee_id"),
        department_id=r.get("department_id"),
        holiday_region=r.get("holiday_region"),
        start_date=r.get("start_date"),
        probation_end_date=r.get("probation_end_date"),
        vacation_entitlement=int(entitlement) if entitlement is not None else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self, *, company_id: str, department_id: Optional[str] = None) -> Sequence[Employee]:
        clauses = ["company_id=%s", "status=%s"]
        params: list[object] = [str(company_id), EmployeeStatus.ACTIVE.value]
        if department_id is not None:
            clauses.append("department_id=%s")
            params.append(str(department_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {" AND ".join(clauses)}
                ORDER BY display_name
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active_by_roles(self, *, company_id: str, roles: Iterable[Role]) -> Sequence[Employee]:
        role_values = [Role(r).value for r in roles]
        if not role_values:
            return []
        placeholders = ",".join(["%s"] * len(role_values))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE company_id=%s AND status=%s AND role IN ({placeholders})
                ORDER BY user_id
                """,
                tuple([str(company_id), EmployeeStatus.ACTIVE.value] + role_values),
            )
            return [_to_employee(r) for r in fetchall(cur)]
