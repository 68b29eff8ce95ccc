from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AbsenceStatus, AbsenceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Absence, NewAbsence
from .repository import AbsenceRepository

_COLUMNS = """
    absence_id, user_id, company_id, type, status, start_date, end_date, working_days,
    note, certificate_url, destination_country, approved_by, approved_at,
    rejected_reason, rejected_at, created_at, updated_at
"""

_UPDATABLE = frozenset(
    {
        "status",
        "approved_by",
        "approved_at",
        "rejected_reason",
        "rejected_at",
        "updated_at",
    }
)


def _to_absence(r: Dict[str, Any]) -> Absence:
    return Absence(
        absence_id=str(r["absence_id"]),
        user_id=str(r["user_id"]),
        company_id=str(r["company_id"]),
        type=AbsenceType(r["type"]),
        status=AbsenceStatus(r["status"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        working_days=int(r.get("working_days") or 0),
        created_at=int(r["created_at"]),
        updated_at=int(r["updated_at"]),
        note=r.get("note"),
        certificate_url=r.get("certificate_url"),
        destination_country=r.get("destination_country"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejected_reason=r.get("rejected_reason"),
        rejected_at=r.get("rejected_at"),
    )


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, new: NewAbsence) -> str:
        absence_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO absences(
                    absence_id, user_id, company_id, type, status, start_date, end_date,
                    working_days, note, certificate_url, destination_country, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    absence_id,
                    new.user_id,
                    new.company_id,
                    new.type.value,
                    AbsenceStatus.REQUESTED.value,
                    new.start_date,
                    new.end_date,
                    int(new.working_days),
                    new.note,
                    new.certificate_url,
                    new.destination_country,
                    int(new.created_at),
                    int(new.created_at),
                ),
            )
        return absence_id

    def get(self, absence_id: str) -> Optional[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM absences WHERE absence_id=%s", (str(absence_id),))
            row = fetchone(cur)
            return _to_absence(row) if row else None

    def list_for_company(
        self,
        *,
        company_id: str,
        user_id: Optional[str] = None,
        status: Optional[AbsenceStatus] = None,
        descending: bool = False,
    ) -> Sequence[Absence]:
        clauses = ["company_id=%s"]
        params: list[object] = [str(company_id)]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(str(user_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        direction = "DESC" if descending else "ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM absences
                WHERE {where}
                ORDER BY start_date {direction}, created_at {direction}
                """,
                tuple(params),
            )
            return [_to_absence(r) for r in fetchall(cur)]

    def update(self, absence_id: str, fields: dict[str, Any]) -> bool:
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")
        if not fields:
            return False

        names = sorted(fields)
        assignments = ", ".join(f"{name}=%s" for name in names)
        values = [fields[name].value if isinstance(fields[name], Enum) else fields[name] for name in names]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE absences SET {assignments} WHERE absence_id=%s",
                tuple(values + [str(absence_id)]),
            )
            return cur.rowcount > 0
