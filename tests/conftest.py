from __future__ import annotations

import dataclasses
from datetime import date
from pathlib import Path

import pytest

from hr_portal.absences.model import Absence
from hr_portal.core.enums import AbsenceStatus, AbsenceType, EmployeeStatus, Role
from hr_portal.employees.model import Employee
from hr_portal.storage.file_storage import UploadedFile


class FakeEmployeesRepo:
    def __init__(self, employees=()):
        self._employees = {e.user_id: e for e in employees}
        self.fail_for: set[str] = set()

    def add(self, employee: Employee) -> None:
        self._employees[employee.user_id] = employee

    def get_by_id(self, user_id):
        if user_id in self.fail_for:
            raise RuntimeError("directory unavailable")
        return self._employees.get(str(user_id))

    def list_active(self, *, company_id, department_id=None):
        return [
            e
            for e in self._employees.values()
            if e.company_id == company_id
            and e.status == EmployeeStatus.ACTIVE
            and (department_id is None or e.department_id == department_id)
        ]

    def list_active_by_roles(self, *, company_id, roles):
        roles = set(roles)
        return [e for e in self.list_active(company_id=company_id) if e.role in roles]


class FakeAbsencesRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[str, Absence] = {}
        self.updates: list[tuple[str, dict]] = []

    def add(self, absence: Absence) -> Absence:
        self._rows[absence.absence_id] = absence
        return absence

    def create(self, new):
        absence_id = f"a{self._next_id}"
        self._next_id += 1
        self._rows[absence_id] = Absence(
            absence_id=absence_id,
            user_id=new.user_id,
            company_id=new.company_id,
            type=new.type,
            status=AbsenceStatus.REQUESTED,
            start_date=new.start_date,
            end_date=new.end_date,
            working_days=new.working_days,
            created_at=new.created_at,
            updated_at=new.created_at,
            note=new.note,
            certificate_url=new.certificate_url,
            destination_country=new.destination_country,
        )
        return absence_id

    def get(self, absence_id):
        return self._rows.get(str(absence_id))

    def list_for_company(self, *, company_id, user_id=None, status=None, descending=False):
        rows = [
            a
            for a in self._rows.values()
            if a.company_id == company_id
            and (user_id is None or a.user_id == user_id)
            and (status is None or a.status == status)
        ]
        return sorted(rows, key=lambda a: a.start_date, reverse=descending)

    def update(self, absence_id, fields):
        current = self._rows.get(str(absence_id))
        if current is None:
            return False
        self.updates.append((str(absence_id), dict(fields)))
        self._rows[str(absence_id)] = dataclasses.replace(current, **fields)
        return True


class FakeNotificationsRepo:
    def __init__(self):
        self.created = []
        self.fail = False
        self.fail_after: int | None = None

    def create(self, notification):
        if self.fail or (self.fail_after is not None and len(self.created) >= self.fail_after):
            raise RuntimeError("notification store down")
        self.created.append(notification)
        return f"n{len(self.created)}"

    def exists(self, *, user_id, type, company_id):
        return any(
            n.user_id == user_id and n.type == type and n.company_id == company_id for n in self.created
        )


class FakeStorage:
    def __init__(self, root: Path | None = None):
        self.uploads: dict[str, UploadedFile] = {}
        self.fail = False
        self._root = root or Path(".")

    @property
    def root(self) -> Path:
        return self._root

    def upload(self, path, file):
        if self.fail:
            raise OSError("disk full")
        self.uploads[path] = file
        return f"/uploads/{path}"


def make_employee(user_id="u1", **overrides) -> Employee:
    data = dict(
        user_id=user_id,
        company_id="c1",
        email=f"{user_id}@example.com",
        display_name=f"Employee {user_id}",
        role=Role.EMPLOYEE,
        status=EmployeeStatus.ACTIVE,
        vacation_entitlement=30,
    )
    data.update(overrides)
    return Employee(**data)


def make_absence(absence_id="x1", **overrides) -> Absence:
    data = dict(
        absence_id=absence_id,
        user_id="u1",
        company_id="c1",
        type=AbsenceType.VACATION,
        status=AbsenceStatus.REQUESTED,
        start_date=date(2024, 6, 3),
        end_date=date(2024, 6, 7),
        working_days=5,
        created_at=1,
        updated_at=1,
    )
    data.update(overrides)
    return Absence(**data)


@pytest.fixture
def employees_repo():
    return FakeEmployeesRepo(
        [
            make_employee("u1", display_name="Anna Schmidt", email="anna@example.com"),
            make_employee("hr1", display_name="Helga HR", role=Role.HR_MANAGER),
            make_employee("adm1", display_name="Carl Admin", role=Role.COMPANY_ADMIN),
        ]
    )


@pytest.fixture
def absences_repo():
    return FakeAbsencesRepo()


@pytest.fixture
def notifications_repo():
    return FakeNotificationsRepo()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def absence_factory():
    return make_absence


@pytest.fixture
def app(monkeypatch, tmp_path, employees_repo, absences_repo, notifications_repo):
    from hr_portal.container import wire
    from hr_portal.main import create_app
    from hr_portal.storage.file_storage import LocalFileStorage

    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        employees_repo=employees_repo,
        absences_repo=absences_repo,
        notifications_repo=notifications_repo,
        storage=LocalFileStorage(tmp_path / "uploads"),
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id="u1", role=Role.EMPLOYEE, company_id="c1"):
        with client.session_transaction() as s:
            s["user_id"] = user_id
            s["role"] = Role(role).value
            s["company_id"] = company_id

    return _login
