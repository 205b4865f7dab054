from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import pytest

from src.hrms_lite.hrms_lite.attendance.model import AttendanceRecord
from src.hrms_lite.hrms_lite.common.datetime_utils import in_window
from src.hrms_lite.hrms_lite.core.enums import AttendanceStatus
from src.hrms_lite.hrms_lite.core.exceptions import ConflictError
from src.hrms_lite.hrms_lite.employees.model import Employee, EmployeeDraft

FIXED_NOW = datetime(2026, 2, 15, 10, 0, 0)


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self._next_id = 1

    def add(self, employee_id: str, full_name: str, department: str, *, email: Optional[str] = None,
            created_at: datetime = FIXED_NOW) -> Employee:
        draft = EmployeeDraft(
            employee_id=employee_id,
            full_name=full_name,
            email=email or f"{employee_id.lower()}@example.com",
            department=department,
        )
        # Spread creation times so list_all ordering is deterministic.
        return self.create(draft, now=created_at + timedelta(seconds=self._next_id))

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: (e.created_at, e.id), reverse=True)

    def get_by_id(self, id: int) -> Optional[Employee]:
        return self._by_id.get(id)

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.employee_id == employee_id), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        wanted = set(employee_ids)
        return {e.employee_id: e for e in self._by_id.values() if e.employee_id in wanted}

    def _check_unique(self, draft: EmployeeDraft, exclude_id: Optional[int] = None) -> None:
        for e in self._by_id.values():
            if e.id == exclude_id:
                continue
            if e.employee_id == draft.employee_id:
                raise ConflictError("duplicate employee_id", field="employeeId")
            if e.email == draft.email:
                raise ConflictError("duplicate email", field="email")

    def create(self, draft: EmployeeDraft, *, now: datetime) -> Employee:
        self._check_unique(draft)
        employee = Employee(
            id=self._next_id,
            employee_id=draft.employee_id,
            full_name=draft.full_name,
            email=draft.email,
            department=draft.department,
            created_at=now,
            updated_at=now,
        )
        self._by_id[employee.id] = employee
        self._next_id += 1
        return employee

    def update(self, id: int, draft: EmployeeDraft, *, now: datetime) -> Optional[Employee]:
        current = self._by_id.get(id)
        if not current:
            return None
        self._check_unique(draft, exclude_id=id)
        updated = Employee(
            id=id,
            employee_id=draft.employee_id,
            full_name=draft.full_name,
            email=draft.email,
            department=draft.department,
            created_at=current.created_at,
            updated_at=now,
        )
        self._by_id[id] = updated
        return updated

    def delete_by_id(self, id: int) -> Optional[Employee]:
        return self._by_id.pop(id, None)


class InMemoryAttendance:
    def __init__(self):
        self._records: list[AttendanceRecord] = []
        self._next_id = 1

    def add(self, employee_id: str, work_date: date, status: AttendanceStatus = AttendanceStatus.PRESENT, *,
            created_at: Optional[datetime] = None) -> AttendanceRecord:
        stamp = created_at or datetime.combine(work_date, datetime.min.time()) + timedelta(hours=9, seconds=self._next_id)
        return self.create(employee_id=employee_id, work_date=work_date, status=status, now=stamp)

    def _newest_first(self, records):
        return sorted(records, key=lambda r: (r.work_date, r.created_at, r.id), reverse=True)

    def list_all(self):
        return self._newest_first(self._records)

    def list_between(self, start: datetime, end: datetime):
        return self._newest_first(r for r in self._records if in_window(r.work_date, (start, end)))

    def list_for_employee(self, employee_id: str):
        return self._newest_first(r for r in self._records if r.employee_id == employee_id)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return next((r for r in self._records if r.employee_id == employee_id and r.work_date == work_date), None)

    def create(self, *, employee_id: str, work_date: date, status: AttendanceStatus, now: datetime) -> AttendanceRecord:
        if any(r.employee_id == employee_id and r.work_date == work_date for r in self._records):
            raise ConflictError("Attendance already exists for this date")
        record = AttendanceRecord(
            id=self._next_id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self._records.append(record)
        self._next_id += 1
        return record


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(employees_repo, attendance_repo, fixed_now):
    from src.hrms_lite.hrms_lite.container import wire_container

    return wire_container(employees_repo, attendance_repo, clock=lambda: fixed_now)


@pytest.fixture
def client(container, monkeypatch):
    from src.hrms_lite.hrms_lite.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()
