from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import day_key
from ..core.enums import AttendanceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Denormalized employee identity attached to attendance for display."""

    employee_id: str
    full_name: str
    email: str
    department: str

    @classmethod
    def of(cls, employee: Employee) -> "EmployeeSnapshot":
        return cls(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            email=employee.email,
            department=employee.department,
        )

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "fullName": self.full_name,
            "email": self.email,
            "department": self.department,
        }


@dataclass(frozen=True)
class EnrichedAttendance:
    """Read-model: an attendance record plus its employee snapshot (None for orphans)."""

    id: int
    employee_id: str
    date: date
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime
    employee: Optional[EmployeeSnapshot] = None

    @classmethod
    def of(cls, record: AttendanceRecord, employee: Optional[EmployeeSnapshot]) -> "EnrichedAttendance":
        return cls(
            id=record.id,
            employee_id=record.employee_id,
            date=record.work_date,
            status=record.status,
            created_at=record.created_at,
            updated_at=record.updated_at,
            employee=employee,
        )

    @property
    def full_name(self) -> Optional[str]:
        return self.employee.full_name if self.employee else None

    @property
    def department(self) -> Optional[str]:
        return self.employee.department if self.employee else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": day_key(self.date),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "employee": self.employee.to_dict() if self.employee else None,
        }


@dataclass(frozen=True)
class HistoryGroup:
    key: str
    label: str
    records: list[EnrichedAttendance] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "monthKey": self.key,
            "monthLabel": self.label,
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class HistoryListing:
    groups: list[HistoryGroup]
    total_records: int

    def to_dict(self) -> dict:
        return {"data": [g.to_dict() for g in self.groups], "totalRecords": self.total_records}


@dataclass(frozen=True)
class MonthHistory:
    group: HistoryGroup

    def to_dict(self) -> dict:
        return {**self.group.to_dict(), "totalRecords": self.group.count}


@dataclass(frozen=True)
class EmployeeHistory:
    employee: EmployeeSnapshot
    groups: list[HistoryGroup]
    total_records: int

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "data": [g.to_dict() for g in self.groups],
            "totalRecords": self.total_records,
        }


@dataclass(frozen=True)
class RangeHistory:
    start_date: date
    end_date: date
    records: list[EnrichedAttendance]

    @property
    def total_records(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "startDate": day_key(self.start_date),
            "endDate": day_key(self.end_date),
            "records": [r.to_dict() for r in self.records],
            "totalRecords": self.total_records,
        }
