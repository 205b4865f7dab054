from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import day_key
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark, unique per employee per calendar day.

    employee_id is a reference by value to Employee.employee_id; the employee
    may no longer exist. created_at orders same-day records.
    """

    id: int
    employee_id: str
    work_date: date
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": day_key(self.work_date),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
