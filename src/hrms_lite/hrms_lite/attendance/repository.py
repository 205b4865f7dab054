from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Repository interface for attendance.

    Listing methods return records newest first: work_date DESC, then
    created_at DESC. create() must raise ConflictError when the
    (employee_id, work_date) pair is already taken.
    """

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records whose work_date falls inside the inclusive [start, end] window."""
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        now: datetime,
    ) -> AttendanceRecord:
        raise NotImplementedError
