from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local, parse_calendar_date
from ..common.validators import normalize_employee_id, require_fields, require_not_future, require_text
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..history.enrichment import enrich, newest_first
from ..history.model import EnrichedAttendance
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _already_marked(work_date: date) -> ConflictError:
    return ConflictError(
        f"Attendance for this employee has already been marked for {work_date.isoformat()}. "
        "Cannot mark attendance twice for the same day."
    )


class AttendanceService:
    """Use case: mark attendance and read the attendance ledger."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock

    @staticmethod
    def _parse_status(value: str) -> AttendanceStatus:
        try:
            return AttendanceStatus(str(value).strip())
        except ValueError:
            raise ValidationError('Status must be either "Present" or "Absent"')

    @staticmethod
    def _parse_date(value) -> date:
        if isinstance(value, date):
            return value.date() if isinstance(value, datetime) else value
        try:
            return parse_calendar_date(str(value))
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD format")

    def mark(self, payload: dict) -> AttendanceRecord:
        """Validate a {employeeId, date, status} payload and store it.

        Raises ValidationError (missing field, bad status/date, future date),
        NotFoundError (unknown employee) or ConflictError (day already marked).
        """
        require_fields(payload, "employeeId", "date", "status")
        status = self._parse_status(payload["status"])
        work_date = self._parse_date(payload["date"])
        employee_id = normalize_employee_id(require_text(payload["employeeId"], "Employee ID"))

        today = self._clock().date()
        require_not_future(work_date, today)

        if not self._employees.get_by_employee_id(employee_id):
            raise NotFoundError("Employee not found")

        if self._attendance.get_for_employee_and_date(employee_id, work_date):
            raise _already_marked(work_date)

        return self._ingest(employee_id=employee_id, work_date=work_date, status=status)

    def _ingest(self, *, employee_id: str, work_date: date, status: AttendanceStatus) -> AttendanceRecord:
        now = self._clock()
        # Reports assume the working set holds no future-dated rows.
        require_not_future(work_date, now.date())

        try:
            record = self._attendance.create(employee_id=employee_id, work_date=work_date, status=status, now=now)
        except ConflictError as e:
            # Another writer took the day between the check and the insert.
            raise _already_marked(work_date) from e
        logger.info("Attendance marked: %s %s %s", employee_id, work_date.isoformat(), status.value)
        return record

    def list_attendance(self) -> list[EnrichedAttendance]:
        return enrich(self._attendance.list_all(), self._employees)

    def list_employee_attendance(self, employee_id: str) -> Sequence[AttendanceRecord]:
        employee_id = normalize_employee_id(employee_id)
        if not self._employees.get_by_employee_id(employee_id):
            raise NotFoundError("Employee not found")
        return newest_first(self._attendance.list_for_employee(employee_id))
