from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..employees.repository import EmployeeRepository
from . import aggregations
from .model import AnalyticsSummary


class AnalyticsService:
    """Use case: dashboard summary, recomputed from the full record set on every call."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._attendance = attendance
        self._clock = clock

    def build_summary(self, *, now: Optional[datetime] = None) -> AnalyticsSummary:
        now = now or self._clock()
        employees = list(self._employees.list_all())
        records = list(self._attendance.list_all())
        employees_by_id = {e.employee_id: e for e in employees}

        return AnalyticsSummary(
            overview=aggregations.overview(employees, records),
            employees_by_department=aggregations.employees_by_department(employees),
            attendance_by_department=aggregations.attendance_by_department(records, employees_by_id),
            daily_attendance=aggregations.daily_attendance(records, now=now),
            top_employees=aggregations.top_employees(records, employees_by_id),
            monthly_attendance=aggregations.monthly_attendance(records),
        )
