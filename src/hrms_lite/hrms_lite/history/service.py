from __future__ import annotations

from datetime import date
from typing import Optional, Union

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import day_window, month_label, month_window, parse_iso_date
from ..common.validators import normalize_employee_id
from ..core.constants import MAX_HISTORY_YEAR, MIN_HISTORY_YEAR
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .enrichment import enrich, enrich_for, group_by_month
from .model import EmployeeHistory, EmployeeSnapshot, HistoryGroup, HistoryListing, MonthHistory, RangeHistory


def _parse_int(value: Union[int, str]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class HistoryService:
    """Attendance history enriched with employee attributes.

    Every call reads the live record set; nothing is cached between requests.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def full_history(self) -> HistoryListing:
        records = enrich(self._attendance.list_all(), self._employees)
        return HistoryListing(groups=group_by_month(records), total_records=len(records))

    def month_history(self, year: Union[int, str], month: Union[int, str]) -> MonthHistory:
        year_num = _parse_int(year) if len(str(year).strip()) == 4 else None
        if year_num is None or not MIN_HISTORY_YEAR <= year_num <= MAX_HISTORY_YEAR:
            raise ValidationError(f"Invalid year. Year must be between {MIN_HISTORY_YEAR} and {MAX_HISTORY_YEAR}")

        month_num = _parse_int(month)
        if month_num is None or not 1 <= month_num <= 12:
            raise ValidationError("Invalid month. Month must be between 1 and 12")

        start, end = month_window(year_num, month_num)
        records = enrich(self._attendance.list_between(start, end), self._employees)
        group = HistoryGroup(key=f"{year_num:04d}-{month_num:02d}", label=month_label(start), records=records)
        return MonthHistory(group=group)

    def employee_history(self, employee_id: str) -> EmployeeHistory:
        employee = self._employees.get_by_employee_id(normalize_employee_id(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        snapshot = EmployeeSnapshot.of(employee)
        records = enrich_for(self._attendance.list_for_employee(employee.employee_id), snapshot)
        return EmployeeHistory(employee=snapshot, groups=group_by_month(records), total_records=len(records))

    def range_history(self, start_date: Union[str, date, None], end_date: Union[str, date, None]) -> RangeHistory:
        if not start_date or not end_date:
            raise ValidationError(
                "Both startDate and endDate query parameters are required (format: YYYY-MM-DD)"
            )

        try:
            start = start_date if isinstance(start_date, date) else parse_iso_date(start_date.strip())
            end = end_date if isinstance(end_date, date) else parse_iso_date(end_date.strip())
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD format")

        if start > end:
            raise ValidationError("Start date must be before or equal to end date")

        window_start, window_end = day_window(start, end)
        records = enrich(self._attendance.list_between(window_start, window_end), self._employees)
        return RangeHistory(start_date=start, end_date=end, records=records)
