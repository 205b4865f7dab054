"""Dashboard sub-reports.

Each function is a pure function of an (employees, attendance) snapshot, so
they can be computed independently and tested without a request pipeline.
Joins against employees are inner joins: attendance whose employee was
deleted is left out of the department and top-employee rollups.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import as_datetime, day_key, month_key
from ..core.constants import DAILY_CHART_BUCKETS, DAILY_TREND_DAYS, MONTHLY_OVERVIEW_LIMIT, TOP_EMPLOYEES_LIMIT
from ..employees.model import Employee
from .model import DepartmentCount, EmployeeRanking, Overview, StatusBucket


def attendance_rate(present: int, total: int) -> str:
    """Percentage with 2 decimals; "0.00" when there is nothing to divide by."""
    if total <= 0:
        return "0.00"
    return f"{present / total * 100:.2f}"


def _tally(records: Iterable[AttendanceRecord], key_of: Callable[[AttendanceRecord], Optional[str]]) -> list[StatusBucket]:
    counts: dict[str, list[int]] = {}
    for r in records:
        key = key_of(r)
        if key is None:
            continue
        present_absent = counts.setdefault(key, [0, 0])
        present_absent[0 if r.is_present else 1] += 1
    return [StatusBucket(key=k, present=p, absent=a) for k, (p, a) in counts.items()]


def overview(employees: Sequence[Employee], records: Sequence[AttendanceRecord]) -> Overview:
    present = sum(1 for r in records if r.is_present)
    total = len(records)
    return Overview(
        total_employees=len(employees),
        total_attendance_records=total,
        present_count=present,
        absent_count=total - present,
        attendance_rate=attendance_rate(present, total),
    )


def employees_by_department(employees: Iterable[Employee]) -> list[DepartmentCount]:
    counts = Counter(e.department for e in employees)
    buckets = [DepartmentCount(department=d, count=c) for d, c in counts.items()]
    return sorted(buckets, key=lambda b: (-b.count, b.department))


def attendance_by_department(
    records: Iterable[AttendanceRecord],
    employees_by_id: Mapping[str, Employee],
) -> list[StatusBucket]:
    def department_of(r: AttendanceRecord) -> Optional[str]:
        employee = employees_by_id.get(r.employee_id)
        return employee.department if employee else None

    return sorted(_tally(records, department_of), key=lambda b: (-b.total, b.key))


def daily_attendance(
    records: Iterable[AttendanceRecord],
    *,
    now: datetime,
    days: int = DAILY_TREND_DAYS,
) -> list[StatusBucket]:
    """Per-day tally for records dated on or after ``now - days``, oldest day first."""
    cutoff = now - timedelta(days=days)
    recent = (r for r in records if as_datetime(r.work_date) >= cutoff)
    return sorted(_tally(recent, lambda r: day_key(r.work_date)), key=lambda b: b.key)


def chart_days(buckets: Sequence[StatusBucket], limit: int = DAILY_CHART_BUCKETS) -> list[StatusBucket]:
    """The most recent ``limit`` day buckets of an ascending daily series."""
    return list(buckets[-limit:]) if limit > 0 else []


def top_employees(
    records: Iterable[AttendanceRecord],
    employees_by_id: Mapping[str, Employee],
    *,
    limit: int = TOP_EMPLOYEES_LIMIT,
) -> list[EmployeeRanking]:
    """Most present days first; equal present days fall back to employee_id ascending."""
    rankings = []
    for bucket in _tally(records, lambda r: r.employee_id):
        employee = employees_by_id.get(bucket.key)
        if not employee:
            continue
        rankings.append(
            EmployeeRanking(
                employee_id=bucket.key,
                full_name=employee.full_name,
                department=employee.department,
                present_days=bucket.present,
                absent_days=bucket.absent,
                total_days=bucket.total,
                attendance_rate=bucket.present / bucket.total * 100,
            )
        )
    rankings.sort(key=lambda e: (-e.present_days, e.employee_id))
    return rankings[:limit]


def monthly_attendance(
    records: Iterable[AttendanceRecord],
    *,
    limit: int = MONTHLY_OVERVIEW_LIMIT,
) -> list[StatusBucket]:
    buckets = sorted(_tally(records, lambda r: month_key(r.work_date)), key=lambda b: b.key, reverse=True)
    return buckets[:limit]
