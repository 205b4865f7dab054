"""Attach employee snapshots to attendance and bucket the result by month."""
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import as_datetime, month_key, month_label
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import EmployeeSnapshot, EnrichedAttendance, HistoryGroup


def newest_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """date DESC, then created_at DESC (same-day records by insertion recency)."""
    return sorted(records, key=lambda r: (as_datetime(r.work_date), r.created_at), reverse=True)


def snapshot_map(employees: Mapping[str, Employee]) -> dict[str, EmployeeSnapshot]:
    return {employee_id: EmployeeSnapshot.of(e) for employee_id, e in employees.items()}


def enrich(
    records: Sequence[AttendanceRecord],
    employees: EmployeeRepository,
) -> list[EnrichedAttendance]:
    """One batch lookup for all referenced employees, then an O(1) attach per record."""
    snapshots = snapshot_map(employees.get_many({r.employee_id for r in records}))
    return [EnrichedAttendance.of(r, snapshots.get(r.employee_id)) for r in newest_first(records)]


def enrich_for(records: Sequence[AttendanceRecord], snapshot: Optional[EmployeeSnapshot]) -> list[EnrichedAttendance]:
    """All records share one known owner, so no lookup is needed."""
    return [EnrichedAttendance.of(r, snapshot) for r in newest_first(records)]


def group_by_month(records: Iterable[EnrichedAttendance]) -> list[HistoryGroup]:
    """Partition by YYYY-MM, keeping record order inside each group; newest month first."""
    groups: dict[str, HistoryGroup] = {}
    for r in records:
        key = month_key(r.date)
        if key not in groups:
            groups[key] = HistoryGroup(key=key, label=month_label(r.date))
        groups[key].records.append(r)
    return sorted(groups.values(), key=lambda g: g.key, reverse=True)
