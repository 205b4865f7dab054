"""Filter/sort/group pipeline over already-fetched, month-grouped history.

Pure data transformation with no I/O: the presentation layer feeds it the
/history payload plus the user's view settings and renders the result.

    groups, total = parse_history_payload(payload)
    view = build_view(groups, ViewConfig(status="Absent", group_by=GroupOption.DEPARTMENT), total_records=total)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import as_datetime, day_window, in_window, parse_calendar_date
from ..core.constants import ALL_RECORDS_LABEL, UNKNOWN_DEPARTMENT
from ..core.enums import AttendanceStatus, GroupOption, SortOption
from .model import EmployeeSnapshot, EnrichedAttendance, HistoryGroup

ALL = "all"


@dataclass(frozen=True)
class ViewConfig:
    search: str = ""
    month: str = ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = ALL
    department: str = ALL
    sort_by: SortOption = SortOption.DATE_DESC
    group_by: GroupOption = GroupOption.MONTH

    @property
    def date_range_active(self) -> bool:
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class ViewRecord:
    """A flattened record tagged with the month group it came from."""

    record: EnrichedAttendance
    month_key: str
    month_label: str

    @property
    def display_name(self) -> str:
        return self.record.full_name or self.record.employee_id


@dataclass(frozen=True)
class ViewGroup:
    key: str
    label: str
    records: list[ViewRecord]


@dataclass(frozen=True)
class HistoryView:
    groups: list[ViewGroup]
    showing: int
    total_records: int


def _collate(value: str) -> tuple[str, str]:
    # Case-insensitive first, exact string second; "Absent" < "Present".
    return value.casefold(), value


def flatten(groups: Iterable[HistoryGroup]) -> list[ViewRecord]:
    return [ViewRecord(record=r, month_key=g.key, month_label=g.label) for g in groups for r in g.records]


def _matches_search(item: ViewRecord, query: str) -> bool:
    record = item.record
    employee = record.employee
    haystack = [record.employee_id.lower()]
    if employee:
        haystack += [employee.full_name.lower(), employee.department.lower(), employee.email.lower()]
    return any(query in field for field in haystack)


def filter_records(records: Sequence[ViewRecord], config: ViewConfig) -> list[ViewRecord]:
    filtered = list(records)

    # A date range takes priority over the month selection.
    if config.date_range_active:
        window = day_window(config.start_date, config.end_date)
        filtered = [r for r in filtered if in_window(r.record.date, window)]
    elif config.month != ALL:
        filtered = [r for r in filtered if r.month_key == config.month]

    if config.status != ALL:
        filtered = [r for r in filtered if r.record.status.value == config.status]

    if config.department != ALL:
        filtered = [r for r in filtered if r.record.department == config.department]

    query = config.search.strip().lower()
    if query:
        filtered = [r for r in filtered if _matches_search(r, query)]

    return filtered


def _by_date(r: ViewRecord) -> tuple[datetime, datetime]:
    return as_datetime(r.record.date), r.record.created_at


_SORT_KEYS: dict[SortOption, tuple[Callable[[ViewRecord], object], bool]] = {
    SortOption.DATE_DESC: (_by_date, True),
    SortOption.DATE_ASC: (_by_date, False),
    SortOption.EMPLOYEE_ASC: (lambda r: _collate(r.display_name), False),
    SortOption.EMPLOYEE_DESC: (lambda r: _collate(r.display_name), True),
    SortOption.DEPARTMENT_ASC: (lambda r: _collate(r.record.department or ""), False),
    SortOption.DEPARTMENT_DESC: (lambda r: _collate(r.record.department or ""), True),
    SortOption.STATUS_ASC: (lambda r: _collate(r.record.status.value), False),
    SortOption.STATUS_DESC: (lambda r: _collate(r.record.status.value), True),
}


def sort_records(records: Sequence[ViewRecord], sort_by: SortOption) -> list[ViewRecord]:
    """Stable sort; records that compare equal keep their incoming order."""
    key, reverse = _SORT_KEYS[SortOption(sort_by)]
    return sorted(records, key=key, reverse=reverse)


def _department_label(r: ViewRecord) -> str:
    return r.record.department or UNKNOWN_DEPARTMENT


def _bucket(
    records: Sequence[ViewRecord],
    key_of: Callable[[ViewRecord], str],
    label_of: Callable[[ViewRecord], str],
) -> list[ViewGroup]:
    groups: dict[str, ViewGroup] = {}
    for r in records:
        key = key_of(r)
        if key not in groups:
            groups[key] = ViewGroup(key=key, label=label_of(r), records=[])
        groups[key].records.append(r)
    return list(groups.values())


def group_records(records: Sequence[ViewRecord], group_by: GroupOption) -> list[ViewGroup]:
    group_by = GroupOption(group_by)

    if group_by == GroupOption.NONE:
        return [ViewGroup(key=ALL, label=ALL_RECORDS_LABEL, records=list(records))]

    if group_by == GroupOption.MONTH:
        groups = _bucket(records, lambda r: r.month_key, lambda r: r.month_label)
        return sorted(groups, key=lambda g: g.key, reverse=True)

    if group_by == GroupOption.DEPARTMENT:
        groups = _bucket(records, _department_label, _department_label)
        return sorted(groups, key=lambda g: _collate(g.label))

    if group_by == GroupOption.EMPLOYEE:
        groups = _bucket(records, lambda r: r.record.employee_id, lambda r: r.display_name)
        return sorted(groups, key=lambda g: _collate(g.label))

    groups = _bucket(records, lambda r: r.record.status.value, lambda r: r.record.status.value)
    return sorted(groups, key=lambda g: g.key, reverse=True)


def build_view(
    groups: Sequence[HistoryGroup],
    config: ViewConfig = ViewConfig(),
    *,
    total_records: Optional[int] = None,
) -> HistoryView:
    """Flatten → filter → sort → group.

    ``showing`` counts the records that survived the filters; ``total_records``
    is the unfiltered count (defaults to the number of flattened records).
    """
    flat = flatten(groups)
    matched = sort_records(filter_records(flat, config), config.sort_by)
    return HistoryView(
        groups=group_records(matched, config.group_by),
        showing=len(matched),
        total_records=len(flat) if total_records is None else total_records,
    )


def available_months(groups: Sequence[HistoryGroup]) -> list[tuple[str, str]]:
    return [(ALL, "All Months")] + [(g.key, g.label) for g in groups]


def available_departments(groups: Sequence[HistoryGroup]) -> list[str]:
    departments = {r.department for g in groups for r in g.records if r.department}
    return [ALL] + sorted(departments)


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)


def _parse_record(data: dict) -> EnrichedAttendance:
    employee = data.get("employee")
    return EnrichedAttendance(
        id=data.get("id") or 0,
        employee_id=data["employeeId"],
        date=parse_calendar_date(data["date"]),
        status=AttendanceStatus(data["status"]),
        created_at=_parse_timestamp(data["createdAt"]),
        updated_at=_parse_timestamp(data.get("updatedAt") or data["createdAt"]),
        employee=(
            EmployeeSnapshot(
                employee_id=employee["employeeId"],
                full_name=employee["fullName"],
                email=employee["email"],
                department=employee["department"],
            )
            if employee
            else None
        ),
    )


def parse_history_payload(payload: dict) -> tuple[list[HistoryGroup], int]:
    """Rebuild month groups from a ``GET /history`` response body (``data`` of the envelope)."""
    groups = [
        HistoryGroup(
            key=g["monthKey"],
            label=g["monthLabel"],
            records=[_parse_record(r) for r in g.get("records", [])],
        )
        for g in payload.get("data", [])
    ]
    return groups, int(payload.get("totalRecords", sum(g.count for g in groups)))
