from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hrms_lite.hrms_lite.core.enums import AttendanceStatus, GroupOption, SortOption
from src.hrms_lite.hrms_lite.history.enrichment import group_by_month
from src.hrms_lite.hrms_lite.history.model import EmployeeSnapshot, EnrichedAttendance
from src.hrms_lite.hrms_lite.history.pipeline import (
    ALL,
    ViewConfig,
    available_departments,
    available_months,
    build_view,
    parse_history_payload,
)

ALICE = EmployeeSnapshot(employee_id="EMP001", full_name="Alice", email="alice@example.com", department="Engineering")
BOB = EmployeeSnapshot(employee_id="EMP002", full_name="bob", email="bob@example.com", department="Sales")


def _record(id: int, when, status: AttendanceStatus, employee=ALICE, employee_id=None, created=None) -> EnrichedAttendance:
    if created is None:
        created = when if isinstance(when, datetime) else datetime.combine(when, datetime.min.time())
    return EnrichedAttendance(
        id=id,
        employee_id=employee_id or employee.employee_id,
        date=when,
        status=status,
        created_at=created,
        updated_at=created,
        employee=employee,
    )


def _groups():
    records = [
        _record(1, date(2026, 2, 3), AttendanceStatus.PRESENT, ALICE),
        _record(2, date(2026, 2, 2), AttendanceStatus.ABSENT, BOB),
        _record(3, date(2026, 1, 20), AttendanceStatus.ABSENT, ALICE),
        _record(4, date(2026, 1, 10), AttendanceStatus.PRESENT, BOB),
        _record(5, date(2026, 1, 5), AttendanceStatus.ABSENT, None, employee_id="GONE"),
    ]
    return group_by_month(records)


def test_default_view_keeps_month_groups():
    view = build_view(_groups())

    assert [g.key for g in view.groups] == ["2026-02", "2026-01"]
    assert view.showing == view.total_records == 5


def test_absent_filter_grouped_by_department():
    view = build_view(_groups(), ViewConfig(status="Absent", group_by=GroupOption.DEPARTMENT))

    assert view.showing == 3
    assert [g.label for g in view.groups] == ["Engineering", "Sales", "Unknown"]
    for g in view.groups:
        assert all(r.record.status == AttendanceStatus.ABSENT for r in g.records)


def test_grouping_partitions_filtered_records():
    config = ViewConfig(sort_by=SortOption.EMPLOYEE_ASC, group_by=GroupOption.EMPLOYEE)
    view = build_view(_groups(), config)

    ids = [r.record.id for g in view.groups for r in g.records]
    assert sorted(ids) == [1, 2, 3, 4, 5]
    assert view.showing == len(ids)


def test_date_range_is_inclusive_of_end_day():
    groups = group_by_month(
        [
            _record(1, datetime(2026, 2, 1, 0, 0), AttendanceStatus.PRESENT),
            _record(2, datetime(2026, 1, 31, 23, 0), AttendanceStatus.PRESENT),
            _record(3, datetime(2026, 1, 1, 0, 0), AttendanceStatus.PRESENT),
        ]
    )
    config = ViewConfig(start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))

    ids = {r.record.id for g in build_view(groups, config).groups for r in g.records}

    assert ids == {2, 3}


def test_date_range_overrides_month():
    config = ViewConfig(month="2026-02", start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))
    view = build_view(_groups(), config)

    assert [g.key for g in view.groups] == ["2026-01"]
    assert view.showing == 3


def test_half_open_range_falls_back_to_month():
    view = build_view(_groups(), ViewConfig(month="2026-02", start_date=date(2026, 1, 1)))
    assert view.showing == 2


def test_status_ascending_puts_absent_first():
    view = build_view(_groups(), ViewConfig(sort_by=SortOption.STATUS_ASC, group_by=GroupOption.NONE))

    statuses = [r.record.status.value for r in view.groups[0].records]
    assert statuses == ["Absent", "Absent", "Absent", "Present", "Present"]
    assert view.groups[0].label == "All Records"


def test_employee_sort_is_case_insensitive():
    view = build_view(_groups(), ViewConfig(sort_by=SortOption.EMPLOYEE_ASC, group_by=GroupOption.NONE))

    names = [r.display_name for r in view.groups[0].records]
    assert names == ["Alice", "Alice", "bob", "bob", "GONE"]


def test_search_matches_name_department_email_and_id():
    assert build_view(_groups(), ViewConfig(search="ALI")).showing == 2
    assert build_view(_groups(), ViewConfig(search="sales")).showing == 2
    assert build_view(_groups(), ViewConfig(search="bob@example")).showing == 2
    assert build_view(_groups(), ViewConfig(search="gone")).showing == 1
    assert build_view(_groups(), ViewConfig(search="   ")).showing == 5


def test_department_filter_and_status_grouping():
    view = build_view(_groups(), ViewConfig(department="Sales", group_by=GroupOption.STATUS))

    assert [g.key for g in view.groups] == ["Present", "Absent"]
    assert view.showing == 2
    assert view.total_records == 5


def test_available_filters():
    groups = _groups()
    assert available_months(groups) == [(ALL, "All Months"), ("2026-02", "February 2026"), ("2026-01", "January 2026")]
    assert available_departments(groups) == [ALL, "Engineering", "Sales"]


def test_parse_history_payload_rebuilds_groups():
    payload = {
        "data": [
            {
                "monthKey": "2026-01",
                "monthLabel": "January 2026",
                "records": [
                    {
                        "id": 7,
                        "employeeId": "EMP001",
                        "date": "2026-01-31T00:00:00.000Z",
                        "status": "Absent",
                        "createdAt": "2026-01-31T09:00:00.000Z",
                        "updatedAt": "2026-01-31T09:00:00.000Z",
                        "employee": ALICE.to_dict(),
                    },
                    {
                        "id": 8,
                        "employeeId": "GONE",
                        "date": "2026-01-30",
                        "status": "Present",
                        "createdAt": "2026-01-30T09:00:00",
                        "employee": None,
                    },
                ],
            }
        ],
        "totalRecords": 2,
    }

    groups, total = parse_history_payload(payload)

    assert total == 2
    assert groups[0].records[0].date == date(2026, 1, 31)
    assert groups[0].records[0].employee == ALICE
    assert groups[0].records[1].employee is None
    view = build_view(groups, ViewConfig(status="Absent"), total_records=total)
    assert view.showing == 1


def _sort_fixture():
    records = [
        _record(1, date(2026, 1, 10), AttendanceStatus.PRESENT, ALICE, created=datetime(2026, 1, 10, 12, 0)),
        _record(2, date(2026, 1, 10), AttendanceStatus.ABSENT, BOB, created=datetime(2026, 1, 10, 9, 0)),
        _record(3, date(2026, 1, 5), AttendanceStatus.ABSENT, None, employee_id="GONE", created=datetime(2026, 1, 5, 9, 0)),
    ]
    return group_by_month(records)


@pytest.mark.parametrize(
    "sort_by, expected_ids",
    [
        (SortOption.DATE_DESC, [1, 2, 3]),
        (SortOption.DATE_ASC, [3, 2, 1]),
        (SortOption.EMPLOYEE_ASC, [1, 2, 3]),
        (SortOption.EMPLOYEE_DESC, [3, 2, 1]),
        (SortOption.DEPARTMENT_ASC, [3, 1, 2]),
        (SortOption.DEPARTMENT_DESC, [2, 1, 3]),
        (SortOption.STATUS_ASC, [2, 3, 1]),
        (SortOption.STATUS_DESC, [1, 2, 3]),
    ],
)
def test_every_sort_option_order(sort_by, expected_ids):
    view = build_view(_sort_fixture(), ViewConfig(sort_by=sort_by, group_by=GroupOption.NONE))

    assert [r.record.id for r in view.groups[0].records] == expected_ids
