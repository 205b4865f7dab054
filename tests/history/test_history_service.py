from __future__ import annotations

from datetime import date

import pytest

from src.hrms_lite.hrms_lite.core.enums import AttendanceStatus
from src.hrms_lite.hrms_lite.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def seeded(employees_repo, attendance_repo):
    employees_repo.add("EMP001", "Alice", "Engineering")
    employees_repo.add("EMP002", "Bob", "Sales")
    attendance_repo.add("EMP001", date(2026, 1, 30), AttendanceStatus.PRESENT)
    attendance_repo.add("EMP002", date(2026, 1, 31), AttendanceStatus.ABSENT)
    attendance_repo.add("EMP001", date(2026, 2, 2), AttendanceStatus.PRESENT)
    attendance_repo.add("EMP002", date(2026, 2, 2), AttendanceStatus.PRESENT)
    attendance_repo.add("GONE", date(2026, 2, 3), AttendanceStatus.ABSENT)


def test_full_history_groups_by_month(container, seeded):
    listing = container.history_service.full_history()

    assert [g.key for g in listing.groups] == ["2026-02", "2026-01"]
    assert [g.label for g in listing.groups] == ["February 2026", "January 2026"]
    assert listing.total_records == 5
    assert sum(g.count for g in listing.groups) == listing.total_records


def test_full_history_is_a_partition_in_newest_first_order(container, attendance_repo, seeded):
    listing = container.history_service.full_history()
    flat = [r.id for g in listing.groups for r in g.records]

    assert sorted(flat) == sorted(r.id for r in attendance_repo.list_all())
    assert len(flat) == len(set(flat))
    dates = [r.date for g in listing.groups for r in g.records]
    assert dates == sorted(dates, reverse=True)


def test_same_day_records_newest_created_first(container, seeded):
    february = container.history_service.full_history().groups[0]
    same_day = [r.employee_id for r in february.records if r.date == date(2026, 2, 2)]
    # EMP002 was marked after EMP001 for that day.
    assert same_day == ["EMP002", "EMP001"]


def test_full_history_is_idempotent(container, seeded):
    first = container.history_service.full_history().to_dict()
    second = container.history_service.full_history().to_dict()
    assert first == second


def test_orphan_records_have_no_employee(container, seeded):
    listing = container.history_service.full_history()
    orphan = next(r for g in listing.groups for r in g.records if r.employee_id == "GONE")

    assert orphan.employee is None
    assert orphan.to_dict()["employee"] is None


def test_month_history(container, seeded):
    result = container.history_service.month_history("2026", "1").to_dict()

    assert result["monthKey"] == "2026-01"
    assert result["monthLabel"] == "January 2026"
    assert result["totalRecords"] == 2
    assert [r["date"] for r in result["records"]] == ["2026-01-31", "2026-01-30"]


def test_month_history_empty_month(container, seeded):
    result = container.history_service.month_history(2025, 12)
    assert result.group.count == 0
    assert result.group.label == "December 2025"


@pytest.mark.parametrize(
    "year, month, message",
    [
        ("1999", "1", "Invalid year"),
        ("abc", "1", "Invalid year"),
        ("2026", "13", "Invalid month"),
        ("2026", "0", "Invalid month"),
    ],
)
def test_month_history_rejects_bad_input(container, year, month, message):
    with pytest.raises(ValidationError, match=message):
        container.history_service.month_history(year, month)


def test_employee_history(container, seeded):
    result = container.history_service.employee_history("emp001")

    assert result.employee.full_name == "Alice"
    assert result.total_records == 2
    assert all(r.employee_id == "EMP001" for g in result.groups for r in g.records)


def test_employee_history_unknown_employee(container, seeded):
    with pytest.raises(NotFoundError):
        container.history_service.employee_history("NOPE")


def test_range_history_inclusive(container, seeded):
    result = container.history_service.range_history("2026-01-31", "2026-02-02")

    assert result.total_records == 3
    assert result.to_dict()["startDate"] == "2026-01-31"
    assert {r.date for r in result.records} == {date(2026, 1, 31), date(2026, 2, 2)}


@pytest.mark.parametrize(
    "start, end, message",
    [
        (None, "2026-01-31", "required"),
        ("2026-01-01", "", "required"),
        ("2026/01/01", "2026-01-31", "Invalid date format"),
        ("2026-02-01", "2026-01-31", "before or equal"),
    ],
)
def test_range_history_rejects_bad_input(container, start, end, message):
    with pytest.raises(ValidationError, match=message):
        container.history_service.range_history(start, end)
