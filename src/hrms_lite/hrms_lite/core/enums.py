from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored and sent over the wire."""

    PRESENT = "Present"
    ABSENT = "Absent"


class SortOption(str, Enum):
    """Sort keys understood by the history view pipeline."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    EMPLOYEE_ASC = "employee-asc"
    EMPLOYEE_DESC = "employee-desc"
    DEPARTMENT_ASC = "department-asc"
    DEPARTMENT_DESC = "department-desc"
    STATUS_ASC = "status-asc"
    STATUS_DESC = "status-desc"


class GroupOption(str, Enum):
    """Grouping modes understood by the history view pipeline."""

    MONTH = "month"
    DEPARTMENT = "department"
    EMPLOYEE = "employee"
    STATUS = "status"
    NONE = "none"
