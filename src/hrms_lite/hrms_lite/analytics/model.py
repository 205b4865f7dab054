from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Overview:
    total_employees: int
    total_attendance_records: int
    present_count: int
    absent_count: int
    attendance_rate: str

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "totalAttendanceRecords": self.total_attendance_records,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class DepartmentCount:
    department: str
    count: int

    def to_dict(self) -> dict:
        return {"_id": self.department, "count": self.count}


@dataclass(frozen=True)
class StatusBucket:
    """Present/absent tally under a key: a department, a YYYY-MM-DD day or a YYYY-MM month."""

    key: str
    present: int = 0
    absent: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent

    def to_dict(self) -> dict:
        return {"_id": self.key, "present": self.present, "absent": self.absent, "total": self.total}


@dataclass(frozen=True)
class EmployeeRanking:
    employee_id: str
    full_name: str
    department: str
    present_days: int
    absent_days: int
    total_days: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "fullName": self.full_name,
            "department": self.department,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "totalDays": self.total_days,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class AnalyticsSummary:
    overview: Overview
    employees_by_department: list[DepartmentCount]
    attendance_by_department: list[StatusBucket]
    daily_attendance: list[StatusBucket]
    top_employees: list[EmployeeRanking]
    monthly_attendance: list[StatusBucket]

    def to_dict(self) -> dict:
        return {
            "overview": self.overview.to_dict(),
            "employeesByDepartment": [d.to_dict() for d in self.employees_by_department],
            "attendanceByDepartment": [b.to_dict() for b in self.attendance_by_department],
            "dailyAttendance": [b.to_dict() for b in self.daily_attendance],
            "topEmployeesByAttendance": [e.to_dict() for e in self.top_employees],
            "monthlyAttendance": [b.to_dict() for b in self.monthly_attendance],
        }
