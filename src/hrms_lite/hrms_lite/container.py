from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .analytics.service import AnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .history.service import HistoryService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    analytics_service: AnalyticsService
    history_service: HistoryService


def wire_container(
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    *,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo, clock=clock),
        attendance_service=AttendanceService(attendance_repo, employees_repo, clock=clock),
        analytics_service=AnalyticsService(employees_repo, attendance_repo, clock=clock),
        history_service=HistoryService(attendance_repo, employees_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(MySQLEmployeeRepository(conn), MySQLAttendanceRepository(conn))
