from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT id, employee_id, work_date, status, created_at, updated_at
    FROM attendance_records
"""
_NEWEST_FIRST = "ORDER BY work_date DESC, created_at DESC, id DESC"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        work_date=row["work_date"],
        status=AttendanceStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str = "", params: tuple = ()) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} {_NEWEST_FIRST}", params)
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._query()

    def list_between(self, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        return self._query("WHERE work_date BETWEEN %s AND %s", (start, end))

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        return self._query("WHERE employee_id=%s", (employee_id,))

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        now: datetime,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, status, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, status.value, now, now),
                )
                new_id = int(cur.lastrowid)
        except IntegrityError as e:
            # Lost a race against a concurrent mark for the same day.
            if is_duplicate_key(e):
                raise ConflictError("Attendance already exists for this date") from e
            raise

        return AttendanceRecord(
            id=new_id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            created_at=now,
            updated_at=now,
        )
