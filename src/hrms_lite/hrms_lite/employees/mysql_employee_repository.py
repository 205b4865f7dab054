from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, placeholders
from .model import Employee, EmployeeDraft
from .repository import EmployeeRepository

_COLUMNS = "id, employee_id, full_name, email, department, created_at, updated_at"


def _to_employee(row: dict) -> Employee:
    return Employee(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        full_name=row["full_name"],
        email=row["email"],
        department=row["department"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _conflict_from(exc: IntegrityError, draft: EmployeeDraft) -> ConflictError:
    if "uq_employees_email" in str(exc):
        return ConflictError(
            f'Email "{draft.email}" is already registered. Please use a different email address.',
            field="email",
        )
    return ConflictError(
        f'Employee ID "{draft.employee_id}" already exists. Please use a unique Employee ID.',
        field="employeeId",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}", params)
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC, id DESC")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, id: int) -> Optional[Employee]:
        return self._fetch_one("id=%s", (int(id),))

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self._fetch_one("employee_id=%s", (employee_id,))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._fetch_one("email=%s", (email,))

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        ids = sorted(set(employee_ids))
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders(len(ids))})",
                tuple(ids),
            )
            employees = [_to_employee(r) for r in fetchall(cur)]
            return {e.employee_id: e for e in employees}

    def create(self, draft: EmployeeDraft, *, now: datetime) -> Employee:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(employee_id, full_name, email, department, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (draft.employee_id, draft.full_name, draft.email, draft.department, now, now),
                )
                new_id = int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise _conflict_from(e, draft) from e
            raise

        return Employee(
            id=new_id,
            employee_id=draft.employee_id,
            full_name=draft.full_name,
            email=draft.email,
            department=draft.department,
            created_at=now,
            updated_at=now,
        )

    def update(self, id: int, draft: EmployeeDraft, *, now: datetime) -> Optional[Employee]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET employee_id=%s, full_name=%s, email=%s, department=%s, updated_at=%s
                    WHERE id=%s
                    """,
                    (draft.employee_id, draft.full_name, draft.email, draft.department, now, int(id)),
                )
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise _conflict_from(e, draft) from e
            raise

        return self.get_by_id(id)

    def delete_by_id(self, id: int) -> Optional[Employee]:
        existing = self.get_by_id(id)
        if not existing:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(id),))
            if cur.rowcount == 0:
                return None
        return existing
