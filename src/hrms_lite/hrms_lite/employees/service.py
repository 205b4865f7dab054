from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import (
    normalize_employee_id,
    require_fields,
    require_min_length,
    validate_email,
    validate_employee_id,
)
from ..core.exceptions import ConflictError, NotFoundError
from .model import Employee, EmployeeDraft
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

EMPLOYEE_FIELDS = ("employeeId", "fullName", "email", "department")


class EmployeeService:
    """Use case: manage the employee directory."""

    def __init__(self, employees: EmployeeRepository, *, clock: Callable[[], datetime] = now_local):
        self._employees = employees
        self._clock = clock

    @staticmethod
    def _draft(payload: dict) -> EmployeeDraft:
        require_fields(payload, *EMPLOYEE_FIELDS)
        full_name = require_min_length(str(payload["fullName"]).strip(), "Full name", 2)
        return EmployeeDraft(
            employee_id=validate_employee_id(payload["employeeId"]),
            full_name=full_name,
            email=validate_email(payload["email"]),
            department=str(payload["department"]).strip(),
        )

    def _ensure_unique(self, draft: EmployeeDraft, *, exclude_id: Optional[int] = None) -> None:
        by_id = self._employees.get_by_employee_id(draft.employee_id)
        if by_id and by_id.id != exclude_id:
            raise ConflictError(
                f'Employee ID "{draft.employee_id}" already exists. Please use a unique Employee ID.',
                field="employeeId",
            )

        by_email = self._employees.get_by_email(draft.email)
        if by_email and by_email.id != exclude_id:
            raise ConflictError(
                f'Email "{draft.email}" is already registered. Please use a different email address.',
                field="email",
            )

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, id: int) -> Employee:
        employee = self._employees.get_by_id(id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def check_employee_id(self, employee_id: str) -> tuple[str, bool]:
        normalized = normalize_employee_id(employee_id)
        return normalized, self._employees.get_by_employee_id(normalized) is not None

    def add_employee(self, payload: dict) -> Employee:
        draft = self._draft(payload)
        self._ensure_unique(draft)

        employee = self._employees.create(draft, now=self._clock())
        logger.info("Employee %s added (%s)", employee.employee_id, employee.department)
        return employee

    def update_employee(self, id: int, payload: dict) -> Employee:
        current = self.get_employee(id)
        draft = self._draft(payload)
        self._ensure_unique(draft, exclude_id=current.id)

        updated = self._employees.update(current.id, draft, now=self._clock())
        if not updated:
            raise NotFoundError("Employee not found")
        logger.info("Employee %s updated", updated.employee_id)
        return updated

    def delete_employee(self, id: int) -> Employee:
        """Attendance rows of the employee are kept; they show up as orphans in history."""
        deleted = self._employees.delete_by_id(id)
        if not deleted:
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted", deleted.employee_id)
        return deleted
