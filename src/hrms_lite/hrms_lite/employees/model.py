from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee profile.

    Note: plain data object, no DB access code here.
    """

    id: int
    employee_id: str
    full_name: str
    email: str
    department: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "fullName": self.full_name,
            "email": self.email,
            "department": self.department,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class EmployeeDraft:
    """Validated, normalized input for a create or update."""

    employee_id: str
    full_name: str
    email: str
    department: str
