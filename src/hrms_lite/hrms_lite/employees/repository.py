from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import Employee, EmployeeDraft


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    Implementations must enforce uniqueness of employee_id and email and raise
    ConflictError when a write would break it.
    """

    def list_all(self) -> Sequence[Employee]:
        """Newest first (created_at DESC)."""
        raise NotImplementedError

    def get_by_id(self, id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        """Batch lookup keyed by employee_id; unknown ids are simply absent."""
        raise NotImplementedError

    def create(self, draft: EmployeeDraft, *, now: datetime) -> Employee:
        raise NotImplementedError

    def update(self, id: int, draft: EmployeeDraft, *, now: datetime) -> Optional[Employee]:
        raise NotImplementedError

    def delete_by_id(self, id: int) -> Optional[Employee]:
        raise NotImplementedError
