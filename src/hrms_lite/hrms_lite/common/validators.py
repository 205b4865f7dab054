from __future__ import annotations

import re
from datetime import date
from typing import Any

from ..core.exceptions import ValidationError

EMPLOYEE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{2,}$")
EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_fields(payload: dict[str, Any], *names: str) -> None:
    """All named fields must be present and non-blank."""
    if not isinstance(payload, dict):
        raise ValidationError(f"All fields are required: {', '.join(names)}")
    missing = [n for n in names if payload.get(n) in (None, "") or not str(payload.get(n)).strip()]
    if missing:
        raise ValidationError(f"All fields are required: {', '.join(names)}")


def require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def normalize_employee_id(value: str) -> str:
    return str(value).strip().upper()


def validate_employee_id(value: str) -> str:
    employee_id = normalize_employee_id(require_text(value, "Employee ID"))
    if not EMPLOYEE_ID_RE.match(employee_id):
        raise ValidationError(
            "Employee ID must be at least 2 characters and contain only letters, numbers, hyphens, and underscores"
        )
    return employee_id


def validate_email(value: str) -> str:
    email = str(value).strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format. Please provide a valid email address (e.g., user@example.com)")
    return email


def require_not_future(work_date: date, today: date) -> date:
    if work_date > today:
        raise ValidationError("Cannot mark attendance for a future date")
    return work_date
