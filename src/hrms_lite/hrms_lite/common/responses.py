"""JSON envelope helpers shared by every controller.

Every response body is ``{"success": bool, "data": ..., "message"?: str, "error"?: str}``.
"""
from __future__ import annotations

from typing import Any, Optional

from flask import jsonify

from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError


def success(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body["data"] = data
    return jsonify(body), status


def failure(message: str, *, status: int, error: Optional[str] = None, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    body.update(extra)
    return jsonify(body), status


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, ValidationError):
        return 400
    return 422


def domain_failure(exc: DomainError):
    extra: dict[str, Any] = {}
    if isinstance(exc, ConflictError) and exc.field:
        extra["field"] = exc.field
    return failure(str(exc), status=status_for(exc), **extra)
