from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import domain_failure, failure, success
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")

    @app.route(f"{prefix}/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        try:
            record = container.attendance_service.mark(request.get_json(silent=True) or {})
            return success(record.to_dict(), message="Attendance marked successfully", status=201)
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to mark attendance")
            return failure("Failed to mark attendance", status=500, error=str(e))

    @app.route(f"{prefix}/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        try:
            records = container.attendance_service.list_attendance()
            return success([r.to_dict() for r in records])
        except Exception as e:
            logger.exception("Failed to fetch attendance records")
            return failure("Failed to fetch attendance records", status=500, error=str(e))

    @app.route(f"{prefix}/attendance/employee/<employee_id>", methods=["GET"], endpoint="employee_attendance")
    def employee_attendance(employee_id: str):
        try:
            records = container.attendance_service.list_employee_attendance(employee_id)
            return success([r.to_dict() for r in records])
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to fetch attendance records for %s", employee_id)
            return failure("Failed to fetch attendance records", status=500, error=str(e))
