from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import domain_failure, failure, success
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")

    @app.route(f"{prefix}/employees/check-id/<employee_id>", methods=["GET"], endpoint="check_employee_id")
    def check_employee_id(employee_id: str):
        try:
            normalized, exists = container.employee_service.check_employee_id(employee_id)
            return success({"employeeId": normalized, "exists": exists})
        except Exception as e:
            logger.exception("Failed to check employee ID %s", employee_id)
            return failure("Failed to check employee ID", status=500, error=str(e))

    @app.route(f"{prefix}/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        try:
            employees = container.employee_service.list_employees()
            return success([e.to_dict() for e in employees])
        except Exception as e:
            logger.exception("Failed to fetch employees")
            return failure("Failed to fetch employees", status=500, error=str(e))

    @app.route(f"{prefix}/employees", methods=["POST"], endpoint="add_employee")
    def add_employee():
        try:
            employee = container.employee_service.add_employee(request.get_json(silent=True) or {})
            return success(employee.to_dict(), message="Employee added successfully", status=201)
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to add employee")
            return failure("Failed to add employee", status=500, error=str(e))

    @app.route(f"{prefix}/employees/<int:id>", methods=["GET"], endpoint="get_employee")
    def get_employee(id: int):
        try:
            employee = container.employee_service.get_employee(id)
            return success(employee.to_dict(), message="Employee retrieved successfully")
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to fetch employee %s", id)
            return failure("Failed to fetch employee", status=500, error=str(e))

    @app.route(f"{prefix}/employees/<int:id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(id: int):
        try:
            employee = container.employee_service.update_employee(id, request.get_json(silent=True) or {})
            return success(employee.to_dict(), message="Employee updated successfully")
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to update employee %s", id)
            return failure("Failed to update employee", status=500, error=str(e))

    @app.route(f"{prefix}/employees/<int:id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(id: int):
        try:
            employee = container.employee_service.delete_employee(id)
            return success(employee.to_dict(), message="Employee deleted successfully")
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Failed to delete employee %s", id)
            return failure("Failed to delete employee", status=500, error=str(e))
