from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import domain_failure, failure, success
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")

    @app.route(f"{prefix}/history", methods=["GET"], endpoint="history")
    def history():
        try:
            return success(container.history_service.full_history().to_dict())
        except Exception as e:
            logger.exception("Error fetching attendance history")
            return failure("Failed to fetch attendance history", status=500, error=str(e))

    @app.route(f"{prefix}/history/range", methods=["GET"], endpoint="history_range")
    def history_range():
        try:
            result = container.history_service.range_history(
                request.args.get("startDate"),
                request.args.get("endDate"),
            )
            return success(result.to_dict())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Error fetching attendance history by range")
            return failure("Failed to fetch attendance history by date range", status=500, error=str(e))

    @app.route(f"{prefix}/history/employee/<employee_id>", methods=["GET"], endpoint="history_employee")
    def history_employee(employee_id: str):
        try:
            return success(container.history_service.employee_history(employee_id).to_dict())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Error fetching employee attendance history")
            return failure("Failed to fetch employee attendance history", status=500, error=str(e))

    @app.route(f"{prefix}/history/<year>/<month>", methods=["GET"], endpoint="history_month")
    def history_month(year: str, month: str):
        try:
            return success(container.history_service.month_history(year, month).to_dict())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            logger.exception("Error fetching monthly attendance history")
            return failure("Failed to fetch monthly attendance history", status=500, error=str(e))
