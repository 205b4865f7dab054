from __future__ import annotations

import logging

from flask import Flask

from ..common.responses import failure, success
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")

    @app.route(f"{prefix}/analytics/summary", methods=["GET"], endpoint="analytics_summary")
    def analytics_summary():
        try:
            summary = container.analytics_service.build_summary()
            return success(summary.to_dict())
        except Exception as e:
            logger.exception("Failed to fetch analytics")
            return failure("Failed to fetch analytics", status=500, error=str(e))
