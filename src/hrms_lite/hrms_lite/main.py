from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.logging_config import setup_logging
from .common.responses import failure, success
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import Container, build_container
from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .history.controller import register as register_history

logger = logging.getLogger(__name__)


def _register_errors(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        message = "Route not found" if e.code == 404 else (e.description or e.name)
        return failure(message, status=e.code or 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["API_PREFIX"] = str(getattr(settings, "API_PREFIX", "/api")).rstrip("/")
    app.json.sort_keys = False

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")
        container = build_container(db_config=db_config)

    @app.route(f"{app.config['API_PREFIX']}/health", methods=["GET"], endpoint="health")
    def health():
        return success({"status": "ok"}, message="HRMS Lite API is running")

    register_employees(app, container)
    register_attendance(app, container)
    register_history(app, container)
    register_analytics(app, container)
    _register_errors(app)

    return app
