from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from config import get_settings_module

from .assets.controller import register as register_assets
from .attendance.controller import register as register_attendance
from .attendance.policy import AttendancePolicy
from .auth.controller import register as register_auth
from .auth.tokens import TokenCodec
from .container import Container, build_container
from .core.exceptions import DomainError
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .leaves.policy import LeavePolicy
from .reports.controller import register as register_reports
from .tasks.controller import register as register_tasks

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"message": str(e)}), e.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return jsonify({"message": "API endpoint not found"}), 404

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(e):
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500


def container_from_settings(settings) -> Container:
    db_config = getattr(settings, "DB_CONFIG")

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)

    return build_container(
        db_config=db_config,
        token_codec=TokenCodec(
            secret_key=getattr(settings, "SECRET_KEY"),
            algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
            expire_minutes=int(getattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24)),
        ),
        attendance_policy=AttendancePolicy(
            work_start=getattr(settings, "WORK_START"),
            work_end=getattr(settings, "WORK_END"),
            flag_early_leave=bool(getattr(settings, "FLAG_EARLY_LEAVE", False)),
        ),
        leave_policy=LeavePolicy(entitlements=getattr(settings, "LEAVE_ENTITLEMENTS")),
    )


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = container_from_settings(settings)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK"})

    register_auth(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_tasks(app, container)
    register_assets(app, container)
    register_reports(app, container)
    register_dashboard(app, container)
    register_error_handlers(app)

    return app
