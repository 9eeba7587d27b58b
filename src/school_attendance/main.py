from __future__ import annotations

import atexit
import logging
import os
import time
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.datetime_utils import now_utc
from .common.log import configure_logging
from .config import get_settings_module, load_settings
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import bootstrap_database
from .settings.controller import register as register_settings
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_response(response):
        started = g.pop("request_started", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, "%s %s -> %d (%.0fms)", request.method, request.path, response.status_code, duration_ms)
        return response


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code


def _register_frontend(app: Flask) -> None:
    @app.route("/", endpoint="frontend_index")
    def frontend_index():
        return app.send_static_file("index.html")


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    """Application factory.

    Without an explicit ``container`` the database is bootstrapped (when
    AUTO_INIT_DB is on) and a pooled MySQL container is built. Bootstrap
    errors propagate so a broken database never gets served.
    """
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", ""))

    frontend_dir = getattr(settings, "FRONTEND_DIR", "")
    if frontend_dir:
        app = Flask(__name__, static_folder=os.path.abspath(frontend_dir), static_url_path="")
    else:
        app = Flask(__name__, static_folder=None)

    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    CORS(app, resources={r"/api/*": {"origins": settings.FRONTEND_URL}, r"/health": {"origins": "*"}})

    if container is None:
        db_config = dict(settings.DB_CONFIG)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            try:
                bootstrap_database(
                    db_config,
                    admin_username=settings.ADMIN_USERNAME,
                    admin_password=settings.ADMIN_PASSWORD,
                    create_database=bool(getattr(settings, "AUTO_CREATE_DB", False)),
                    bcrypt_rounds=int(settings.BCRYPT_ROUNDS),
                )
            except Exception:
                logger.critical("Failed to initialize database", exc_info=True)
                raise

        container = build_container(
            db_config=db_config,
            token_secret=settings.SECRET_KEY,
            pool_size=int(getattr(settings, "DB_POOL_SIZE", 5)),
            token_ttl_hours=int(settings.TOKEN_TTL_HOURS),
            bcrypt_rounds=int(settings.BCRYPT_ROUNDS),
        )
        atexit.register(container.close)

    app.extensions["attendance_container"] = container

    _register_request_logging(app)
    _register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": now_utc().isoformat()})

    if frontend_dir:
        _register_frontend(app)

    register_auth(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_users(app, container)
    register_settings(app, container)
    register_dashboard(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        debug=app.config["DEBUG"],
        use_reloader=False,
    )
