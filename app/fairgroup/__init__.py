import logging
import os
import uuid
from datetime import timedelta

from flask import Flask, g
from dotenv import load_dotenv

from app.fairgroup.config import DEFAULT_SECRET_KEY, load_config
from app.fairgroup.db import init_db, teardown_db_session
from app.fairgroup.errors import register_error_handlers
from app.fairgroup.security import init_security
from app.fairgroup.routes import bp as routes_bp
from app.fairgroup.auth import bp as auth_bp
from app.fairgroup.modules.members.api import bp as members_bp
from app.fairgroup.modules.subcommittees.api import bp as subcommittees_bp
from app.fairgroup.modules.events.api import bp as events_bp
from app.fairgroup.modules.attendance.api import bp as attendance_bp
from app.fairgroup.modules.resources.api import bp as resources_bp
from app.fairgroup.modules.public.api import bp as public_bp


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=app.config["SESSION_LIFETIME_DAYS"])
    app.json.sort_keys = False

    app.logger.setLevel(app.config["LOG_LEVEL"])
    logging.getLogger("app.fairgroup").setLevel(app.config["LOG_LEVEL"])

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", DEFAULT_SECRET_KEY):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    @app.before_request
    def _assign_request_id():
        g.request_id = uuid.uuid4().hex

    @app.after_request
    def _echo_request_id(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers["X-Request-ID"] = rid
        return response

    init_security(app)
    register_error_handlers(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(members_bp, url_prefix="/api/members")
    app.register_blueprint(subcommittees_bp, url_prefix="/api/subcommittees")
    app.register_blueprint(events_bp, url_prefix="/api/events")
    app.register_blueprint(attendance_bp, url_prefix="/api/attendance")
    app.register_blueprint(resources_bp, url_prefix="/api/resources")
    app.register_blueprint(public_bp, url_prefix="/api/public")

    app.teardown_appcontext(teardown_db_session)

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
