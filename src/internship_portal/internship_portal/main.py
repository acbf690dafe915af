from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_INVITE_TTL_HOURS, DEFAULT_SESSION_DAYS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_institute, list_tables
from .departments.controller import register as register_departments
from .internships.controller import register as register_internships
from .mentors.controller import register as register_mentors
from .notes.controller import register as register_notes
from .settings import get_settings_module
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger("internship_portal")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            ensure_demo_institute(db_config)

        container = build_container(
            db_config=db_config,
            smtp_config=getattr(settings, "SMTP_CONFIG", {}),
            invite_base_url=getattr(settings, "INVITE_BASE_URL", ""),
            invite_ttl_hours=int(getattr(settings, "INVITE_TTL_HOURS", DEFAULT_INVITE_TTL_HOURS)),
        )

    app.extensions["container"] = container

    register_users(app, container)
    register_dashboard(app, container)
    register_departments(app, container)
    register_mentors(app, container)
    register_students(app, container)
    register_internships(app, container)
    register_attendance(app, container)
    register_notes(app, container)

    return app
