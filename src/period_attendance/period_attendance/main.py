from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .absences.controller import register as register_absences
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import MAX_MINUTES_LATE
from .database.bootstrap import apply_schema, list_tables
from .people.controller import register as register_people
from .periods.controller import register as register_periods
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the JSON API.

    A prebuilt ``container`` skips database setup entirely, which is how the
    test suite runs the app over in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
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
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            max_minutes_late=int(getattr(settings, "MAX_MINUTES_LATE", MAX_MINUTES_LATE)),
        )

    app.extensions["period_attendance"] = container

    register_people(app, container)
    register_periods(app, container)
    register_attendance(app, container)
    register_absences(app, container)
    register_reports(app, container)

    return app
