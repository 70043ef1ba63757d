from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logger import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_ACCESS_PASSWORD
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .followups.controller import register as register_followups
from .members.controller import register as register_members
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .units.controller import register as register_units

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"))

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
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")

        container = build_container(
            db_config=db_config,
            default_password=getattr(settings, "DEFAULT_ACCESS_PASSWORD", DEFAULT_ACCESS_PASSWORD),
        )

    app.extensions["container"] = container

    register_settings(app, container)
    register_units(app, container)
    register_members(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_followups(app, container)

    return app
