from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .absences.controller import register as register_absences
from .config import get_settings_module
from .container import Container, build_container
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .probation.scheduler import ProbationScheduler
from .team_calendar.controller import register as register_calendar

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a ready container skips every database step (used by the tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "starting hr portal",
        extra={
            "settings": settings_module,
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        },
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready", extra={"tables": len(list_tables(db_config))})

        container = build_container(
            db_config=db_config,
            upload_dir=getattr(settings, "UPLOAD_DIR", "var/uploads"),
            upload_base_url=getattr(settings, "UPLOAD_BASE_URL", "/uploads"),
            default_entitlement=int(getattr(settings, "DEFAULT_VACATION_ENTITLEMENT", 30)),
        )

    register_absences(app, container)
    register_calendar(app, container)

    scheduler = ProbationScheduler(
        container.probation_scanner,
        company_id=getattr(settings, "PROBATION_CHECK_COMPANY_ID", ""),
        interval_seconds=getattr(settings, "PROBATION_CHECK_INTERVAL_SECONDS", 3600),
    )
    app.extensions["probation_scheduler"] = scheduler
    if bool(getattr(settings, "PROBATION_CHECK_ENABLED", False)):
        scheduler.start()

    return app
