from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .history.controller import register as register_history
from .time_tracking.controller import register as register_time_tracking

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        container = build_container(
            db_config=getattr(settings, "DB_CONFIG"),
            refresh_interval_seconds=int(getattr(settings, "REFRESH_INTERVAL_SECONDS", 60)),
            target_week_hours=int(getattr(settings, "TARGET_WEEK_HOURS", 40)),
            history_days=int(getattr(settings, "HISTORY_DAYS", 30)),
        )
        logger.info("settings=%s db=%s", settings_module, container.conn.target)
    else:
        logger.info("settings=%s (injected container)", settings_module)

    register_time_tracking(app, container)
    register_history(app, container)

    return app
