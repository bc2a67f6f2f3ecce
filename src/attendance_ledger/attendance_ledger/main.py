from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .employees.controller import register as register_employees
from .logging_utils import setup_json_logging
from .payroll.controller import register as register_payroll

logger = logging.getLogger("attendance_ledger.app")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_json_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    api_config = getattr(settings, "API_CONFIG")
    regular_weekdays = frozenset(getattr(settings, "REGULAR_WEEKDAYS"))
    logger.info("starting", extra={"settings": settings_module, "store": api_config.get("base_url")})

    if container is None:
        container = build_container(api_config=api_config, regular_weekdays=regular_weekdays)

    register_error_handlers(app)
    register_attendance(app, container)
    register_employees(app, container)
    register_payroll(app, container)

    return app
