from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .adjustments.controller import register as register_adjustments
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .overrides.controller import register as register_overrides
from .payroll.controller import register as register_payroll


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if app.config["DEBUG"]:
        logging.basicConfig(level=logging.DEBUG)
        print("[attendance-admin] settings=", settings_module, " backend=", api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config, editor_roles=getattr(settings, "EDITOR_ROLES", None))

    register_payroll(app, container)
    register_attendance(app, container)
    register_adjustments(app, container)
    register_overrides(app, container)
    register_employees(app, container)

    return app
