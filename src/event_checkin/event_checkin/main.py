from __future__ import annotations

import importlib
import logging
from types import SimpleNamespace
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .container import build_container
from .core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .core.logging import setup_logging
from .participants.controller import register as register_participants
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def _load_settings(overrides: Optional[dict]) -> Any:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    values = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    values.update(overrides or {})
    values["SETTINGS_MODULE"] = settings_module
    return SimpleNamespace(**values)


def _register_error_handlers(app: Flask) -> None:
    def _error(status: int):
        def handler(e):
            return jsonify({"success": False, "message": str(e)}), status

        return handler

    app.register_error_handler(ValidationError, _error(400))
    app.register_error_handler(AuthenticationError, _error(401))
    app.register_error_handler(AuthorizationError, _error(403))
    app.register_error_handler(NotFoundError, _error(404))


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(overrides)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SCANNING_OPEN"] = bool(getattr(settings, "SCANNING_OPEN", True))
    app.config["REGISTRATION_OPEN"] = bool(getattr(settings, "REGISTRATION_OPEN", True))
    app.json.ensure_ascii = False

    logger.info(
        "starting event check-in (settings=%s, store=%s)",
        settings.SETTINGS_MODULE,
        getattr(settings, "PARTICIPANT_STORE", "memory"),
    )

    container = build_container(settings=settings)
    app.extensions["event_checkin"] = container

    _register_error_handlers(app)
    register_admin(app, container)
    register_participants(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
