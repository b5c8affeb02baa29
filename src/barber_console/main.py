from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, jsonify, redirect, request, url_for

from .settings import get_settings_module

from .container import Container, build_container
from .common.web import current_session, register_template_helpers, session_admin_token
from .core.exceptions import SessionExpiredError
from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .catalog.controller import register as register_catalog
from .clients.controller import register as register_clients
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _wants_json() -> bool:
    return request.path.endswith("/dados") or request.accept_mimetypes.best == "application/json"


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["POLL_INTERVAL_SECONDS"] = int(getattr(settings, "POLL_INTERVAL_SECONDS", 5))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config, token_provider=session_admin_token)

    @app.errorhandler(SessionExpiredError)
    def handle_session_expired(e: SessionExpiredError):
        current_session().clear_on_unauthorized()
        logger.info("Admin session expired on %s", request.path)
        if _wants_json():
            return jsonify({"message": str(e), "redirect": url_for("admin_login")}), 401
        flash("Sessão expirada. Faça login novamente.", "warning")
        return redirect(url_for("admin_login"))

    register_template_helpers(app)
    register_clients(app, container)
    register_admins(app, container)
    register_attendance(app, container)
    register_catalog(app, container)
    register_reports(app, container)

    return app
