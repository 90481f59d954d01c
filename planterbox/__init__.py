from __future__ import annotations

import atexit
import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from planterbox.config import load_config, setup_logging


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key.lower() if key != "DEBUG" else key, value)
        # Re-run validation on the overridden values
        config.__post_init__()

    setup_logging(debug=config.DEBUG, log_dir=config.log_dir, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from planterbox.blueprints.api import plants_api, sensordata_api
    from planterbox.services.container import ServiceContainer

    container = ServiceContainer.build(config)
    flask_app.config["CONTAINER"] = container
    # Per-thread connections are released when each request context ends.
    flask_app.teardown_appcontext(container.database.close_db)
    atexit.register(container.shutdown)

    # Global JSON error handler for anything that escapes safe_route.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        from planterbox.domain.exceptions import PlanterBoxError
        from planterbox.utils.http import error_response, safe_error

        if not request.path.startswith("/api/"):
            if isinstance(exc, HTTPException):
                return exc
            return safe_error(exc, 500, context="unhandled")

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, PlanterBoxError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    flask_app.register_blueprint(sensordata_api, url_prefix="/api/sensordata")
    flask_app.register_blueprint(plants_api, url_prefix="/api/plants")

    for bp_name in flask_app.blueprints:
        logging.info("Registered blueprint: %s", bp_name)

    logging.getLogger(__name__).info("PlanterBox application initialized (env=%s).", config.environment)
    return flask_app
