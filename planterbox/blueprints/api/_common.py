"""
Blueprint Common Utilities
==========================

Shared helpers for the API blueprints: container access, request parsing
and the standard response wrappers.
"""
from __future__ import annotations

import logging

from flask import current_app, request

from planterbox.utils.http import error_response, success_response

logger = logging.getLogger("api._common")

DEVICE_ID_HEADER = "X-Device-Id"


def get_container():
    """
    Get the service container from Flask app config.

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_json() -> dict:
    """JSON request body, or an empty dict when missing or not an object."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def get_device_id(body: dict | None = None) -> str | None:
    """Device id from the body, the X-Device-Id header, or the query string."""
    for candidate in (
        (body or {}).get("device_id"),
        request.headers.get(DEVICE_ID_HEADER),
        request.args.get("device_id"),
    ):
        if candidate is not None and str(candidate).strip():
            return str(candidate).strip()
    return None


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """Flask Response with format: {"ok": true, "data": ..., "error": null}"""
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | list | None = None):
    """Flask Response with format: {"ok": false, "data": null, "error": {...}}"""
    return error_response(message, status, details=details)


def get_ingestion_service():
    return get_container().ingestion_service


def get_selection_service():
    return get_container().selection_service


def get_profile_service():
    return get_container().profile_service
