"""PlanterBox errors.

Each class carries the HTTP status ``safe_route`` answers with. The dosing
path only cares about ``DosingStoreError``: it means the busy window could not
be read or reserved, so the engine keeps every pump off for that tick.
"""

from __future__ import annotations


class PlanterBoxError(Exception):
    """Root of every error raised by the controller.

    ``detail`` holds structured context for the server log and, for client
    errors, the response body.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


class ValidationError(PlanterBoxError):
    """Bad device payload, selection or profile."""

    http_status: int = 400


class NotFoundError(PlanterBoxError):
    """No such profile for this owner."""

    http_status: int = 404


class ServiceError(PlanterBoxError):
    http_status: int = 500


class RepositoryError(ServiceError):
    """A profile, selection or sample could not be saved."""

    http_status: int = 500


class DosingStoreError(RepositoryError):
    """Busy-window store unreachable; no dose may start."""

    http_status: int = 503


class ConfigurationError(PlanterBoxError):
    """Invalid ``PLANTERBOX_*`` setting."""

    http_status: int = 500
