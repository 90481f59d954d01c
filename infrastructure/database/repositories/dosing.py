"""
Busy-Window Repository
======================

Persisted dosing lockout deadlines keyed by device scope.

Every read or write failure surfaces as ``DosingStoreError`` so the dosing
arbiter can tell "no window" apart from "could not look".
"""
from __future__ import annotations

import logging
import sqlite3

from infrastructure.database.ops.dosing import DosingOperations
from planterbox.domain.dosing import BusyWindow
from planterbox.domain.exceptions import DosingStoreError

logger = logging.getLogger(__name__)


class BusyWindowRepository:
    """Facade over DosingOperations satisfying the BusyWindowStore protocol."""

    def __init__(self, backend: DosingOperations) -> None:
        self._backend = backend

    def get_busy(self, scope_id: str) -> int | None:
        try:
            return self._backend.get_busy_until(scope_id)
        except sqlite3.Error as exc:
            logger.error("Busy-window read failed for %s: %s", scope_id, exc)
            raise DosingStoreError(
                f"Could not read dosing busy window for {scope_id}",
                detail={"scope_id": scope_id},
            ) from exc

    def set_busy(self, scope_id: str, duration_ms: int, now_ms: int) -> int | None:
        until_ms = int(now_ms) + int(duration_ms)
        try:
            acquired = self._backend.reserve_busy_window(scope_id, until_ms, now_ms)
        except sqlite3.Error as exc:
            logger.error("Busy-window write failed for %s: %s", scope_id, exc)
            raise DosingStoreError(
                f"Could not reserve dosing busy window for {scope_id}",
                detail={"scope_id": scope_id},
            ) from exc
        return until_ms if acquired else None

    def get_window(self, scope_id: str) -> BusyWindow | None:
        until_ms = self.get_busy(scope_id)
        return BusyWindow(scope_id, until_ms) if until_ms is not None else None
