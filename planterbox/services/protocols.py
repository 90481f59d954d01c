"""
Service protocols (structural typing interfaces).

The decision engine depends on these store surfaces rather than on the
concrete SQLite repositories.

Usage
-----
In a consumer::

    from __future__ import annotations
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from planterbox.services.protocols import BusyWindowStore

    class DosingArbiter:
        def __init__(self, store: "BusyWindowStore", ...): ...

At runtime ``BusyWindowRepository`` and ``ProfileRepository`` already satisfy
these protocols via structural subtyping.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class BusyWindowStore(Protocol):
    """Persisted per-scope dosing lockout deadline (epoch milliseconds)."""

    def get_busy(self, scope_id: str) -> Optional[int]:
        """Return the stored deadline for *scope_id*, or ``None`` when absent.

        Raises ``DosingStoreError`` when the store cannot be read.
        """
        ...

    def set_busy(self, scope_id: str, duration_ms: int, now_ms: int) -> Optional[int]:
        """Atomically reserve ``[now_ms, now_ms + duration_ms)`` for *scope_id*.

        The reservation succeeds only if no window exists or the existing one
        has expired (``until_ms <= now_ms``). Returns the new deadline, or
        ``None`` when an active window is already held. Raises
        ``DosingStoreError`` when the store cannot be written.
        """
        ...


@runtime_checkable
class ProfileStore(Protocol):
    """Read access to ideal-condition profile documents."""

    def find_profile(
        self, plant_name: str, stage: str, owner_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Owner-specific profile if one exists, else the global preset, else ``None``."""
        ...
