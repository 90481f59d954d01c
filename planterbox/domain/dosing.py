"""
Dosing Domain Objects
=====================
Busy-window state and the per-tick arbitration result.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from planterbox.enums import DosingAction, DosingOutcome


@dataclass(frozen=True)
class BusyWindow:
    """'No new dose may start before until_ms' for one device scope."""
    scope_id: str
    until_ms: int

    def is_active(self, now_ms: int) -> bool:
        # until_ms <= now is the same as no window at all
        return self.until_ms > now_ms

    def remaining_ms(self, now_ms: int) -> int:
        return max(self.until_ms - now_ms, 0)


@dataclass(frozen=True)
class DosingDecision:
    """Result of one DosingArbiter tick."""
    action: DosingAction = DosingAction.NONE
    outcome: DosingOutcome = DosingOutcome.IDLE
    busy_until_ms: Optional[int] = None
    reserved_ms: int = 0

    @property
    def ph_up(self) -> bool:
        return self.action is DosingAction.PH_UP

    @property
    def ph_down(self) -> bool:
        return self.action is DosingAction.PH_DOWN

    @property
    def nutrient(self) -> bool:
        return self.action is DosingAction.NUTRIENT

    @classmethod
    def idle(cls) -> DosingDecision:
        return cls()

    @classmethod
    def busy(cls, until_ms: int) -> DosingDecision:
        return cls(outcome=DosingOutcome.BUSY, busy_until_ms=until_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'action': self.action.value,
            'outcome': self.outcome.value,
            'busy_until_ms': self.busy_until_ms,
            'reserved_ms': self.reserved_ms,
        }
