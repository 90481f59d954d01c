"""
DosingArbiter: lockout and priority arbitration for chemical dosing.

Per device scope the arbiter is either IDLE (no active busy window) or BUSY
(busy window in the future). BUSY -> IDLE is observed lazily when a tick
arrives after the deadline; there is no timer.

On an IDLE tick the guarded checks run in strict order and the first match
wins:

    1. pH below range   -> PH_UP    (reserve settle_ms)
    2. pH above range   -> PH_DOWN  (reserve settle_ms)
    3. ppm below range  -> NUTRIENT (reserve ppm_exec_ms + settle_ms)

A dose is only issued after the reservation has been written with a single
"set only if absent or expired" update, so two concurrent ticks for the same
scope can never both dose.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional

from planterbox.domain.condition_profile import ConditionProfile
from planterbox.domain.dosing import DosingDecision
from planterbox.domain.sensor_sample import SensorSample
from planterbox.enums import DosingAction, DosingOutcome
from planterbox.utils.time import to_epoch_ms, utc_now

if TYPE_CHECKING:
    from infrastructure.logging.audit import DosingAuditLogger
    from planterbox.services.protocols import BusyWindowStore

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_MS = 120_000
DEFAULT_PPM_EXEC_MS = 120_000


def _known(*values: Any) -> bool:
    for value in values:
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return True


class DosingArbiter:
    """
    Decides which single dosing action (if any) starts on a tick.

    Features:
    - Single busy window per device scope shared by every pump
    - pH correction always preempts nutrient correction
    - Nutrient A and B are started together and reserved as one sequence
    - Missing readings or bounds never trigger a dose
    """

    def __init__(
        self,
        store: "BusyWindowStore",
        *,
        settle_ms: int = DEFAULT_SETTLE_MS,
        ppm_exec_ms: Optional[int] = None,
        audit_logger: Optional["DosingAuditLogger"] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the arbiter.

        Args:
            store: Busy-window store (atomic conditional upsert)
            settle_ms: Post-dose settling interval
            ppm_exec_ms: Device runtime estimate for the A -> gap -> B sequence;
                falls back to DEFAULT_PPM_EXEC_MS when not configured
            audit_logger: Optional append-only audit of issued doses
            clock: Source of the current time when a tick does not pass one
        """
        self.store = store
        self.settle_ms = int(settle_ms)
        self.ppm_exec_ms = int(ppm_exec_ms) if ppm_exec_ms is not None else DEFAULT_PPM_EXEC_MS
        self.audit_logger = audit_logger
        self.clock = clock

    @property
    def nutrient_reservation_ms(self) -> int:
        return self.ppm_exec_ms + self.settle_ms

    def _select_action(self, ph: Optional[float], ppm: Optional[float],
                       profile: ConditionProfile) -> tuple[DosingAction, int]:
        """Ordered guarded checks; returns the first match and its reservation."""
        checks = (
            (_known(ph, profile.ph_min) and ph < profile.ph_min, DosingAction.PH_UP, self.settle_ms),
            (_known(ph, profile.ph_max) and ph > profile.ph_max, DosingAction.PH_DOWN, self.settle_ms),
            (_known(ppm, profile.ppm_min) and ppm < profile.ppm_min, DosingAction.NUTRIENT,
             self.nutrient_reservation_ms),
        )
        for fired, action, reserve_ms in checks:
            if fired:
                return action, reserve_ms
        return DosingAction.NONE, 0

    def evaluate(self, sample: SensorSample, profile: ConditionProfile,
                 now: Optional[datetime] = None) -> DosingDecision:
        """
        Run one arbitration tick for the sample's device scope.

        Raises:
            DosingStoreError: the busy-window store could not be read or written;
                no dose is issued in that case.
        """
        scope_id = sample.device_id
        now_ms = to_epoch_ms(now or self.clock())

        until_ms = self.store.get_busy(scope_id)
        if until_ms is not None and until_ms > now_ms:
            logger.debug("Dosing locked for %s: %d ms remaining", scope_id, until_ms - now_ms)
            return DosingDecision.busy(until_ms)

        action, reserve_ms = self._select_action(sample.ph, sample.ppm, profile)
        if action is DosingAction.NONE:
            return DosingDecision.idle()

        reserved_until = self.store.set_busy(scope_id, reserve_ms, now_ms)
        if reserved_until is None:
            # another tick reserved the window between our read and write
            logger.warning("Dosing reservation lost for %s; %s not issued", scope_id, action.value)
            self._audit(scope_id, action, "lost_race", sample, reserve_ms, None)
            return DosingDecision(action=DosingAction.NONE, outcome=DosingOutcome.LOST_RACE)

        logger.info(
            "Dose started for %s: %s (ph=%s, ppm=%s), locked for %d ms",
            scope_id, action.value, sample.ph, sample.ppm, reserve_ms,
        )
        self._audit(scope_id, action, "dosed", sample, reserve_ms, reserved_until)
        return DosingDecision(
            action=action,
            outcome=DosingOutcome.DOSED,
            busy_until_ms=reserved_until,
            reserved_ms=reserve_ms,
        )

    def _audit(self, scope_id: str, action: DosingAction, outcome: str, sample: SensorSample,
               reserve_ms: int, until_ms: Optional[int]) -> None:
        if self.audit_logger is None:
            return
        self.audit_logger.log_dose(
            scope_id,
            action.value,
            outcome,
            ph=sample.ph,
            ppm=sample.ppm,
            reserved_ms=reserve_ms,
            busy_until_ms=until_ms,
        )
