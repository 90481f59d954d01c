"""
DecisionEngine: turns one sensor sample into one set of actuator commands.

Straight-line composition, no internal concurrency:

    SensorSample ──► ProfileResolver ──► (no profile) ──► safe defaults
                           │
                           ▼
           StatusClassifier · LightScheduler · MotorController · DosingArbiter
                           │
                           ▼
                ActuatorCommand + SensorStatusSet

Failure policy:
- No profile: safe defaults, UNKNOWN statuses, arbiter not consulted.
- Busy-window store failure: light, motor and statuses still computed,
  every pump off, ``dosing_error`` set.
- Anything else unexpected: fail closed, every actuator off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from planterbox.controllers.dosing_arbiter import DosingArbiter
from planterbox.controllers.light_scheduler import LightScheduler
from planterbox.controllers.motor_controller import MotorController, MotorDecision
from planterbox.domain.actuator_command import ActuatorCommand, SensorStatusSet
from planterbox.domain.condition_profile import ConditionProfile
from planterbox.domain.control import EngineSettings
from planterbox.domain.dosing import DosingDecision
from planterbox.domain.exceptions import DosingStoreError
from planterbox.domain.sensor_sample import SensorSample
from planterbox.domain.sensor_status import classify_sample
from planterbox.utils.time import utc_now

if TYPE_CHECKING:
    from infrastructure.logging.audit import DosingAuditLogger
    from planterbox.services.application.profile_service import ProfileService
    from planterbox.services.protocols import BusyWindowStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineDecision:
    """Everything the engine decided for one sample."""
    command: ActuatorCommand = field(default_factory=ActuatorCommand.safe_default)
    statuses: SensorStatusSet = field(default_factory=SensorStatusSet.unknown)
    profile: Optional[ConditionProfile] = None
    motor: Optional[MotorDecision] = None
    dosing: DosingDecision = field(default_factory=DosingDecision.idle)
    dosing_error: bool = False
    fail_closed: bool = False

    @classmethod
    def safe_default(cls, *, fail_closed: bool = False) -> EngineDecision:
        return cls(fail_closed=fail_closed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commands": self.command.to_dict(),
            "sensor_status": self.statuses.to_dict(),
            "motor": self.motor.to_dict() if self.motor else None,
            "dosing": self.dosing.to_dict(),
            "ideal_conditions": self.profile.ideal_conditions() if self.profile else None,
            "dosing_error": self.dosing_error,
            "fail_closed": self.fail_closed,
        }


class DecisionEngine:
    """
    Orchestrates profile resolution, status classification, lighting, light
    height and dosing for each incoming sample.
    """

    def __init__(
        self,
        profile_resolver: "ProfileService",
        busy_store: "BusyWindowStore",
        settings: EngineSettings | None = None,
        *,
        audit_logger: Optional["DosingAuditLogger"] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings or EngineSettings()
        self.profile_resolver = profile_resolver
        self.clock = clock
        self.light_scheduler = LightScheduler(
            start_hour=self.settings.light_start_hour,
            ramp_minutes=self.settings.ramp_minutes,
            timezone=self.settings.timezone,
        )
        self.motor_controller = MotorController(self.settings.light_distance_tolerance)
        self.dosing_arbiter = DosingArbiter(
            busy_store,
            settle_ms=self.settings.settle_ms,
            ppm_exec_ms=self.settings.ppm_exec_ms_default,
            audit_logger=audit_logger,
            clock=clock,
        )

    def decide(
        self,
        sample: SensorSample,
        plant_name: Optional[str],
        stage: Optional[str],
        owner_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> EngineDecision:
        """Produce the actuator commands for *sample*; never raises."""
        try:
            return self._decide(sample, plant_name, stage, owner_id, now or self.clock())
        except Exception as exc:
            logger.exception("Decision engine failed for device %s; failing closed: %s", sample.device_id, exc)
            return EngineDecision.safe_default(fail_closed=True)

    def _decide(
        self,
        sample: SensorSample,
        plant_name: Optional[str],
        stage: Optional[str],
        owner_id: Optional[str],
        now: datetime,
    ) -> EngineDecision:
        profile = None
        if plant_name and stage:
            profile = self.profile_resolver.find_profile(plant_name, stage, owner_id)
        if profile is None:
            logger.info("No profile for %s/%s (owner=%s); holding safe defaults", plant_name, stage, owner_id)
            return EngineDecision.safe_default()

        statuses = classify_sample(sample, profile)
        brightness = self.light_scheduler.brightness(profile.light_hours_per_day, now)
        motor = self.motor_controller.decide(
            sample.distance, profile.target_light_distance, profile.light_distance_tolerance
        )

        dosing_error = False
        try:
            dosing = self.dosing_arbiter.evaluate(sample, profile, now)
        except DosingStoreError as exc:
            logger.error("Busy-window store unavailable for %s; dosing suppressed: %s", sample.device_id, exc)
            dosing = DosingDecision.idle()
            dosing_error = True

        command = ActuatorCommand(
            light_brightness=brightness,
            light_motor=motor.command,
            ph_up=dosing.ph_up,
            ph_down=dosing.ph_down,
            nutrient_a=dosing.nutrient,
            nutrient_b=dosing.nutrient,
        )
        logger.debug(
            "Decision for %s: light=%d motor=%s dosing=%s/%s",
            sample.device_id, brightness, motor.command.value, dosing.action.value, dosing.outcome.value,
        )
        return EngineDecision(
            command=command,
            statuses=statuses,
            profile=profile,
            motor=motor,
            dosing=dosing,
            dosing_error=dosing_error,
        )
