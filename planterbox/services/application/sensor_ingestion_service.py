"""
Sensor Ingestion Service
========================

Boundary between device traffic and the decision engine.

POST path (``ingest``): validate payload -> look up the device's selection ->
store the sample -> run the engine -> return the command for the device.
Devices without a selection get passive defaults and nothing is stored.

GET path (``latest_status``): read-only view of the newest sample against the
selected profile. It never reserves a dosing window and never actuates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from infrastructure.database.repositories.dosing import BusyWindowRepository
from infrastructure.database.repositories.sensor_data import SensorDataRepository
from planterbox.controllers.decision_engine import DecisionEngine, EngineDecision
from planterbox.domain.actuator_command import ActuatorCommand, SensorStatusSet
from planterbox.domain.exceptions import DosingStoreError, ValidationError
from planterbox.domain.sensor_sample import SensorSample
from planterbox.domain.sensor_status import classify_sample
from planterbox.schemas.sensordata import SensorReadingPayload
from planterbox.services.application.profile_service import ProfileService
from planterbox.services.application.selection_service import SelectionService
from planterbox.utils.time import from_epoch_ms, to_epoch_ms, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """What one POSTed sample produced."""
    device_id: str
    stored: bool
    selection: Optional[Dict[str, Any]]
    decision: EngineDecision = field(default_factory=EngineDecision.safe_default)
    sample: Optional[SensorSample] = None

    @property
    def warnings(self) -> list[str]:
        notes = []
        if self.selection is None:
            notes.append("No plant selected for this device; actuators held at safe defaults")
        elif self.decision.profile is None and not self.decision.fail_closed:
            notes.append("No profile found for the selected plant and stage; actuators held at safe defaults")
        if self.decision.dosing_error:
            notes.append("Dosing store unavailable; pumps held off")
        if self.decision.fail_closed:
            notes.append("Decision failed; all actuators off")
        return notes

    def to_dict(self, *, lockout_ms: Optional[int] = None) -> Dict[str, Any]:
        data = self.decision.to_dict()
        data.update(
            {
                "device_id": self.device_id,
                "stored": self.stored,
                "selection": self.selection,
                "sensor_data": self.sample.to_dict() if self.sample else None,
                "device_command": self.decision.command.to_device_payload(lockout_ms=lockout_ms),
                "warnings": self.warnings,
            }
        )
        return data


@dataclass
class SensorIngestionService:
    """Runs the decision engine for every sample a controller posts."""

    engine: DecisionEngine
    selection_service: SelectionService
    profile_service: ProfileService
    sensor_repo: SensorDataRepository
    busy_repo: BusyWindowRepository

    @property
    def lockout_ms(self) -> int:
        # Echoed to the device for display; the server stays the lockout authority.
        return self.engine.settings.settle_ms

    def ingest(
        self,
        device_id: Optional[str],
        payload: Union[Mapping[str, Any], SensorReadingPayload],
        *,
        now: Optional[datetime] = None,
    ) -> IngestionResult:
        reading = (
            payload if isinstance(payload, SensorReadingPayload) else SensorReadingPayload.model_validate(payload)
        )
        device = (device_id or reading.device_id or "").strip()
        if not device:
            raise ValidationError("device_id is required")

        selection = self.selection_service.get_selection(device)
        if selection is None:
            logger.info("Sample from %s ignored: no plant selected", device)
            return IngestionResult(device_id=device, stored=False, selection=None)

        tick = now or utc_now()
        sample = SensorSample.from_payload(device, reading.readings(), timestamp=tick)
        stored = self.sensor_repo.record(sample) is not None
        if not stored:
            logger.warning("Sample from %s could not be stored; continuing with the decision", device)

        decision = self.engine.decide(
            sample,
            selection["plant_name"],
            selection["stage"],
            owner_id=selection.get("owner_id"),
            now=tick,
        )
        return IngestionResult(
            device_id=device,
            stored=stored,
            selection=selection,
            decision=decision,
            sample=sample,
        )

    def latest_status(self, device_id: str, *, now: Optional[datetime] = None) -> Dict[str, Any]:
        device = (device_id or "").strip()
        if not device:
            raise ValidationError("device_id is required")

        selection = self.selection_service.get_selection(device)
        profile = None
        if selection is not None:
            profile = self.profile_service.find_profile(
                selection["plant_name"], selection["stage"], selection.get("owner_id")
            )
        sample = self.sensor_repo.latest(device)
        statuses = classify_sample(sample, profile) if sample is not None else SensorStatusSet.unknown()

        busy_until_ms = None
        remaining_ms = 0
        try:
            window = self.busy_repo.get_window(device)
            now_ms = to_epoch_ms(now or utc_now())
            if window is not None and window.is_active(now_ms):
                busy_until_ms = window.until_ms
                remaining_ms = window.remaining_ms(now_ms)
        except DosingStoreError as exc:
            logger.warning("Busy window for %s unavailable in status view: %s", device, exc)

        return {
            "device_id": device,
            "selection": selection,
            "sensor_data": sample.to_dict() if sample else None,
            "sensor_status": statuses.to_dict(),
            "ideal_conditions": profile.ideal_conditions() if profile else None,
            "commands": ActuatorCommand.safe_default().to_device_payload(),
            "dosing_busy_until_ms": busy_until_ms,
            "dosing_busy_until": from_epoch_ms(busy_until_ms).isoformat() if busy_until_ms is not None else None,
            "dosing_remaining_ms": remaining_ms,
        }
