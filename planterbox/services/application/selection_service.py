from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from infrastructure.database.repositories.selections import SelectionRepository
from planterbox.domain.condition_profile import normalize_plant_name
from planterbox.domain.exceptions import RepositoryError, ValidationError
from planterbox.enums import GrowthStage
from planterbox.utils.time import coerce_datetime, utc_now

logger = logging.getLogger(__name__)


@dataclass
class SelectionService:
    """Which plant and stage each device is currently growing."""

    repository: SelectionRepository

    def select_plant(
        self,
        device_id: str,
        plant_name: str,
        stage: Optional[str] = None,
        owner_id: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Record a new selection; unknown stages fall back to seedling."""
        if not device_id or not str(device_id).strip():
            raise ValidationError("device_id is required")
        name = normalize_plant_name(plant_name)
        if not name:
            raise ValidationError("plant_name is required")
        growth_stage = GrowthStage.coerce(stage)
        started = (now or utc_now()).isoformat()

        saved = self.repository.save(
            device_id=str(device_id).strip(),
            plant_name=name,
            stage=growth_stage.value,
            owner_id=owner_id or None,
            selection_start=started,
        )
        if not saved:
            raise RepositoryError("Failed to save plant selection", detail={"device_id": device_id})
        logger.info("Device %s now growing %s (%s)", device_id, name, growth_stage.value)
        return self.get_selection(str(device_id).strip()) or {
            "device_id": device_id,
            "plant_name": name,
            "stage": growth_stage.value,
            "owner_id": owner_id or None,
            "selection_start": started,
        }

    def get_selection(self, device_id: str) -> Optional[Dict[str, Any]]:
        record = self.repository.get(device_id)
        if not record:
            return None
        started = coerce_datetime(record.get("selection_start"))
        return {
            "device_id": record["device_id"],
            "plant_name": record["plant_name"],
            "stage": record["stage"],
            "owner_id": record.get("owner_id") or None,
            "selection_start": started.isoformat() if started else None,
        }
