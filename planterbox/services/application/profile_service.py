from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from infrastructure.database.repositories.profiles import ProfileRepository
from planterbox.domain.condition_profile import ConditionProfile, normalize_plant_name
from planterbox.domain.exceptions import NotFoundError, RepositoryError, ValidationError
from planterbox.enums import GrowthStage

logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """
    Resolves and manages ideal-condition profiles.

    Resolution order for ``find_profile``: the owner's own profile for the
    (plant, stage) pair, then the global preset, then nothing.
    """

    repository: ProfileRepository

    # --- Resolution --------------------------------------------------------------
    def find_profile(
        self, plant_name: Optional[str], stage: Optional[str], owner_id: Optional[str] = None
    ) -> Optional[ConditionProfile]:
        name = normalize_plant_name(plant_name)
        stage_key = (stage or "").strip().lower()
        if not name or not stage_key:
            return None
        row = self.repository.find_profile(name, stage_key, owner_id or None)
        if row is None:
            return None
        try:
            return ConditionProfile.from_row(row)
        except (ValueError, TypeError) as exc:
            logger.error("Stored profile %s/%s is unreadable: %s", name, stage_key, exc)
            return None

    # --- Listing -----------------------------------------------------------------
    def list_presets(self, stage: Optional[str] = None) -> List[Dict[str, Any]]:
        profiles = [ConditionProfile.from_row(row) for row in self.repository.list_presets()]
        if stage:
            profiles = [p for p in profiles if p.stage == stage.strip().lower()]
        return [p.to_dict() for p in profiles]

    def list_owned(self, owner_id: str) -> List[Dict[str, Any]]:
        if not owner_id:
            raise ValidationError("owner_id is required")
        return [ConditionProfile.from_row(row).to_dict() for row in self.repository.list_owned(owner_id)]

    # --- Mutation ----------------------------------------------------------------
    def create_profile(
        self,
        *,
        owner_id: str,
        plant_name: str,
        stage: str,
        ideal_conditions: Mapping[str, Any],
    ) -> ConditionProfile:
        """Validate and store an owner's profile, replacing any previous one for the pair."""
        if not owner_id or not str(owner_id).strip():
            raise ValidationError("owner_id is required")
        if not isinstance(ideal_conditions, Mapping):
            raise ValidationError("ideal_conditions is required")

        profile = ConditionProfile.from_conditions(
            plant_name, stage, ideal_conditions, owner_id=str(owner_id).strip()
        ).validate()

        profile_id = self.repository.save_profile(
            plant_name=profile.plant_name,
            stage=profile.stage,
            owner_id=profile.owner_id,
            ideal_conditions_json=json.dumps(profile.ideal_conditions()),
        )
        if profile_id is None:
            raise RepositoryError(
                "Failed to save profile",
                detail={"plant_name": profile.plant_name, "stage": profile.stage},
            )
        logger.info("Saved profile %s/%s for owner %s (id=%s)", profile.plant_name, profile.stage, owner_id, profile_id)
        return ConditionProfile.from_conditions(
            profile.plant_name,
            profile.stage,
            profile.ideal_conditions(),
            owner_id=profile.owner_id,
            profile_id=profile_id,
        )

    def delete_profile(self, profile_id: int, owner_id: str) -> None:
        if not owner_id:
            raise ValidationError("owner_id is required")
        if not self.repository.delete_owned(profile_id, owner_id):
            raise NotFoundError(f"Profile {profile_id} not found", detail={"profile_id": profile_id})
        logger.info("Deleted profile %s for owner %s", profile_id, owner_id)

    # --- Presets -----------------------------------------------------------------
    def seed_presets(self, presets_path: str | Path) -> int:
        """Load bundled global presets; existing rows are left untouched."""
        path = Path(presets_path)
        if not path.exists():
            logger.warning("Preset file %s not found; no global presets seeded", path)
            return 0
        with path.open(encoding="utf-8") as handle:
            document = json.load(handle)

        rows = []
        for plant_name, stages in document.items():
            for stage, conditions in stages.items():
                try:
                    GrowthStage(str(stage).strip().lower())
                except ValueError:
                    logger.warning("Skipping preset %s/%s: unknown stage", plant_name, stage)
                    continue
                profile = ConditionProfile.from_conditions(plant_name, stage, conditions)
                try:
                    profile.validate()
                except ValidationError as exc:
                    logger.warning("Skipping preset %s/%s: %s", plant_name, stage, exc)
                    continue
                rows.append((profile.plant_name, profile.stage, json.dumps(profile.ideal_conditions())))

        added = self.repository.seed_presets(rows)
        logger.info("Seeded %d of %d global presets from %s", added, len(rows), path)
        return added
