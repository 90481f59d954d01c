from __future__ import annotations

from typing import Any, Iterable

from infrastructure.database.ops.profiles import ProfileOperations


class ProfileRepository:
    """Facade providing typed access to ideal-condition profiles."""

    def __init__(self, backend: ProfileOperations) -> None:
        self._backend = backend

    def find_profile(
        self, plant_name: str, stage: str, owner_id: str | None = None
    ) -> dict[str, Any] | None:
        return self._backend.get_condition_profile(plant_name, stage, owner_id)

    def list_presets(self) -> list[dict[str, Any]]:
        return self._backend.list_condition_profiles(None)

    def list_owned(self, owner_id: str) -> list[dict[str, Any]]:
        return self._backend.list_condition_profiles(owner_id)

    def save_profile(
        self,
        *,
        plant_name: str,
        stage: str,
        owner_id: str | None,
        ideal_conditions_json: str,
    ) -> int | None:
        return self._backend.upsert_condition_profile(plant_name, stage, owner_id, ideal_conditions_json)

    def seed_presets(self, presets: Iterable[tuple[str, str, str]]) -> int:
        return self._backend.seed_condition_profiles(presets)

    def delete_owned(self, profile_id: int, owner_id: str) -> bool:
        return self._backend.delete_condition_profile(profile_id, owner_id)
