from __future__ import annotations

from typing import Any

from infrastructure.database.ops.selections import SelectionOperations


class SelectionRepository:
    """Facade for the per-device plant selection."""

    def __init__(self, backend: SelectionOperations) -> None:
        self._backend = backend

    def get(self, device_id: str) -> dict[str, Any] | None:
        return self._backend.get_device_selection(device_id)

    def save(
        self,
        *,
        device_id: str,
        plant_name: str,
        stage: str,
        owner_id: str | None,
        selection_start: str,
    ) -> bool:
        return self._backend.save_device_selection(device_id, plant_name, stage, owner_id, selection_start)
