from __future__ import annotations

import logging
import sqlite3
from typing import Any

from planterbox.utils.time import iso_now

logger = logging.getLogger(__name__)


class SelectionOperations:
    """Per-device plant/stage selection."""

    def save_device_selection(
        self,
        device_id: str,
        plant_name: str,
        stage: str,
        owner_id: str | None,
        selection_start: str,
    ) -> bool:
        try:
            db = self.get_db()
            db.execute(
                """
                INSERT INTO DeviceSelections (
                    device_id, plant_name, stage, owner_id, selection_start, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(device_id) DO UPDATE SET
                    plant_name = excluded.plant_name,
                    stage = excluded.stage,
                    owner_id = excluded.owner_id,
                    selection_start = excluded.selection_start,
                    updated_at = excluded.updated_at
                """,
                (device_id, plant_name, stage, owner_id, selection_start, iso_now()),
            )
            db.commit()
            return True
        except sqlite3.Error as exc:
            logger.error("Failed to save selection for device %s: %s", device_id, exc)
            return False

    def get_device_selection(self, device_id: str) -> dict[str, Any] | None:
        db = self.get_db()
        row = db.execute(
            """
            SELECT device_id, plant_name, stage, owner_id, selection_start
            FROM DeviceSelections
            WHERE device_id = ?
            """,
            (device_id,),
        ).fetchone()
        return dict(row) if row else None
