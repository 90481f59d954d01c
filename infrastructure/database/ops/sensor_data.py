from __future__ import annotations

import logging
import sqlite3
from typing import Any

logger = logging.getLogger(__name__)


class SensorDataOperations:
    """Recorded sensor samples."""

    def insert_sensor_sample(
        self,
        device_id: str,
        recorded_at: str,
        temperature: float | None,
        humidity: float | None,
        ph: float | None,
        ppm: float | None,
        distance: float | None,
        water_sufficient: bool | None,
    ) -> int | None:
        try:
            db = self.get_db()
            cur = db.execute(
                """
                INSERT INTO SensorData (
                    device_id, recorded_at, temperature, humidity, ph, ppm, distance, water_sufficient
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    device_id,
                    recorded_at,
                    temperature,
                    humidity,
                    ph,
                    ppm,
                    distance,
                    None if water_sufficient is None else int(bool(water_sufficient)),
                ),
            )
            db.commit()
            return cur.lastrowid
        except sqlite3.Error as exc:
            logger.error("Failed to store sensor sample for %s: %s", device_id, exc)
            return None

    def get_latest_sensor_sample(self, device_id: str) -> dict[str, Any] | None:
        db = self.get_db()
        row = db.execute(
            """
            SELECT device_id, recorded_at, temperature, humidity, ph, ppm, distance, water_sufficient
            FROM SensorData
            WHERE device_id = ?
            ORDER BY recorded_at DESC, reading_id DESC
            LIMIT 1
            """,
            (device_id,),
        ).fetchone()
        if row is None:
            return None
        data = dict(row)
        if data["water_sufficient"] is not None:
            data["water_sufficient"] = bool(data["water_sufficient"])
        return data
