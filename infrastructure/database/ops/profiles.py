from __future__ import annotations

import logging
import sqlite3
from typing import Any, Iterable

from planterbox.utils.time import iso_now

logger = logging.getLogger(__name__)

GLOBAL_OWNER = ""


class ProfileOperations:
    """ConditionProfiles CRUD helpers.

    Global presets are stored with ``owner_id = ''`` so the
    (plant_name, stage, owner_id) unique index also covers them.
    """

    def get_condition_profile(
        self, plant_name: str, stage: str, owner_id: str | None = None
    ) -> dict[str, Any] | None:
        """Owner's profile when present, otherwise the global preset."""
        db = self.get_db()
        row = db.execute(
            """
            SELECT profile_id, plant_name, stage, owner_id, ideal_conditions
            FROM ConditionProfiles
            WHERE plant_name = ? AND stage = ? AND owner_id IN (?, ?)
            ORDER BY CASE WHEN owner_id = ? THEN 1 ELSE 0 END
            LIMIT 1
            """,
            (plant_name, stage, owner_id or GLOBAL_OWNER, GLOBAL_OWNER, GLOBAL_OWNER),
        ).fetchone()
        return dict(row) if row else None

    def list_condition_profiles(self, owner_id: str | None = None) -> list[dict[str, Any]]:
        db = self.get_db()
        rows = db.execute(
            """
            SELECT profile_id, plant_name, stage, owner_id, ideal_conditions
            FROM ConditionProfiles
            WHERE owner_id = ?
            ORDER BY plant_name, stage
            """,
            (owner_id or GLOBAL_OWNER,),
        ).fetchall()
        return [dict(row) for row in rows]

    def upsert_condition_profile(
        self,
        plant_name: str,
        stage: str,
        owner_id: str | None,
        ideal_conditions_json: str,
    ) -> int | None:
        try:
            db = self.get_db()
            now = iso_now()
            db.execute(
                """
                INSERT INTO ConditionProfiles (
                    plant_name, stage, owner_id, ideal_conditions, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(plant_name, stage, owner_id) DO UPDATE SET
                    ideal_conditions = excluded.ideal_conditions,
                    updated_at = excluded.updated_at
                """,
                (plant_name, stage, owner_id or GLOBAL_OWNER, ideal_conditions_json, now, now),
            )
            db.commit()
            row = db.execute(
                "SELECT profile_id FROM ConditionProfiles WHERE plant_name = ? AND stage = ? AND owner_id = ?",
                (plant_name, stage, owner_id or GLOBAL_OWNER),
            ).fetchone()
            return int(row["profile_id"]) if row else None
        except sqlite3.Error as exc:
            logger.error("Failed to save profile %s/%s for owner %s: %s", plant_name, stage, owner_id, exc)
            return None

    def seed_condition_profiles(self, presets: Iterable[tuple[str, str, str]]) -> int:
        """Insert global presets that are not stored yet; returns rows added."""
        db = self.get_db()
        now = iso_now()
        added = 0
        for plant_name, stage, ideal_conditions_json in presets:
            cur = db.execute(
                """
                INSERT OR IGNORE INTO ConditionProfiles (
                    plant_name, stage, owner_id, ideal_conditions, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (plant_name, stage, GLOBAL_OWNER, ideal_conditions_json, now, now),
            )
            added += cur.rowcount
        db.commit()
        return added

    def delete_condition_profile(self, profile_id: int, owner_id: str) -> bool:
        """Delete an owned profile; global presets are never deleted here."""
        try:
            db = self.get_db()
            cur = db.execute(
                "DELETE FROM ConditionProfiles WHERE profile_id = ? AND owner_id = ? AND owner_id != ?",
                (profile_id, owner_id, GLOBAL_OWNER),
            )
            db.commit()
            return cur.rowcount > 0
        except sqlite3.Error as exc:
            logger.error("Failed to delete profile %s for owner %s: %s", profile_id, owner_id, exc)
            return False
