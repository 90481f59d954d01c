"""
Condition Profile Value Object
==============================
Target ranges for one (plant name, growth stage, owner) tuple.

A profile with ``owner_id=None`` is a global preset; any other owner id marks
a user-owned profile that takes precedence over the preset for that owner.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from planterbox.domain.exceptions import ValidationError
from planterbox.domain.sensor_sample import num_or_none

RANGE_PAIRS = (
    ("temp_min", "temp_max", "Temperature"),
    ("humidity_min", "humidity_max", "Humidity"),
    ("ph_min", "ph_max", "pH"),
    ("ppm_min", "ppm_max", "PPM"),
)

IDEAL_CONDITION_FIELDS = (
    "temp_min",
    "temp_max",
    "humidity_min",
    "humidity_max",
    "ph_min",
    "ph_max",
    "ppm_min",
    "ppm_max",
    "light_hours_per_day",
    "target_light_distance",
    "light_distance_tolerance",
)

# Fields every profile must carry; distance targets are optional.
REQUIRED_CONDITION_FIELDS = IDEAL_CONDITION_FIELDS[:9]


def normalize_plant_name(name: str | None) -> str:
    return (name or "").strip().lower()


@dataclass(frozen=True)
class ConditionProfile:
    """
    Immutable ideal-condition profile.

    Bounds may be ``None`` on legacy documents; the classifiers and the
    dosing arbiter treat a missing bound as "no opinion" for that metric.
    """

    plant_name: str
    stage: str
    owner_id: str | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    humidity_min: float | None = None
    humidity_max: float | None = None
    ph_min: float | None = None
    ph_max: float | None = None
    ppm_min: float | None = None
    ppm_max: float | None = None
    light_hours_per_day: float | None = None
    target_light_distance: float | None = None
    light_distance_tolerance: float | None = None
    profile_id: int | None = None

    @property
    def is_global(self) -> bool:
        return self.owner_id is None

    def validate(self) -> ConditionProfile:
        """Check the profile invariants, raising ValidationError on the first violation."""
        if not self.plant_name:
            raise ValidationError("plant_name is required")
        if not self.stage:
            raise ValidationError("stage is required")
        for name in REQUIRED_CONDITION_FIELDS:
            if getattr(self, name) is None:
                raise ValidationError(f"Field {name} must be a valid number", detail={"field": name})
        for lo_name, hi_name, label in RANGE_PAIRS:
            if getattr(self, lo_name) > getattr(self, hi_name):
                raise ValidationError(f"{label} min must be <= max", detail={"field": lo_name})
        if not (0 <= self.light_hours_per_day <= 24):
            raise ValidationError("Light hours per day must be between 0 and 24")
        if self.light_distance_tolerance is not None and self.light_distance_tolerance < 0:
            raise ValidationError("Light distance tolerance must not be negative")
        return self

    def ideal_conditions(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in IDEAL_CONDITION_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile_id": self.profile_id,
            "plant_name": self.plant_name,
            "stage": self.stage,
            "owner_id": self.owner_id,
            "ideal_conditions": self.ideal_conditions(),
        }

    @classmethod
    def from_conditions(
        cls,
        plant_name: str,
        stage: str,
        conditions: Mapping[str, Any],
        *,
        owner_id: str | None = None,
        profile_id: int | None = None,
    ) -> ConditionProfile:
        """
        Build a profile from an ``ideal_conditions`` mapping.

        Numbers are coerced leniently (strings such as ``"5.5"`` are accepted);
        anything non-numeric becomes ``None``. The legacy document key
        ``light_pwm_cycle`` is accepted as an alias of ``light_hours_per_day``.
        """
        values = {name: num_or_none(conditions.get(name)) for name in IDEAL_CONDITION_FIELDS}
        if values["light_hours_per_day"] is None:
            values["light_hours_per_day"] = num_or_none(conditions.get("light_pwm_cycle"))
        return cls(
            plant_name=normalize_plant_name(plant_name),
            stage=(stage or "").strip().lower(),
            owner_id=str(owner_id) if owner_id not in (None, "") else None,
            profile_id=profile_id,
            **values,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ConditionProfile:
        """Build a profile from a ConditionProfiles table row."""
        raw = row.get("ideal_conditions") or "{}"
        conditions = json.loads(raw) if isinstance(raw, str) else dict(raw)
        return cls.from_conditions(
            row["plant_name"],
            row["stage"],
            conditions,
            owner_id=row.get("owner_id") or None,
            profile_id=row.get("profile_id"),
        )


__all__ = [
    "IDEAL_CONDITION_FIELDS",
    "ConditionProfile",
    "normalize_plant_name",
]

