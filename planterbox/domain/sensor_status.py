"""Sensor status classification.

Compares raw readings against a profile's ideal ranges. Nutrient overshoot is
reported as ``DILUTE_WATER`` so the operator is told to add water; it never
triggers dosing.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from planterbox.domain.actuator_command import SensorStatusSet
from planterbox.domain.condition_profile import ConditionProfile
from planterbox.domain.sensor_sample import SensorSample
from planterbox.enums import SensorStatus


def _is_number(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def classify_range(value: Any, lo: Any, hi: Any) -> SensorStatus:
    """IDEAL if lo <= value <= hi, NOT_IDEAL otherwise, UNKNOWN on missing data."""
    if not (_is_number(value) and _is_number(lo) and _is_number(hi)):
        return SensorStatus.UNKNOWN
    return SensorStatus.IDEAL if lo <= value <= hi else SensorStatus.NOT_IDEAL


def classify_ppm(value: Any, lo: Any, hi: Any) -> SensorStatus:
    if _is_number(value) and _is_number(hi) and value > hi:
        return SensorStatus.DILUTE_WATER
    return classify_range(value, lo, hi)


def classify_water_level(water_sufficient: Optional[bool]) -> SensorStatus:
    if water_sufficient is None:
        return SensorStatus.UNKNOWN
    return SensorStatus.IDEAL if water_sufficient else SensorStatus.NOT_IDEAL


def classify_sample(sample: SensorSample, profile: Optional[ConditionProfile]) -> SensorStatusSet:
    """Classify every metric of *sample*; all UNKNOWN when there is no profile."""
    if profile is None:
        return SensorStatusSet.unknown()
    return SensorStatusSet(
        temperature=classify_range(sample.temperature, profile.temp_min, profile.temp_max),
        humidity=classify_range(sample.humidity, profile.humidity_min, profile.humidity_max),
        ph=classify_range(sample.ph, profile.ph_min, profile.ph_max),
        ppm=classify_ppm(sample.ppm, profile.ppm_min, profile.ppm_max),
        water_level=classify_water_level(sample.water_sufficient),
    )


__all__ = ["classify_ppm", "classify_range", "classify_sample", "classify_water_level"]
