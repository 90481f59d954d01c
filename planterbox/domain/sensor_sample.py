"""
Sensor Sample Value Object
==========================
One measurement event posted by a hydroponics controller.

Created by the ingestion boundary and never mutated afterwards.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Mapping

from planterbox.utils.time import coerce_datetime, utc_now

METRIC_FIELDS = ("temperature", "humidity", "ph", "ppm", "distance")


def num_or_none(value: Any) -> float | None:
    """Return *value* as a finite float, or None when it is not numeric.

    Booleans are rejected even though ``bool`` subclasses ``int``; a pump
    flag must never be read as a measurement.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class SensorSample:
    """
    Immutable sensor reading.

    Attributes:
        device_id: Identifier of the posting controller (busy-window scope)
        timestamp: When the sample was recorded (aware UTC)
        temperature: Air temperature in °C
        humidity: Relative humidity in %
        ph: Reservoir pH
        ppm: Nutrient concentration in ppm
        distance: Light-to-canopy distance in cm
        water_sufficient: Reservoir level flag reported by the float sensor
    """

    device_id: str
    timestamp: datetime = field(default_factory=utc_now)
    temperature: float | None = None
    humidity: float | None = None
    ph: float | None = None
    ppm: float | None = None
    distance: float | None = None
    water_sufficient: bool | None = None

    @classmethod
    def from_payload(
        cls,
        device_id: str,
        payload: Mapping[str, Any],
        *,
        timestamp: datetime | None = None,
    ) -> SensorSample:
        """Build a sample from a raw device payload, coercing every metric."""
        water = payload.get("water_sufficient")
        return cls(
            device_id=str(device_id),
            timestamp=coerce_datetime(timestamp) or utc_now(),
            temperature=num_or_none(payload.get("temperature")),
            humidity=num_or_none(payload.get("humidity")),
            ph=num_or_none(payload.get("ph")),
            ppm=num_or_none(payload.get("ppm")),
            distance=num_or_none(payload.get("distance")),
            water_sufficient=water if isinstance(water, bool) else None,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> SensorSample:
        water = row.get("water_sufficient")
        return cls(
            device_id=str(row["device_id"]),
            timestamp=coerce_datetime(row.get("recorded_at")) or utc_now(),
            temperature=row.get("temperature"),
            humidity=row.get("humidity"),
            ph=row.get("ph"),
            ppm=row.get("ppm"),
            distance=row.get("distance"),
            water_sufficient=None if water is None else bool(water),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data
