from __future__ import annotations

from infrastructure.database.ops.sensor_data import SensorDataOperations
from planterbox.domain.sensor_sample import SensorSample


class SensorDataRepository:
    """Facade for stored sensor samples."""

    def __init__(self, backend: SensorDataOperations) -> None:
        self._backend = backend

    def record(self, sample: SensorSample) -> int | None:
        return self._backend.insert_sensor_sample(
            sample.device_id,
            sample.timestamp.isoformat(),
            sample.temperature,
            sample.humidity,
            sample.ph,
            sample.ppm,
            sample.distance,
            sample.water_sufficient,
        )

    def latest(self, device_id: str) -> SensorSample | None:
        row = self._backend.get_latest_sensor_sample(device_id)
        return SensorSample.from_row(row) if row else None
