"""
Sensor Data Schemas
===================

Pydantic models for the device-facing sensor endpoint.

Readings are coerced leniently: anything that is not a finite number becomes
``None`` instead of failing the request, so one broken probe never stops the
rest of the tick.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planterbox.domain.sensor_sample import num_or_none


class SensorReadingPayload(BaseModel):
    """Body posted by a controller on every tick."""

    model_config = ConfigDict(extra="ignore")

    device_id: Optional[str] = Field(default=None, max_length=128, description="Posting controller id")
    temperature: Optional[float] = Field(default=None, description="Air temperature (°C)")
    humidity: Optional[float] = Field(default=None, description="Relative humidity (%)")
    ph: Optional[float] = Field(default=None, description="Reservoir pH")
    ppm: Optional[float] = Field(default=None, description="Nutrient concentration (ppm)")
    distance: Optional[float] = Field(default=None, description="Light-to-canopy distance (cm)")
    water_sufficient: Optional[bool] = Field(default=None, description="Reservoir float switch")

    @field_validator("temperature", "humidity", "ph", "ppm", "distance", mode="before")
    @classmethod
    def _num_or_none(cls, v: Any) -> Optional[float]:
        return num_or_none(v)

    @field_validator("water_sufficient", mode="before")
    @classmethod
    def _strict_bool(cls, v: Any) -> Optional[bool]:
        return v if isinstance(v, bool) else None

    @field_validator("device_id", mode="before")
    @classmethod
    def _strip_device_id(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def readings(self) -> dict[str, Any]:
        return self.model_dump(exclude={"device_id"})


class PlantSelectionRequest(BaseModel):
    """Select the plant and stage a device is growing."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    device_id: str = Field(..., min_length=1, max_length=128)
    plant_name: str = Field(..., min_length=1, max_length=100)
    stage: Optional[str] = Field(default=None, description="seedling, vegetative or mature")
    owner_id: Optional[str] = Field(default=None, max_length=128)

    @field_validator("plant_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("plant_name is required")
        return v
