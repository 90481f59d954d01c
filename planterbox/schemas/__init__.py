"""
Schemas Module
==============

Pydantic models for request/response validation.
"""

from planterbox.schemas.plants import CreateProfileRequest
from planterbox.schemas.sensordata import PlantSelectionRequest, SensorReadingPayload

__all__ = [
    "CreateProfileRequest",
    "PlantSelectionRequest",
    "SensorReadingPayload",
]
