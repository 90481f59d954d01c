"""Repository facades exposing typed accessors over low-level mixins."""

from infrastructure.database.repositories.dosing import BusyWindowRepository
from infrastructure.database.repositories.profiles import ProfileRepository
from infrastructure.database.repositories.selections import SelectionRepository
from infrastructure.database.repositories.sensor_data import SensorDataRepository

__all__ = [
    "BusyWindowRepository",
    "ProfileRepository",
    "SelectionRepository",
    "SensorDataRepository",
]
