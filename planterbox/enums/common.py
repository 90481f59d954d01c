"""
Common Enumerations
====================

Enums shared by the decision engine, the services and the HTTP layer.
"""

from enum import Enum


class SensorStatus(str, Enum):
    """
    Per-metric status label.
    Used by: StatusClassifier, DecisionEngine, sensor data API
    """
    IDEAL = "IDEAL"
    NOT_IDEAL = "NOT_IDEAL"
    DILUTE_WATER = "DILUTE_WATER"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


class MotorCommand(str, Enum):
    """
    Light-fixture motor direction sent to the device.
    Used by: MotorController, ActuatorCommand
    """
    UP = "UP"
    DOWN = "DOWN"
    STOP = "STOP"

    def __str__(self) -> str:
        return self.value


class MotorStatus(str, Enum):
    """Human-facing outcome of the light-height check."""
    OK = "OK"
    TOO_HIGH = "TOO_HIGH"
    TOO_LOW = "TOO_LOW"
    NOT_AVAILABLE = "N/A"

    def __str__(self) -> str:
        return self.value


class DosingAction(str, Enum):
    """
    The single dosing action started on a tick.
    Used by: DosingArbiter, dosing audit log
    """
    NONE = "none"
    PH_UP = "ph_up"
    PH_DOWN = "ph_down"
    NUTRIENT = "nutrient"

    def __str__(self) -> str:
        return self.value


class DosingOutcome(str, Enum):
    """Why the arbiter ended a tick the way it did."""
    IDLE = "idle"
    BUSY = "busy"
    DOSED = "dosed"
    LOST_RACE = "lost_race"

    def __str__(self) -> str:
        return self.value


class GrowthStage(str, Enum):
    """
    Broad growth stages a profile can target.
    Used by: SelectionService, profile schemas
    """
    SEEDLING = "seedling"
    VEGETATIVE = "vegetative"
    MATURE = "mature"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: object, default: "GrowthStage | None" = None) -> "GrowthStage":
        """Return the matching stage, falling back to *default* (seedling)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return default or cls.SEEDLING
