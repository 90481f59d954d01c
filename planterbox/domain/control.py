"""
Control System Domain Objects
==============================
Static settings for the decision engine.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EngineSettings:
    """Configuration consumed by the decision engine. Not mutated at runtime."""
    # Light schedule
    light_start_hour: float = 6.0
    ramp_minutes: float = 60.0
    timezone: Optional[str] = None  # IANA name; None = host local time

    # Light height
    light_distance_tolerance: float = 2.0  # cm

    # Dosing lockout
    settle_ms: int = 120_000  # post-dose settle before readings are trusted
    ppm_exec_ms_default: int = 120_000  # A -> gap -> B runtime on the device

    def __post_init__(self):
        if not (0 <= self.light_start_hour < 24):
            raise ValueError(f"light_start_hour must be within [0, 24), got {self.light_start_hour}")
        if self.ramp_minutes < 0:
            raise ValueError(f"ramp_minutes must not be negative, got {self.ramp_minutes}")
        if self.light_distance_tolerance < 0:
            raise ValueError(f"light_distance_tolerance must not be negative, got {self.light_distance_tolerance}")
        if self.settle_ms < 0 or self.ppm_exec_ms_default < 0:
            raise ValueError("Dosing durations must not be negative")

    @property
    def nutrient_reservation_ms(self) -> int:
        return self.ppm_exec_ms_default + self.settle_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            'light_start_hour': self.light_start_hour,
            'ramp_minutes': self.ramp_minutes,
            'timezone': self.timezone,
            'light_distance_tolerance': self.light_distance_tolerance,
            'settle_ms': self.settle_ms,
            'ppm_exec_ms_default': self.ppm_exec_ms_default,
        }
