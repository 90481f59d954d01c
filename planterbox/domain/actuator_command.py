"""
Actuator Command & Sensor Status Value Objects
==============================================
Outputs of the decision engine. Neither is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from planterbox.enums import MotorCommand, SensorStatus

MAX_BRIGHTNESS = 255


@dataclass(frozen=True)
class ActuatorCommand:
    """
    One tick's worth of actuator commands.

    Invariants (checked on construction):
    - brightness is within 0..255
    - ph_up and ph_down are never both set
    - nutrient_a and nutrient_b are always equal (one two-part dose)
    - a pH pump and the nutrient pumps are never set together
    """

    light_brightness: int = 0
    light_motor: MotorCommand = MotorCommand.STOP
    ph_up: bool = False
    ph_down: bool = False
    nutrient_a: bool = False
    nutrient_b: bool = False

    def __post_init__(self):
        if not (0 <= self.light_brightness <= MAX_BRIGHTNESS):
            raise ValueError(f"Brightness must be between 0 and {MAX_BRIGHTNESS}, got {self.light_brightness}")
        if self.ph_up and self.ph_down:
            raise ValueError("ph_up and ph_down cannot both be active")
        if self.nutrient_a != self.nutrient_b:
            raise ValueError("nutrient_a and nutrient_b must be started together")
        if (self.ph_up or self.ph_down) and self.nutrient_a:
            raise ValueError("pH correction and nutrient dosing cannot share a tick")

    @classmethod
    def safe_default(cls) -> ActuatorCommand:
        """Light off, motor stopped, every pump off."""
        return cls()

    @property
    def any_pump(self) -> bool:
        return self.ph_up or self.ph_down or self.nutrient_a

    def to_dict(self) -> dict[str, Any]:
        return {
            "light_brightness": self.light_brightness,
            "light_motor": self.light_motor.value,
            "ph_up": self.ph_up,
            "ph_down": self.ph_down,
            "nutrient_a": self.nutrient_a,
            "nutrient_b": self.nutrient_b,
        }

    def to_device_payload(self, *, lockout_ms: int | None = None) -> dict[str, Any]:
        """Render the command with the key names the controller firmware parses."""
        payload: dict[str, Any] = {
            "light": self.light_brightness,
            "light_motor_cmd": self.light_motor.value,
            "ph_up_pump": self.ph_up,
            "ph_down_pump": self.ph_down,
            "ppm_a_pump": self.nutrient_a,
            "ppm_b_pump": self.nutrient_b,
        }
        if lockout_ms is not None:
            payload["lockout_ms"] = int(lockout_ms)
        return payload


@dataclass(frozen=True)
class SensorStatusSet:
    """Per-metric status labels for one sample."""

    temperature: SensorStatus = SensorStatus.UNKNOWN
    humidity: SensorStatus = SensorStatus.UNKNOWN
    ph: SensorStatus = SensorStatus.UNKNOWN
    ppm: SensorStatus = SensorStatus.UNKNOWN
    water_level: SensorStatus = SensorStatus.UNKNOWN

    @classmethod
    def unknown(cls) -> SensorStatusSet:
        return cls()

    def to_dict(self) -> dict[str, str]:
        return {
            "temperature": self.temperature.value,
            "humidity": self.humidity.value,
            "ph": self.ph.value,
            "ppm": self.ppm.value,
            "water_level": self.water_level.value,
        }
