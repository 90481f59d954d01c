import pytest

from planterbox.domain.actuator_command import ActuatorCommand
from planterbox.enums import MotorCommand


def test_safe_default_is_fully_passive():
    command = ActuatorCommand.safe_default()
    assert command.light_brightness == 0
    assert command.light_motor is MotorCommand.STOP
    assert not command.any_pump


@pytest.mark.parametrize(
    "kwargs",
    [
        {"light_brightness": 256},
        {"light_brightness": -1},
        {"ph_up": True, "ph_down": True},
        {"nutrient_a": True},
        {"ph_up": True, "nutrient_a": True, "nutrient_b": True},
    ],
)
def test_invariants_rejected_on_construction(kwargs):
    with pytest.raises(ValueError):
        ActuatorCommand(**kwargs)


def test_device_payload_uses_firmware_keys():
    command = ActuatorCommand(light_brightness=128, light_motor=MotorCommand.UP, ph_down=True)
    payload = command.to_device_payload(lockout_ms=120_000)

    assert payload == {
        "light": 128,
        "light_motor_cmd": "UP",
        "ph_up_pump": False,
        "ph_down_pump": True,
        "ppm_a_pump": False,
        "ppm_b_pump": False,
        "lockout_ms": 120_000,
    }


def test_device_payload_omits_lockout_when_not_given():
    assert "lockout_ms" not in ActuatorCommand().to_device_payload()
