"""
Domain Value Objects Package
=============================
Immutable value objects describing samples, profiles and engine outputs.

Value objects are immutable objects that represent descriptive aspects of the domain
with no conceptual identity. They are defined only by their attributes.
"""

from .actuator_command import ActuatorCommand, SensorStatusSet
from .condition_profile import ConditionProfile
from .control import EngineSettings
from .dosing import BusyWindow, DosingDecision
from .sensor_sample import SensorSample

__all__ = [
    # Engine outputs
    "ActuatorCommand",
    "SensorStatusSet",
    "DosingDecision",
    # Inputs
    "ConditionProfile",
    "SensorSample",
    # State
    "BusyWindow",
    # Configuration
    "EngineSettings",
]
