"""
Decision engine components: light scheduling, light height, dosing
arbitration and the orchestrator that combines them per sample.
"""

from planterbox.controllers.decision_engine import DecisionEngine, EngineDecision
from planterbox.controllers.dosing_arbiter import DosingArbiter
from planterbox.controllers.light_scheduler import LightScheduler, compute_brightness
from planterbox.controllers.motor_controller import MotorController, MotorDecision, evaluate_motor

__all__ = [
    "DecisionEngine",
    "DosingArbiter",
    "EngineDecision",
    "LightScheduler",
    "MotorController",
    "MotorDecision",
    "compute_brightness",
    "evaluate_motor",
]
