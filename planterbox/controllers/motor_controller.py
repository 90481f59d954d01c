"""
Light-height motor controller.

Keeps the grow light at a target distance above the canopy using a plain
tolerance band. Each tick re-evaluates from scratch; there is no hysteresis
beyond the band itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from planterbox.domain.sensor_sample import num_or_none
from planterbox.enums import MotorCommand, MotorStatus

DEFAULT_TOLERANCE_CM = 2.0


@dataclass(frozen=True)
class MotorDecision:
    """Motor command plus the status shown to the operator."""
    command: MotorCommand
    status: MotorStatus
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'command': self.command.value,
            'status': self.status.value,
            'message': self.message,
        }


def evaluate_motor(distance: Optional[float], target: Optional[float],
                   tolerance: Optional[float] = DEFAULT_TOLERANCE_CM) -> MotorDecision:
    """
    Decide which way the light fixture should move.

    Args:
        distance: Measured light-to-canopy distance in cm
        target: Target distance in cm
        tolerance: Allowed deviation either side of target (inclusive)

    Returns:
        MotorDecision; STOP with status N/A when distance or target is missing
    """
    measured = num_or_none(distance)
    wanted = num_or_none(target)
    tol = num_or_none(tolerance)
    if tol is None or tol < 0:
        tol = DEFAULT_TOLERANCE_CM

    if measured is None or wanted is None:
        return MotorDecision(
            MotorCommand.STOP,
            MotorStatus.NOT_AVAILABLE,
            f"Light distance unavailable (measured={measured}, target={wanted}, tolerance=±{tol:g} cm)",
        )

    detail = f"measured {measured:g} cm, target {wanted:g} ± {tol:g} cm"
    if measured > wanted + tol:
        return MotorDecision(MotorCommand.DOWN, MotorStatus.TOO_HIGH, f"Light too high, moving down ({detail})")
    if measured < wanted - tol:
        return MotorDecision(MotorCommand.UP, MotorStatus.TOO_LOW, f"Light too low, moving up ({detail})")
    return MotorDecision(MotorCommand.STOP, MotorStatus.OK, f"Light height OK ({detail})")


class MotorController:
    """Applies evaluate_motor with a configured default tolerance."""

    def __init__(self, default_tolerance: float = DEFAULT_TOLERANCE_CM):
        self.default_tolerance = default_tolerance

    def decide(self, distance: Optional[float], target: Optional[float],
               tolerance: Optional[float] = None) -> MotorDecision:
        return evaluate_motor(distance, target, self.default_tolerance if tolerance is None else tolerance)
