"""
Enums Module
============

This module provides enumeration types for the PlanterBox application.
Enums ensure type safety and consistency across the codebase.
"""

from planterbox.enums.common import (
    DosingAction,
    DosingOutcome,
    GrowthStage,
    MotorCommand,
    MotorStatus,
    SensorStatus,
)

__all__ = [
    "DosingAction",
    "DosingOutcome",
    "GrowthStage",
    "MotorCommand",
    "MotorStatus",
    "SensorStatus",
]
