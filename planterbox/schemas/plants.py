"""
Plant Profile Schemas
=====================

Request models for owned condition profiles. Numeric checks and range checks
live on ``ConditionProfile.validate`` so presets and API input share them.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateProfileRequest(BaseModel):
    """Create (or replace) an owner's profile for one plant and stage."""

    model_config = ConfigDict(extra="ignore")

    owner_id: str = Field(..., min_length=1, max_length=128)
    plant_name: str = Field(..., min_length=1, max_length=100)
    stage: str = Field(..., min_length=1, max_length=32)
    ideal_conditions: Dict[str, Any] = Field(..., description="Target ranges and light settings")

    @field_validator("owner_id", "plant_name", "stage")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()
