"""
Plant Profiles API
==================

Global presets and user-owned ideal-condition profiles.
"""
from __future__ import annotations

import logging

from flask import Blueprint, Response, request
from pydantic import ValidationError

from planterbox.blueprints.api._common import (
    fail as _fail,
    get_json as _json,
    get_profile_service as _profile_service,
    success as _success,
)
from planterbox.schemas import CreateProfileRequest
from planterbox.utils.http import safe_route

logger = logging.getLogger("plants_api")

plants_api = Blueprint("plants_api", __name__)


@plants_api.get("/presets")
@safe_route("Failed to list presets")
def list_presets() -> Response:
    """List global presets, optionally for one stage."""
    stage = request.args.get("stage")
    plant = request.args.get("plant")
    service = _profile_service()
    if plant and stage:
        profile = service.find_profile(plant, stage)
        if profile is None or not profile.is_global:
            return _success({"ideal_conditions": None})
        return _success({"ideal_conditions": profile.ideal_conditions()})
    presets = service.list_presets(stage)
    return _success({"presets": presets, "count": len(presets)})


@plants_api.get("")
@safe_route("Failed to list profiles")
def list_profiles() -> Response:
    """List the profiles owned by ``owner_id``."""
    owner_id = (request.args.get("owner_id") or "").strip()
    if not owner_id:
        return _fail("owner_id is required", 400)
    profiles = _profile_service().list_owned(owner_id)
    return _success({"profiles": profiles, "count": len(profiles)})


@plants_api.post("")
@safe_route("Failed to create profile")
def create_profile() -> Response:
    """Create or replace an owner's profile for a plant and stage."""
    try:
        body = CreateProfileRequest(**_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_context=False)})

    profile = _profile_service().create_profile(
        owner_id=body.owner_id,
        plant_name=body.plant_name,
        stage=body.stage,
        ideal_conditions=body.ideal_conditions,
    )
    logger.info("Created profile %s for owner %s", profile.profile_id, body.owner_id)
    return _success(profile.to_dict(), 201)


@plants_api.delete("/<int:profile_id>")
@safe_route("Failed to delete profile")
def delete_profile(profile_id: int) -> Response:
    """Delete one of the caller's own profiles."""
    owner_id = (request.args.get("owner_id") or "").strip()
    if not owner_id:
        return _fail("owner_id is required", 400)
    _profile_service().delete_profile(profile_id, owner_id)
    return _success({"profile_id": profile_id}, message="Profile deleted")
