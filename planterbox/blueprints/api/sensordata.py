"""
Sensor Data API
===============

Device-facing endpoints. Controllers POST a sample every tick and act on the
``device_command`` in the response; dashboards read the latest status.
"""
from __future__ import annotations

import logging

from flask import Blueprint, Response
from pydantic import ValidationError

from planterbox.blueprints.api._common import (
    fail as _fail,
    get_device_id as _device_id,
    get_ingestion_service as _ingestion_service,
    get_json as _json,
    get_selection_service as _selection_service,
    success as _success,
)
from planterbox.schemas import PlantSelectionRequest
from planterbox.utils.http import safe_route

logger = logging.getLogger("sensordata_api")

sensordata_api = Blueprint("sensordata_api", __name__)


@sensordata_api.post("")
@safe_route("Failed to process sensor data")
def post_sensor_data() -> Response:
    """Ingest one sample and return the actuator commands for the device."""
    body = _json()
    device_id = _device_id(body)
    if not device_id:
        return _fail("device_id is required", 400)

    service = _ingestion_service()
    result = service.ingest(device_id, body)
    data = result.to_dict(lockout_ms=service.lockout_ms)
    message = "; ".join(result.warnings) or None
    return _success(data, message=message)


@sensordata_api.get("")
@safe_route("Failed to load sensor status")
def get_sensor_status() -> Response:
    """Latest sample, statuses and ideal ranges. Never actuates."""
    device_id = _device_id()
    if not device_id:
        return _fail("device_id is required", 400)
    return _success(_ingestion_service().latest_status(device_id))


@sensordata_api.post("/selection")
@safe_route("Failed to select plant")
def select_plant() -> Response:
    """Choose the plant and growth stage a device is growing."""
    body = _json()
    if "device_id" not in body:
        header_id = _device_id()
        if header_id:
            body["device_id"] = header_id
    try:
        req = PlantSelectionRequest(**body)
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_context=False)})

    selection = _selection_service().select_plant(req.device_id, req.plant_name, req.stage, req.owner_id)
    return _success(selection, message="Plant selected")
