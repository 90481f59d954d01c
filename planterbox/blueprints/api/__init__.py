"""JSON API blueprints."""

from planterbox.blueprints.api.plants import plants_api
from planterbox.blueprints.api.sensordata import sensordata_api

__all__ = ["plants_api", "sensordata_api"]
