from planterbox.services.application.profile_service import ProfileService
from planterbox.services.application.selection_service import SelectionService
from planterbox.services.application.sensor_ingestion_service import IngestionResult, SensorIngestionService

__all__ = ["IngestionResult", "ProfileService", "SelectionService", "SensorIngestionService"]
