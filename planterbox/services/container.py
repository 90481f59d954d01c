from __future__ import annotations

import logging
from dataclasses import dataclass

from infrastructure.database.repositories.dosing import BusyWindowRepository
from infrastructure.database.repositories.profiles import ProfileRepository
from infrastructure.database.repositories.selections import SelectionRepository
from infrastructure.database.repositories.sensor_data import SensorDataRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.logging.audit import DosingAuditLogger
from planterbox.config import AppConfig
from planterbox.controllers.decision_engine import DecisionEngine
from planterbox.services.application.profile_service import ProfileService
from planterbox.services.application.selection_service import SelectionService
from planterbox.services.application.sensor_ingestion_service import SensorIngestionService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    profile_repo: ProfileRepository
    busy_window_repo: BusyWindowRepository
    selection_repo: SelectionRepository
    sensor_repo: SensorDataRepository
    audit_logger: DosingAuditLogger
    profile_service: ProfileService
    selection_service: SelectionService
    decision_engine: DecisionEngine
    ingestion_service: SensorIngestionService

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        """Construct the service container with all dependencies."""
        logger.info("Building ServiceContainer...")
        database = SQLiteDatabaseHandler(config.database_path)
        database.init_app()

        profile_repo = ProfileRepository(database)
        busy_window_repo = BusyWindowRepository(database)
        selection_repo = SelectionRepository(database)
        sensor_repo = SensorDataRepository(database)
        # The audit trail is kept regardless of PLANTERBOX_LOG_LEVEL
        audit_logger = DosingAuditLogger(config.audit_log_path)

        profile_service = ProfileService(profile_repo)
        profile_service.seed_presets(config.presets_path)
        selection_service = SelectionService(selection_repo)

        decision_engine = DecisionEngine(
            profile_service,
            busy_window_repo,
            config.engine_settings(),
            audit_logger=audit_logger,
        )
        ingestion_service = SensorIngestionService(
            engine=decision_engine,
            selection_service=selection_service,
            profile_service=profile_service,
            sensor_repo=sensor_repo,
            busy_repo=busy_window_repo,
        )

        logger.info("ServiceContainer built successfully.")
        return cls(
            config=config,
            database=database,
            profile_repo=profile_repo,
            busy_window_repo=busy_window_repo,
            selection_repo=selection_repo,
            sensor_repo=sensor_repo,
            audit_logger=audit_logger,
            profile_service=profile_service,
            selection_service=selection_service,
            decision_engine=decision_engine,
            ingestion_service=ingestion_service,
        )

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.database.close()
        self.audit_logger.close()
        logger.info("ServiceContainer shut down.")
