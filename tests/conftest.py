"""
Shared test fixtures for the PlanterBox test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- Service factories with the bundled presets seeded
- A fixed clock and a reference lettuce profile
- A Flask app/test client backed by an in-memory database

Usage:
    def test_example(busy_window_repo, fixed_now_ms):
        assert busy_window_repo.set_busy("dev-1", 1000, fixed_now_ms) is not None
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from infrastructure.database.repositories.dosing import BusyWindowRepository
from infrastructure.database.repositories.profiles import ProfileRepository
from infrastructure.database.repositories.selections import SelectionRepository
from infrastructure.database.repositories.sensor_data import SensorDataRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from planterbox.config import DEFAULT_PRESETS_PATH
from planterbox.domain.condition_profile import ConditionProfile
from planterbox.domain.control import EngineSettings
from planterbox.utils.time import to_epoch_ms

# Keep test output clean
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("planterbox").setLevel(logging.WARNING)

LETTUCE_VEGETATIVE = {
    "temp_min": 16,
    "temp_max": 22,
    "humidity_min": 50,
    "humidity_max": 70,
    "ph_min": 5.8,
    "ph_max": 6.5,
    "ppm_min": 560,
    "ppm_max": 840,
    "light_hours_per_day": 14,
    "target_light_distance": 15,
    "light_distance_tolerance": 2,
}


# ========================== Clock ==========================================


@pytest.fixture()
def fixed_now():
    """Noon UTC on a fixed day; inside a 06:00 + 14 h light window."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now_ms(fixed_now):
    return to_epoch_ms(fixed_now)


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler
    handler.close()


@pytest.fixture()
def file_db_handler(tmp_path):
    """File-backed database so several threads share the same data."""
    handler = SQLiteDatabaseHandler(str(tmp_path / "planterbox-test.db"))
    handler.create_tables()
    yield handler
    handler.close()


# ========================== Repository Fixtures ============================


@pytest.fixture()
def profile_repo(db_handler):
    return ProfileRepository(db_handler)


@pytest.fixture()
def busy_window_repo(db_handler):
    return BusyWindowRepository(db_handler)


@pytest.fixture()
def selection_repo(db_handler):
    return SelectionRepository(db_handler)


@pytest.fixture()
def sensor_repo(db_handler):
    return SensorDataRepository(db_handler)


# ========================== Domain Fixtures ================================


@pytest.fixture()
def lettuce_profile():
    """Global lettuce/vegetative preset used across controller tests."""
    return ConditionProfile.from_conditions("lettuce", "vegetative", LETTUCE_VEGETATIVE)


@pytest.fixture()
def engine_settings():
    return EngineSettings(timezone="UTC")


@pytest.fixture()
def mock_audit_logger():
    """Mock DosingAuditLogger."""
    audit = MagicMock()
    audit.log_dose = MagicMock()
    return audit


# ========================== Service Factory Fixtures =======================


@pytest.fixture()
def profile_service(profile_repo):
    """ProfileService with the bundled global presets seeded."""
    from planterbox.services.application.profile_service import ProfileService

    service = ProfileService(profile_repo)
    service.seed_presets(DEFAULT_PRESETS_PATH)
    return service


@pytest.fixture()
def selection_service(selection_repo):
    from planterbox.services.application.selection_service import SelectionService

    return SelectionService(selection_repo)


@pytest.fixture()
def decision_engine(profile_service, busy_window_repo, engine_settings, mock_audit_logger):
    from planterbox.controllers.decision_engine import DecisionEngine

    return DecisionEngine(
        profile_service,
        busy_window_repo,
        engine_settings,
        audit_logger=mock_audit_logger,
    )


@pytest.fixture()
def ingestion_service(decision_engine, selection_service, profile_service, sensor_repo, busy_window_repo):
    from planterbox.services.application.sensor_ingestion_service import SensorIngestionService

    return SensorIngestionService(
        engine=decision_engine,
        selection_service=selection_service,
        profile_service=profile_service,
        sensor_repo=sensor_repo,
        busy_repo=busy_window_repo,
    )


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path):
    from planterbox import create_app

    flask_app = create_app(
        {
            "database_path": ":memory:",
            "audit_log_path": str(tmp_path / "dosing_audit.log"),
            "log_dir": "",
            "timezone": "UTC",
        }
    )
    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()
