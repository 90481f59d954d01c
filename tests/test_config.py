import logging

import pytest

from planterbox.config import DEFAULT_SECRET_KEY, AppConfig, load_config, setup_logging
from planterbox.domain.exceptions import ConfigurationError


def test_defaults(monkeypatch):
    for name in ("PLANTERBOX_ENV", "PLANTERBOX_SETTLE_MS", "PLANTERBOX_TIMEZONE", "PLANTERBOX_RAMP_MINUTES"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.environment == "development"
    assert config.settle_ms == 120_000
    assert config.ppm_exec_ms_default == 120_000
    assert config.engine_settings().timezone is None
    assert config.engine_settings().nutrient_reservation_ms == 240_000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PLANTERBOX_SETTLE_MS", "90000")
    monkeypatch.setenv("PLANTERBOX_RAMP_MINUTES", "30")
    monkeypatch.setenv("PLANTERBOX_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("PLANTERBOX_DEBUG", "yes")

    config = AppConfig()
    settings = config.engine_settings()

    assert config.DEBUG is True
    assert settings.settle_ms == 90_000
    assert settings.ramp_minutes == 30.0
    assert settings.timezone == "Europe/Berlin"


def test_non_numeric_environment_value(monkeypatch):
    monkeypatch.setenv("PLANTERBOX_SETTLE_MS", "two minutes")
    with pytest.raises(ConfigurationError):
        AppConfig()


def test_default_secret_rejected_in_production(monkeypatch):
    monkeypatch.setenv("PLANTERBOX_ENV", "production")
    monkeypatch.delenv("PLANTERBOX_SECRET_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        AppConfig()

    monkeypatch.setenv("PLANTERBOX_SECRET_KEY", "not-" + DEFAULT_SECRET_KEY)
    assert AppConfig().environment == "production"


@pytest.mark.parametrize(
    "overrides",
    [
        {"timezone": "Mars/Olympus_Mons"},
        {"light_start_hour": 24},
        {"ramp_minutes": -1},
        {"settle_ms": -5},
        {"light_distance_tolerance": -0.5},
    ],
)
def test_invalid_values_rejected(monkeypatch, overrides):
    monkeypatch.delenv("PLANTERBOX_ENV", raising=False)
    with pytest.raises(ConfigurationError):
        AppConfig(**overrides)


def test_flask_config_keys():
    flask_config = AppConfig(environment="development").as_flask_config()
    assert flask_config["ENV"] == "development"
    assert "SECRET_KEY" in flask_config


def test_log_level_normalised_and_validated(monkeypatch):
    monkeypatch.setenv("PLANTERBOX_LOG_LEVEL", "warning")
    assert AppConfig().log_level == "WARNING"

    monkeypatch.setenv("PLANTERBOX_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError):
        AppConfig()


@pytest.fixture()
def restore_root_level():
    root = logging.getLogger()
    previous = root.level
    yield root
    root.setLevel(previous)
    for handler in root.handlers:
        if handler.name in {"planterbox_console", "planterbox_file"}:
            handler.setLevel(logging.NOTSET)


def test_setup_logging_applies_configured_level(restore_root_level):
    setup_logging(log_dir="", level="WARNING")
    assert restore_root_level.level == logging.WARNING
    console = [h for h in restore_root_level.handlers if h.name == "planterbox_console"]
    assert console and console[0].level == logging.WARNING


def test_setup_logging_debug_wins_over_level(restore_root_level):
    setup_logging(debug=True, log_dir="", level="ERROR")
    assert restore_root_level.level == logging.DEBUG
