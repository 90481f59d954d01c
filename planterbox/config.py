"""
Configuration for the PlanterBox controller
===========================================
Runtime settings for the HTTP service and the decision engine, loaded from
``PLANTERBOX_*`` environment variables. Sets up logging as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from planterbox.domain.control import EngineSettings
from planterbox.domain.exceptions import ConfigurationError

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_PRESETS_PATH = str(PACKAGE_DIR / "data" / "plant_presets.json")
DEFAULT_SECRET_KEY = "PlanterBoxDevSecretKey"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer.") from None


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level(name: str) -> int:
    import logging

    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {name!r}; expected one of {', '.join(LOG_LEVELS)}.")
    return level


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("PLANTERBOX_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("PLANTERBOX_SECRET_KEY", DEFAULT_SECRET_KEY))
    database_path: str = field(
        default_factory=lambda: os.getenv("PLANTERBOX_DATABASE_PATH", "database/planterbox.db")
    )
    presets_path: str = field(default_factory=lambda: os.getenv("PLANTERBOX_PRESETS_PATH", DEFAULT_PRESETS_PATH))

    DEBUG: bool = field(default_factory=lambda: _env_bool("PLANTERBOX_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("PLANTERBOX_LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("PLANTERBOX_LOG_DIR", "logs"))
    audit_log_path: str = field(
        default_factory=lambda: os.getenv("PLANTERBOX_AUDIT_LOG_PATH", "logs/dosing_audit.log")
    )

    # Light schedule. Empty timezone means the host's local time.
    timezone: str = field(default_factory=lambda: os.getenv("PLANTERBOX_TIMEZONE", ""))
    ramp_minutes: float = field(default_factory=lambda: _env_float("PLANTERBOX_RAMP_MINUTES", 60.0))
    light_start_hour: float = field(default_factory=lambda: _env_float("PLANTERBOX_LIGHT_START_HOUR", 6.0))
    light_distance_tolerance: float = field(
        default_factory=lambda: _env_float("PLANTERBOX_LIGHT_DISTANCE_TOLERANCE", 2.0)
    )

    # Dosing lockout
    settle_ms: int = field(default_factory=lambda: _env_int("PLANTERBOX_SETTLE_MS", 120_000))
    ppm_exec_ms_default: int = field(default_factory=lambda: _env_int("PLANTERBOX_PPM_EXEC_MS", 120_000))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigurationError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set PLANTERBOX_SECRET_KEY environment variable to a secure random value."
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"PLANTERBOX_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")
        if not (0 <= self.light_start_hour < 24):
            raise ConfigurationError("PLANTERBOX_LIGHT_START_HOUR must be within [0, 24).")
        if self.ramp_minutes < 0:
            raise ConfigurationError("PLANTERBOX_RAMP_MINUTES must not be negative.")
        if self.light_distance_tolerance < 0:
            raise ConfigurationError("PLANTERBOX_LIGHT_DISTANCE_TOLERANCE must not be negative.")
        if self.settle_ms < 0 or self.ppm_exec_ms_default < 0:
            raise ConfigurationError("Dosing durations must not be negative.")
        if self.timezone:
            from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                raise ConfigurationError(f"Unknown timezone {self.timezone!r}.") from None

    def engine_settings(self) -> EngineSettings:
        return EngineSettings(
            light_start_hour=self.light_start_hour,
            ramp_minutes=self.ramp_minutes,
            timezone=self.timezone or None,
            light_distance_tolerance=self.light_distance_tolerance,
            settle_ms=self.settle_ms,
            ppm_exec_ms_default=self.ppm_exec_ms_default,
        )

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DATABASE_PATH": self.database_path,
            "PRESETS_PATH": self.presets_path,
            "AUDIT_LOG_PATH": self.audit_log_path,
            "DEBUG": self.DEBUG,
            "JSON_SORT_KEYS": False,
        }


def setup_logging(debug: bool = False, log_dir: str = "logs", level: str = "INFO") -> None:
    """Setup logging configuration; 'debug' overrides 'level'."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.DEBUG if debug else _log_level(level)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "planterbox_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "planterbox_file" for h in root.handlers)
    added_handler = False

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "planterbox_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if not has_file and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "planterbox.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "planterbox_file"
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    for handler in root.handlers:
        if getattr(handler, "name", "") in {"planterbox_console", "planterbox_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("PLANTERBOX_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
