import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

from infrastructure.database.ops.dosing import DosingOperations
from infrastructure.database.ops.profiles import ProfileOperations
from infrastructure.database.ops.selections import SelectionOperations
from infrastructure.database.ops.sensor_data import SensorDataOperations

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class SQLiteDatabaseHandler(
    ProfileOperations,
    DosingOperations,
    SelectionOperations,
    SensorDataOperations,
):
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str, *, busy_timeout: float = 5.0) -> None:
        self._database_path = database_path
        self._busy_timeout = busy_timeout
        self._local = threading.local()

        # Ensure the directory for the database file exists
        if database_path != IN_MEMORY:
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created database directory: %s", db_path.parent)

    @property
    def database_path(self) -> str:
        return self._database_path

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        if app is not None:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            connection = self._open_connection()
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(
            self._database_path,
            timeout=self._busy_timeout,
            check_same_thread=False,
        )
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Configure SQLite connection for a small single-board host.

        - WAL mode: readers never block the busy-window writer
        - NORMAL synchronous: still durable with WAL
        - Memory temp store: avoids temp files on SD cards
        """
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute("PRAGMA cache_size=-16000")  # 16MB cache (negative = KB)
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        # An in-memory database lives only as long as its connection.
        if self._database_path == IN_MEMORY:
            return
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    def close(self) -> None:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.get_db()
        try:
            yield conn
        finally:
            conn.commit()

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        try:
            with self.connection() as db:
                # Ideal-condition profiles (owner_id '' = global preset)
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS ConditionProfiles (
                        profile_id INTEGER PRIMARY KEY AUTOINCREMENT,
                        plant_name TEXT NOT NULL,
                        stage TEXT NOT NULL,
                        owner_id TEXT NOT NULL DEFAULT '',
                        ideal_conditions TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        updated_at TIMESTAMP,
                        UNIQUE (plant_name, stage, owner_id)
                    )
                    """
                )
                # Dosing lockout, one row per device scope
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS DosingBusyWindow (
                        scope_id TEXT PRIMARY KEY,
                        until_ms INTEGER NOT NULL,
                        updated_at TIMESTAMP
                    )
                    """
                )
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS DeviceSelections (
                        device_id TEXT PRIMARY KEY,
                        plant_name TEXT NOT NULL,
                        stage TEXT NOT NULL,
                        owner_id TEXT,
                        selection_start TIMESTAMP NOT NULL,
                        updated_at TIMESTAMP
                    )
                    """
                )
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS SensorData (
                        reading_id INTEGER PRIMARY KEY AUTOINCREMENT,
                        device_id TEXT NOT NULL,
                        recorded_at TIMESTAMP NOT NULL,
                        temperature REAL,
                        humidity REAL,
                        ph REAL,
                        ppm REAL,
                        distance REAL,
                        water_sufficient INTEGER
                    )
                    """
                )
                db.execute(
                    "CREATE INDEX IF NOT EXISTS idx_sensor_data_device_time ON SensorData(device_id, recorded_at)"
                )
            logger.info("Database tables ready at %s", self._database_path)
        except sqlite3.Error as exc:
            logger.error("Failed to create tables: %s", exc)
            raise
