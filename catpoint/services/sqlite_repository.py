"""SQLite-backed security repository."""

import os
import sqlite3
from typing import Any, Dict, Set

from ..config.defaults import DEFAULT_PATHS, SYSTEM_CONSTANTS
from ..exceptions import RepositoryError
from ..models.sensor import Sensor, SensorType
from ..models.status import AlarmStatus, ArmingStatus
from ..utils import ensure_directory_exists
from .interfaces import SecurityRepositoryInterface
from .error_decorators import retry_on_error
from ..logging_config import get_logger

logger = get_logger("sqlite_repository")

ALARM_STATUS_KEY = "alarm_status"
ARMING_STATUS_KEY = "arming_status"

# Retry only on transient failures such as a locked database file
_retry_transient = retry_on_error(
    max_attempts=SYSTEM_CONSTANTS["REPOSITORY_RETRY_ATTEMPTS"],
    delay=SYSTEM_CONSTANTS["REPOSITORY_RETRY_DELAY_SECONDS"],
    backoff_factor=2.0,
    exceptions=(sqlite3.OperationalError,)
)


class SqliteSecurityRepository(SecurityRepositoryInterface):
    """Stores sensors and status values in a SQLite database."""

    def __init__(self, database_path: str = DEFAULT_PATHS["database_file"]):
        """
        Initialize the repository and create its schema if needed.

        Args:
            database_path: Path to SQLite database file
        """
        self.database_path = database_path
        self._initialize_database()

    def get_alarm_status(self) -> AlarmStatus:
        value = self._get_setting(ALARM_STATUS_KEY)
        return AlarmStatus(value) if value else AlarmStatus.NO_ALARM

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._set_setting(ALARM_STATUS_KEY, alarm_status.value)

    def get_arming_status(self) -> ArmingStatus:
        value = self._get_setting(ARMING_STATUS_KEY)
        return ArmingStatus(value) if value else ArmingStatus.DISARMED

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._set_setting(ARMING_STATUS_KEY, arming_status.value)

    def get_sensors(self) -> Set[Sensor]:
        rows = self._execute(
            "SELECT sensor_id, name, sensor_type, active FROM sensors",
            fetch=True
        )
        return {
            Sensor(
                name=name,
                sensor_type=SensorType(sensor_type),
                active=bool(active),
                sensor_id=sensor_id
            )
            for sensor_id, name, sensor_type, active in rows
        }

    def add_sensor(self, sensor: Sensor) -> None:
        self._upsert_sensor(sensor)
        logger.debug(f"Stored sensor {sensor.sensor_id}")

    def remove_sensor(self, sensor: Sensor) -> None:
        self._execute("DELETE FROM sensors WHERE sensor_id = ?", (sensor.sensor_id,))

    def update_sensor(self, sensor: Sensor) -> None:
        self._upsert_sensor(sensor)

    def get_repository_info(self) -> Dict[str, Any]:
        """Get repository information."""
        count = self._execute("SELECT COUNT(*) FROM sensors", fetch=True)[0][0]
        return {
            "database_path": self.database_path,
            "database_exists": os.path.exists(self.database_path),
            "sensor_count": count,
            "alarm_status": self.get_alarm_status().value,
            "arming_status": self.get_arming_status().value
        }

    def _initialize_database(self) -> None:
        """Create the database directory and tables."""
        directory = os.path.dirname(self.database_path)
        if directory:
            ensure_directory_exists(directory)

        self._execute("""
            CREATE TABLE IF NOT EXISTS sensors (
                sensor_id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                sensor_type TEXT NOT NULL,
                active INTEGER NOT NULL DEFAULT 0
            )
        """)
        self._execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        logger.info(f"Security repository initialized: {self.database_path}")

    def _upsert_sensor(self, sensor: Sensor) -> None:
        self._execute("""
            INSERT INTO sensors (sensor_id, name, sensor_type, active)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(sensor_id) DO UPDATE SET
                name = excluded.name,
                sensor_type = excluded.sensor_type,
                active = excluded.active
        """, (sensor.sensor_id, sensor.name, sensor.sensor_type.value, int(sensor.active)))

    def _get_setting(self, key: str):
        rows = self._execute("SELECT value FROM settings WHERE key = ?", (key,), fetch=True)
        return rows[0][0] if rows else None

    def _set_setting(self, key: str, value: str) -> None:
        self._execute("""
            INSERT INTO settings (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """, (key, value))

    def _execute(self, sql: str, params: tuple = (), fetch: bool = False):
        try:
            return self._execute_with_retry(sql, params, fetch)
        except sqlite3.Error as e:
            logger.error(f"Repository query failed: {e}")
            raise RepositoryError(str(e)) from e

    @_retry_transient
    def _execute_with_retry(self, sql: str, params: tuple, fetch: bool):
        conn = sqlite3.connect(self.database_path)
        try:
            with conn:
                cursor = conn.execute(sql, params)
                return cursor.fetchall() if fetch else None
        finally:
            conn.close()
