"""In-memory security repository."""

import threading
from typing import Dict, Set

from ..exceptions import ConfigurationError
from ..models.config import SecurityConfig
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from .interfaces import SecurityRepositoryInterface
from .sqlite_repository import SqliteSecurityRepository
from ..logging_config import get_logger

logger = get_logger("repository")


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Keeps sensors and status values in process memory.

    Sensors are stored as copies keyed by ``sensor_id``, so changes to a
    sensor object only reach the repository through ``update_sensor``.
    """

    def __init__(self,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._sensors: Dict[str, Sensor] = {}
        self._lock = threading.RLock()

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._lock:
            self._alarm_status = alarm_status

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._lock:
            self._arming_status = arming_status

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return {sensor.copy() for sensor in self._sensors.values()}

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._sensors[sensor.sensor_id] = sensor.copy()
        logger.debug(f"Stored sensor {sensor.sensor_id}")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._sensors.pop(sensor.sensor_id, None)

    def update_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._sensors[sensor.sensor_id] = sensor.copy()


def create_repository(config: SecurityConfig) -> SecurityRepositoryInterface:
    """Build the repository selected by the configuration."""
    if config.repository_type == "memory":
        return InMemorySecurityRepository()
    if config.repository_type == "sqlite":
        return SqliteSecurityRepository(config.database_path)
    raise ConfigurationError(f"Unknown repository type: {config.repository_type}")
