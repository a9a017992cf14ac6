"""Security service: the alarm state machine of the catpoint system."""

import logging
import threading
from typing import Dict, List, Optional, Set

from ..config.defaults import SYSTEM_CONSTANTS
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from .interfaces import (
    ImageServiceInterface,
    NDArray,
    SecurityRepositoryInterface,
    StatusListener
)
from .error_handler import global_error_handler, with_error_handling
from .error_decorators import log_execution_time
from ..logging_config import get_logger, log_with_context

logger = get_logger("security_service")

COMPONENT_NAME = "security_service"

# Next alarm status when a sensor activates while the system is armed.
# Every AlarmStatus must appear here.
SENSOR_ACTIVATED_TRANSITIONS: Dict[AlarmStatus, AlarmStatus] = {
    AlarmStatus.NO_ALARM: AlarmStatus.PENDING_ALARM,
    AlarmStatus.PENDING_ALARM: AlarmStatus.ALARM,
    AlarmStatus.ALARM: AlarmStatus.ALARM,
}

# Next alarm status when an active sensor is deactivated.
SENSOR_DEACTIVATED_TRANSITIONS: Dict[AlarmStatus, AlarmStatus] = {
    AlarmStatus.NO_ALARM: AlarmStatus.NO_ALARM,
    AlarmStatus.PENDING_ALARM: AlarmStatus.NO_ALARM,
    AlarmStatus.ALARM: AlarmStatus.ALARM,
}


class SecurityService:
    """Receives information about changes to the security system.

    Forwards updates to the repository and makes every decision about
    changing the alarm state. Listeners are told about alarm changes,
    camera results and sensor changes.
    """

    def __init__(self,
                 security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface):
        """
        Initialize security service.

        Args:
            security_repository: Store for sensors and status values
            image_service: Classifier used to look for cats in camera images
        """
        self.security_repository = security_repository
        self.image_service = image_service
        self.cat_detected = False
        self._status_listeners: Dict[int, StatusListener] = {}
        self._listeners_lock = threading.Lock()

        global_error_handler.register_component(COMPONENT_NAME)

    @with_error_handling(COMPONENT_NAME, reraise=True)
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set the arming status. Arming may also change alarm and sensor state."""
        if arming_status == ArmingStatus.DISARMED:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            if self.cat_detected:
                self.set_alarm_status(AlarmStatus.ALARM)
            # Snapshot: deactivation writes back to the repository
            for sensor in sorted(self.get_sensors()):
                self.change_sensor_activation_status(sensor, False)

        self.security_repository.set_arming_status(arming_status)
        logger.info(f"Arming status set to {arming_status.value}")

        for listener in self._listener_snapshot():
            listener.sensor_status_changed()

    @with_error_handling(COMPONENT_NAME, reraise=True)
    @log_execution_time(COMPONENT_NAME)
    def process_image(self, current_camera_image: NDArray) -> None:
        """Classify a camera image and update the alarm status accordingly."""
        cat = self.image_service.image_contains_cat(
            current_camera_image, SYSTEM_CONSTANTS["CAT_CONFIDENCE_THRESHOLD"]
        )
        self._handle_cat_detection(bool(cat))

    def _handle_cat_detection(self, cat: bool) -> None:
        if cat and self.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif not any(sensor.active for sensor in self.get_sensors()):
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            logger.debug("Active sensors keep the current alarm status")

        self.cat_detected = cat
        logger.info(f"Camera image processed: cat_detected={cat}")

        for listener in self._listener_snapshot():
            listener.cat_detected(cat)

    @with_error_handling(COMPONENT_NAME, reraise=True)
    def change_sensor_activation_status(self, sensor: Optional[Sensor], active: bool) -> None:
        """Change the activation status of a sensor and update the alarm status if necessary."""
        if sensor is None:
            logger.debug("No sensor given, nothing to change")
            return

        if active:
            self._handle_sensor_activated()
        elif sensor.active:
            self._handle_sensor_deactivated()
        else:
            logger.debug(f"Sensor {sensor.name} already inactive")
            return

        sensor.active = active
        self.security_repository.update_sensor(sensor)
        logger.debug(f"Sensor {sensor.name} set to active={active}")

    def _handle_sensor_activated(self) -> None:
        if self.security_repository.get_arming_status() == ArmingStatus.DISARMED:
            return

        current = self.security_repository.get_alarm_status()
        next_status = SENSOR_ACTIVATED_TRANSITIONS[current]
        if next_status != current:
            self.set_alarm_status(next_status)

    def _handle_sensor_deactivated(self) -> None:
        current = self.security_repository.get_alarm_status()
        next_status = SENSOR_DEACTIVATED_TRANSITIONS[current]
        if next_status != current:
            self.set_alarm_status(next_status)

    @with_error_handling(COMPONENT_NAME, reraise=True)
    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Change the alarm status of the system and notify all listeners."""
        self.security_repository.set_alarm_status(status)

        listeners = self._listener_snapshot()
        log_with_context(logger, logging.INFO, f"Alarm status set to {status.value}",
                         {"cat_detected": self.cat_detected, "listeners": len(listeners)})

        for listener in listeners:
            listener.notify(status)

    def add_status_listener(self, status_listener: StatusListener) -> None:
        """Register a listener for alarm system updates."""
        with self._listeners_lock:
            self._status_listeners[id(status_listener)] = status_listener

    def remove_status_listener(self, status_listener: StatusListener) -> None:
        key = id(status_listener)
        with self._listeners_lock:
            if key in self._status_listeners and self._status_listeners[key] is status_listener:
                del self._status_listeners[key]

    def get_status_listeners(self) -> List[StatusListener]:
        return self._listener_snapshot()

    def _listener_snapshot(self) -> List[StatusListener]:
        with self._listeners_lock:
            return list(self._status_listeners.values())

    def is_cat_detected(self) -> bool:
        return self.cat_detected

    def get_alarm_status(self) -> AlarmStatus:
        return self.security_repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.security_repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.security_repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self.security_repository.add_sensor(sensor)
        logger.info(f"Sensor added: {sensor.name} ({sensor.sensor_type.value})")

    def remove_sensor(self, sensor: Sensor) -> None:
        self.security_repository.remove_sensor(sensor)
        logger.info(f"Sensor removed: {sensor.name}")
