"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Set

import numpy as np

from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus

NDArray = np.ndarray


class SecurityRepositoryInterface(ABC):
    """Interface for the store of sensors, alarm status and arming status."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist a new alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist a new arming status."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all sensors keyed by identity."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor; removing an unknown sensor does nothing."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist the current state of a sensor."""
        pass


class ImageServiceInterface(ABC):
    """Interface for camera image classification."""

    @abstractmethod
    def image_contains_cat(self, image: NDArray, confidence_threshold: float) -> bool:
        """Check if the image shows a cat with at least the given confidence percent."""
        pass


class StatusListener(ABC):
    """Receives alarm, cat detection and sensor change events."""

    @abstractmethod
    def notify(self, status: AlarmStatus) -> None:
        """Called when the alarm status changes."""
        pass

    @abstractmethod
    def cat_detected(self, cat_detected: bool) -> None:
        """Called after every camera image classification."""
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        """Called when sensor states may have changed."""
        pass
