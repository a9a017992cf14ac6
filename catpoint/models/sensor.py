"""Sensor data model."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class SensorType(Enum):
    """Kinds of binary-state detectors."""
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


@dataclass(eq=False)
class Sensor:
    """A door, window or motion sensor.

    Identity is the ``sensor_id``; the active flag is mutable state and
    takes no part in equality, hashing or ordering.
    """
    name: str
    sensor_type: SensorType
    active: bool = False
    sensor_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def sort_key(self) -> Tuple[str, str, str]:
        """Key used for deterministic iteration over sensor sets."""
        return (self.name, self.sensor_type.value, self.sensor_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __hash__(self) -> int:
        return hash(self.sensor_id)

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def copy(self) -> "Sensor":
        """Return an independent copy with the same identity."""
        return Sensor(
            name=self.name,
            sensor_type=self.sensor_type,
            active=self.active,
            sensor_id=self.sensor_id
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            'sensor_id': self.sensor_id,
            'name': self.name,
            'sensor_type': self.sensor_type.value,
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Build a sensor from a dictionary produced by ``to_dict``."""
        kwargs = {
            'name': data['name'],
            'sensor_type': SensorType(data['sensor_type']),
            'active': bool(data.get('active', False))
        }
        if data.get('sensor_id'):
            kwargs['sensor_id'] = data['sensor_id']
        return cls(**kwargs)
