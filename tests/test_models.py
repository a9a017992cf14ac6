"""Unit tests for data models."""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint.models.sensor import Sensor, SensorType
from catpoint.models.status import AlarmStatus, ArmingStatus


class TestSensor(unittest.TestCase):
    """Test cases for Sensor."""

    def test_defaults(self):
        sensor = Sensor("Front Door", SensorType.DOOR)
        self.assertFalse(sensor.active)
        self.assertTrue(sensor.sensor_id)

    def test_identity_ignores_active_flag(self):
        """Sensors with the same id are equal and hash alike whatever their state."""
        sensor = Sensor("Front Door", SensorType.DOOR)
        copy = sensor.copy()
        copy.active = True

        self.assertEqual(sensor, copy)
        self.assertEqual(hash(sensor), hash(copy))
        self.assertEqual(len({sensor, copy}), 1)

    def test_same_name_different_sensors(self):
        first = Sensor("Window", SensorType.WINDOW)
        second = Sensor("Window", SensorType.WINDOW)
        self.assertNotEqual(first, second)
        self.assertEqual(len({first, second}), 2)

    def test_ordering(self):
        """Sensors sort by name, then type, then id."""
        hall = Sensor("Hall", SensorType.MOTION, sensor_id="b")
        door = Sensor("Hall", SensorType.DOOR, sensor_id="c")
        attic = Sensor("Attic", SensorType.WINDOW, sensor_id="a")
        twin = Sensor("Hall", SensorType.DOOR, sensor_id="a")

        self.assertEqual(sorted([hall, door, attic, twin]), [attic, twin, door, hall])

    def test_dict_round_trip(self):
        sensor = Sensor("Garage", SensorType.MOTION, active=True)

        data = sensor.to_dict()
        self.assertEqual(data['sensor_type'], 'MOTION')

        restored = Sensor.from_dict(data)
        self.assertEqual(restored, sensor)
        self.assertTrue(restored.active)
        self.assertEqual(restored.name, "Garage")

    def test_from_dict_without_id_assigns_one(self):
        sensor = Sensor.from_dict({'name': 'Porch', 'sensor_type': 'DOOR'})
        self.assertTrue(sensor.sensor_id)
        self.assertFalse(sensor.active)

    def test_from_dict_unknown_type(self):
        with self.assertRaises(ValueError):
            Sensor.from_dict({'name': 'Porch', 'sensor_type': 'LASER'})


class TestStatusEnums(unittest.TestCase):
    """Test cases for alarm and arming status."""

    def test_descriptions(self):
        self.assertEqual(AlarmStatus.NO_ALARM.description, "Cool and Good")
        self.assertEqual(AlarmStatus.PENDING_ALARM.description, "I'm in Danger...")
        self.assertEqual(AlarmStatus.ALARM.description, "Awooga!")
        self.assertEqual(ArmingStatus.ARMED_HOME.description, "Armed - At Home")
        self.assertEqual(ArmingStatus.ARMED_AWAY.description, "Armed - Away")
        self.assertEqual(ArmingStatus.DISARMED.description, "Disarmed")

    def test_is_armed(self):
        self.assertTrue(ArmingStatus.ARMED_HOME.is_armed())
        self.assertTrue(ArmingStatus.ARMED_AWAY.is_armed())
        self.assertFalse(ArmingStatus.DISARMED.is_armed())


if __name__ == '__main__':
    unittest.main()
