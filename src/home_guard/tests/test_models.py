"""
Tests for domain models and configuration
"""

import pytest
from pydantic import ValidationError

from home_guard.config import SecurityConfig
from home_guard.domain.enums import AlarmStatus, ArmingStatus, SensorType
from home_guard.domain.models import Sensor


class TestSensor:

    def test_defaults_inactive(self):
        sensor = Sensor(sensor_id="s1", sensor_type=SensorType.MOTION)

        assert sensor.active is False

    def test_active_is_mutable(self):
        sensor = Sensor(sensor_id="s1", sensor_type=SensorType.MOTION)

        sensor.active = True

        assert sensor.active is True

    @pytest.mark.parametrize("field, value", [
        ("sensor_id", "other"),
        ("sensor_type", SensorType.DOOR),
    ])
    def test_identity_is_frozen(self, field, value):
        sensor = Sensor(sensor_id="s1", sensor_type=SensorType.MOTION)

        with pytest.raises(ValidationError):
            setattr(sensor, field, value)

    def test_equality_by_id(self):
        a = Sensor(sensor_id="s1", sensor_type=SensorType.DOOR, active=True)
        b = Sensor(sensor_id="s1", sensor_type=SensorType.DOOR, active=False)

        assert a == b
        assert len({a, b}) == 1

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Sensor(sensor_id="", sensor_type=SensorType.DOOR)

    def test_sorted_by_name(self):
        window = Sensor(sensor_id="b", sensor_type=SensorType.WINDOW, name="Attic")
        door = Sensor(sensor_id="a", sensor_type=SensorType.DOOR, name="Cellar")

        assert sorted([door, window]) == [window, door]


class TestEnums:

    def test_descriptions(self):
        assert AlarmStatus.ALARM.description == "Awooga!"
        assert ArmingStatus.ARMED_HOME.description == "Armed - At Home"

    def test_is_armed(self):
        assert not ArmingStatus.DISARMED.is_armed
        assert ArmingStatus.ARMED_HOME.is_armed
        assert ArmingStatus.ARMED_AWAY.is_armed


class TestSecurityConfig:

    def test_defaults(self):
        config = SecurityConfig()

        assert config.cat_confidence_threshold == 50.0
        assert config.use_fake_image_service is False

    @pytest.mark.parametrize("kwargs", [
        {"cat_confidence_threshold": -1.0},
        {"cat_confidence_threshold": 101.0},
        {"fake_cat_probability": 1.5},
    ])
    def test_out_of_range_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SecurityConfig(**kwargs)
