"""
Tests for Security Repositories - in-memory and JSON file persistence
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from home_guard.domain.enums import AlarmStatus, ArmingStatus, SensorType
from home_guard.domain.models import Sensor, SecurityState
from home_guard.services.repository import (
    FileSecurityRepository,
    InMemorySecurityRepository,
)
from home_guard.testing.standard_config import create_standard_sensors, seed_repository


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def door():
    return Sensor(sensor_id="sensor_door", sensor_type=SensorType.DOOR, name="Door")


def sensors_by_id(repo) -> dict[str, Sensor]:
    return {s.sensor_id: s for s in repo.get_sensors()}


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "security_state.json"


# =============================================================================
# InMemorySecurityRepository Tests
# =============================================================================

class TestInMemorySecurityRepository:
    """InMemorySecurityRepository test suite"""

    def test_baseline_state(self):
        repo = InMemorySecurityRepository()

        assert repo.get_alarm_status() == AlarmStatus.NO_ALARM
        assert repo.get_arming_status() == ArmingStatus.DISARMED
        assert repo.get_sensors() == set()

    def test_add_same_sensor_twice_stores_once(self, door):
        repo = InMemorySecurityRepository()

        repo.add_sensor(door)
        repo.add_sensor(door)

        assert len(repo.get_sensors()) == 1

    def test_remove_unknown_sensor_is_noop(self, door):
        repo = InMemorySecurityRepository()

        repo.remove_sensor(door)

        assert repo.get_sensors() == set()

    def test_update_sensor_replaces_record(self, door):
        repo = InMemorySecurityRepository()
        repo.add_sensor(door)

        updated = door.model_copy(update={"active": True})
        repo.update_sensor(updated)

        assert sensors_by_id(repo)["sensor_door"].active is True

    def test_update_unknown_sensor_inserts(self, door):
        repo = InMemorySecurityRepository()

        repo.update_sensor(door)

        assert repo.get_sensors() == {door}

    def test_snapshot_is_sorted_by_name(self):
        repo = InMemorySecurityRepository()
        for sensor in create_standard_sensors():
            repo.add_sensor(sensor)

        names = [s.name for s in repo.snapshot().sensors]

        assert names == sorted(names)


# =============================================================================
# FileSecurityRepository Tests
# =============================================================================

class TestFileSecurityRepository:
    """FileSecurityRepository test suite"""

    def test_missing_file_starts_from_defaults(self, state_file):
        repo = FileSecurityRepository(state_file)

        assert repo.get_alarm_status() == AlarmStatus.NO_ALARM
        assert repo.get_arming_status() == ArmingStatus.DISARMED
        assert state_file.parent.exists()

    def test_every_write_persists(self, state_file, door):
        repo = FileSecurityRepository(state_file)

        repo.add_sensor(door)
        repo.set_arming_status(ArmingStatus.ARMED_AWAY)

        data = json.loads(state_file.read_text(encoding="utf-8"))
        assert data["arming_status"] == "armed_away"
        assert data["sensors"][0]["sensor_id"] == "sensor_door"
        assert data["sensors"][0]["sensor_type"] == "door"

    def test_reload_restores_state(self, state_file, door):
        repo = FileSecurityRepository(state_file)
        repo.add_sensor(door)
        repo.set_arming_status(ArmingStatus.ARMED_HOME)
        repo.set_alarm_status(AlarmStatus.PENDING_ALARM)
        door.active = True
        repo.update_sensor(door)

        reloaded = FileSecurityRepository(state_file)

        assert reloaded.get_alarm_status() == AlarmStatus.PENDING_ALARM
        assert reloaded.get_arming_status() == ArmingStatus.ARMED_HOME
        assert sensors_by_id(reloaded)["sensor_door"].active is True

    def test_no_temp_file_left_behind(self, state_file, door):
        repo = FileSecurityRepository(state_file)
        repo.add_sensor(door)

        assert [p.name for p in state_file.parent.iterdir()] == [state_file.name]

    def test_corrupt_file_raises(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text('{"alarm_status": "on_fire"}', encoding="utf-8")

        with pytest.raises(ValidationError):
            FileSecurityRepository(state_file)

    def test_accepts_str_path(self, state_file):
        repo = FileSecurityRepository(str(state_file))

        assert isinstance(repo.filepath, Path)


# =============================================================================
# Standard Configuration Tests
# =============================================================================

class TestStandardConfig:

    def test_seed_empty_repository(self):
        repo = InMemorySecurityRepository()

        added = seed_repository(repo)

        assert added == 4
        assert {s.sensor_type for s in repo.get_sensors()} == set(SensorType)
        assert all(not s.active for s in repo.get_sensors())

    def test_seed_skips_populated_repository(self, door):
        repo = InMemorySecurityRepository(SecurityState(sensors=[door]))

        assert seed_repository(repo) == 0
        assert repo.get_sensors() == {door}
