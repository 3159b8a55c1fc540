"""
Security Repository

Owns alarm status, arming status and the sensor set. The SecurityService
only holds a reference to a repository and never caches its state.

- SecurityRepository: abstract interface consumed by the engine
- InMemorySecurityRepository: process-local state (tests, demos)
- FileSecurityRepository: JSON file persistence for the edge server
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor, SecurityState


logger = logging.getLogger(__name__)


# =============================================================================
# Repository Interface
# =============================================================================

class SecurityRepository(ABC):
    """Status and sensor storage used by the SecurityService."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        pass

    @abstractmethod
    def get_sensors(self) -> set[Sensor]:
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        pass


# =============================================================================
# In-Memory Repository
# =============================================================================

class InMemorySecurityRepository(SecurityRepository):
    """Keeps all state in process memory.

    Sensors are stored by id; ``update_sensor`` replaces the stored record
    with the given one, inserting it if it was never added.
    """

    def __init__(self, state: SecurityState | None = None):
        state = state or SecurityState()
        self._alarm_status = state.alarm_status
        self._arming_status = state.arming_status
        self._sensors: dict[str, Sensor] = {s.sensor_id: s for s in state.sensors}

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status
        self._changed()

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status
        self._changed()

    def get_sensors(self) -> set[Sensor]:
        return set(self._sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor
        self._changed()

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(sensor.sensor_id, None)
        self._changed()

    def update_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor
        self._changed()

    def snapshot(self) -> SecurityState:
        return SecurityState(
            alarm_status=self._alarm_status,
            arming_status=self._arming_status,
            sensors=sorted(self._sensors.values()),
        )

    def _changed(self) -> None:
        """Hook run after every mutation."""


# =============================================================================
# File Repository
# =============================================================================

class FileSecurityRepository(InMemorySecurityRepository):
    """In-memory repository mirrored to a JSON file after every write.

    A missing file starts from the baseline state. A corrupt file raises
    pydantic.ValidationError on construction.
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        if self.filepath.exists():
            state = SecurityState.model_validate_json(
                self.filepath.read_text(encoding="utf-8")
            )
            logger.info(
                "Loaded security state from %s (%d sensors)",
                self.filepath, len(state.sensors),
            )
        else:
            state = SecurityState()
            logger.info("No state file at %s, starting from defaults", self.filepath)

        super().__init__(state)

    def _changed(self) -> None:
        tmp_path = self.filepath.with_suffix(self.filepath.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(self.snapshot().model_dump_json(indent=2))
        tmp_path.replace(self.filepath)
        logger.debug("Persisted security state to %s", self.filepath)
