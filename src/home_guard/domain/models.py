"""
Home Guard Core Models

Sensor and persisted-state models. Uses Pydantic for validation and
serialization.
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import AlarmStatus, ArmingStatus, SensorType


# =============================================================================
# Sensor
# =============================================================================

class Sensor(BaseModel):
    """A monitored device with a boolean active flag.

    Identity and type are frozen after creation; only ``active`` (and the
    display name) may change. Sensors compare and hash by ``sensor_id`` so
    the same device is never stored twice in a set.
    """
    model_config = ConfigDict(validate_assignment=True)

    sensor_id: str = Field(frozen=True, min_length=1)
    sensor_type: SensorType = Field(frozen=True)
    name: str = ""
    active: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __hash__(self) -> int:
        return hash(self.sensor_id)

    def __lt__(self, other: "Sensor") -> bool:
        return (self.name, self.sensor_id) < (other.name, other.sensor_id)


# =============================================================================
# Persisted State
# =============================================================================

class SecurityState(BaseModel):
    """Snapshot written by the file repository."""
    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED
    sensors: list[Sensor] = Field(default_factory=list)
