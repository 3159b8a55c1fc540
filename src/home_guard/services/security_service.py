"""
Home Guard Security Service

Alarm decision engine. Applies the alarm rules to three kinds of events:

1. Sensor activation changes
2. Processed camera images (cat detection)
3. Arming status changes

Alarm status transitions:
NO_ALARM → PENDING_ALARM → ALARM

Key rules:
1. While DISARMED, sensor changes never move alarm status, except that
   activating a sensor while ALARM is stored drops it to PENDING_ALARM
2. While armed, ALARM is sticky against sensor churn
3. Disarming always resets to NO_ALARM
4. Arming deactivates every sensor without running the activation rules

All state lives in the SecurityRepository. The service only owns its
listener registrations.
"""

import logging
from typing import Any, Optional

from ..config import SecurityConfig
from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor
from ..hardware.image_service import ImageService
from .repository import SecurityRepository
from .status_listener import StatusListener


logger = logging.getLogger(__name__)


class SecurityService:
    """Alarm decision engine.

    Not thread-safe: callers in a multi-threaded host must serialize calls.
    """

    def __init__(
        self,
        security_repository: SecurityRepository,
        image_service: ImageService,
        config: Optional[SecurityConfig] = None,
    ):
        self.security_repository = security_repository
        self.image_service = image_service
        self.config = config or SecurityConfig()

        self._status_listeners: list[StatusListener] = []
        self._cat_detected = False

    @property
    def cat_detected(self) -> bool:
        """Result of the most recently processed image."""
        return self._cat_detected

    # =========================================================================
    # Arming
    # =========================================================================

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Change the arming mode.

        DISARMED always clears the alarm. Arming resets every sensor to
        inactive; arming HOME while a cat is in view raises the alarm.
        """
        if self._cat_detected and arming_status == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)

        if arming_status == ArmingStatus.DISARMED:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            for sensor in self.security_repository.get_sensors():
                sensor.active = False
                self.security_repository.update_sensor(sensor)

        self.security_repository.set_arming_status(arming_status)
        logger.info("Arming status set to %s", arming_status.value)

        if arming_status.is_armed:
            for listener in list(self._status_listeners):
                listener.sensor_status_changed()

    # =========================================================================
    # Alarm Status
    # =========================================================================

    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Persist a new alarm status and notify every listener."""
        self.security_repository.set_alarm_status(status)
        logger.info("Alarm status set to %s", status.value)

        for listener in list(self._status_listeners):
            listener.notify(status)

    def get_alarm_status(self) -> AlarmStatus:
        return self.security_repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.security_repository.get_arming_status()

    # =========================================================================
    # Sensor Activation
    # =========================================================================

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Record a sensor state change and apply the alarm rules.

        The new flag is persisted before any rule is evaluated.
        """
        was_active = sensor.active
        sensor.active = active
        self.security_repository.update_sensor(sensor)

        if not active and not was_active:
            return

        arming_status = self.security_repository.get_arming_status()
        alarm_status = self.security_repository.get_alarm_status()

        if arming_status == ArmingStatus.DISARMED:
            if active and alarm_status == AlarmStatus.ALARM:
                self.set_alarm_status(AlarmStatus.PENDING_ALARM)
            return

        if alarm_status == AlarmStatus.ALARM:
            return

        if active:
            self._handle_sensor_activated(alarm_status)
        else:
            self._handle_sensor_deactivated(alarm_status)

    def _handle_sensor_activated(self, alarm_status: AlarmStatus) -> None:
        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self, alarm_status: AlarmStatus) -> None:
        if alarm_status == AlarmStatus.PENDING_ALARM and not self._any_sensor_active():
            self.set_alarm_status(AlarmStatus.NO_ALARM)

    def _any_sensor_active(self) -> bool:
        return any(s.active for s in self.security_repository.get_sensors())

    # =========================================================================
    # Image Processing
    # =========================================================================

    def process_image(self, image: Any) -> None:
        """Run cat detection on a camera frame and apply the result."""
        cat_detected = self.image_service.image_contains_cat(
            image, self.config.cat_confidence_threshold
        )
        self._cat_detected = cat_detected
        logger.debug("Image processed, cat detected: %s", cat_detected)

        if cat_detected:
            if self.security_repository.get_arming_status() == ArmingStatus.ARMED_HOME:
                self.set_alarm_status(AlarmStatus.ALARM)
        elif not self._any_sensor_active():
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        for listener in list(self._status_listeners):
            listener.cat_detected(cat_detected)

    # =========================================================================
    # Registry
    # =========================================================================

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a listener. Registering twice yields two notifications."""
        self._status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        """Drop one registration of the listener, if any."""
        if listener in self._status_listeners:
            self._status_listeners.remove(listener)

    def add_sensor(self, sensor: Sensor) -> None:
        self.security_repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.security_repository.remove_sensor(sensor)

    def get_sensors(self) -> set[Sensor]:
        return self.security_repository.get_sensors()
