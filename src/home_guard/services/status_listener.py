"""
Status Listeners

Observer interface the SecurityService calls on every alarm-status change,
plus a bounded in-process history listener used by the management API.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..domain.enums import AlarmStatus


class StatusListener(ABC):
    """Receives alarm-status changes from the SecurityService."""

    @abstractmethod
    def notify(self, status: AlarmStatus) -> None:
        """Called synchronously with the new alarm status."""
        pass

    def cat_detected(self, cat_detected: bool) -> None:
        """Called after every processed image."""

    def sensor_status_changed(self) -> None:
        """Called after arming resets the sensor set."""


@dataclass
class StatusChange:
    """One recorded alarm-status change."""
    status: AlarmStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class StatusHistory(StatusListener):
    """Keeps the most recent alarm-status changes, newest first."""

    def __init__(self, max_entries: int = 100):
        self.max_entries = max_entries
        self.changes: list[StatusChange] = []
        self.last_cat_detected: bool = False

    def notify(self, status: AlarmStatus) -> None:
        self.changes.insert(0, StatusChange(status=status))
        if len(self.changes) > self.max_entries:
            self.changes = self.changes[:self.max_entries]

    def cat_detected(self, cat_detected: bool) -> None:
        self.last_cat_detected = cat_detected

    def recent(self, limit: int = 10) -> list[StatusChange]:
        return self.changes[:limit]
