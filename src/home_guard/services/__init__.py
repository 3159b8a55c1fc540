"""Home Guard Services"""

from .repository import (
    SecurityRepository,
    InMemorySecurityRepository,
    FileSecurityRepository,
)
from .status_listener import (
    StatusListener,
    StatusChange,
    StatusHistory,
)
from .security_service import SecurityService

__all__ = [
    # Repository
    'SecurityRepository',
    'InMemorySecurityRepository',
    'FileSecurityRepository',
    # Listeners
    'StatusListener',
    'StatusChange',
    'StatusHistory',
    # Engine
    'SecurityService',
]
