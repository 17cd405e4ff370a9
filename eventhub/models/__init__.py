"""Models package initialization."""

from .base import Base
from .enums import EventCategory, EventStatus, LocationType, RegistrationStatus
from .event import Event
from .registration import Registration
from .user import User

__all__ = [
    'Base',
    'Event',
    'Registration',
    'User',
    'EventCategory',
    'EventStatus',
    'LocationType',
    'RegistrationStatus',
]
