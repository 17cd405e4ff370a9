"""Enumerations shared by the models and services."""

from enum import Enum

class EventCategory(str, Enum):
    """Category an event is listed under."""
    CONFERENCE = 'CONFERENCE'
    WORKSHOP = 'WORKSHOP'
    SEMINAR = 'SEMINAR'
    MEETUP = 'MEETUP'
    WEBINAR = 'WEBINAR'
    NETWORKING = 'NETWORKING'
    CONCERT = 'CONCERT'
    SPORTS = 'SPORTS'
    OTHER = 'OTHER'

class EventStatus(str, Enum):
    """Lifecycle status of an event. CANCELLED doubles as the soft-deleted state."""
    DRAFT = 'DRAFT'
    PUBLISHED = 'PUBLISHED'
    CANCELLED = 'CANCELLED'

class LocationType(str, Enum):
    """Where an event takes place."""
    PHYSICAL = 'PHYSICAL'
    VIRTUAL = 'VIRTUAL'
    HYBRID = 'HYBRID'

class RegistrationStatus(str, Enum):
    """Status of a user's registration for an event."""
    CONFIRMED = 'CONFIRMED'
    WAITLISTED = 'WAITLISTED'
    CANCELLED = 'CANCELLED'
