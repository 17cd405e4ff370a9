"""Registration model definition."""

from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, Index, UniqueConstraint

from .base import Base, generate_id
from .enums import RegistrationStatus
from ..utils.timezone import ensure_utc, now_utc

class Registration(Base):
    """
    A user's registration for an event.
    
    Fields:
        id: Unique identifier (opaque string)
        event_id: ID of the event registered for
        user_id: ID of the registering user
        status: Confirmed, waitlisted or cancelled
        registration_date: When the registration was made
        notes: Free-form notes from the registrant (optional)
        attended: Whether the user showed up
    
    A user registers for an event at most once, cancelled registrations
    included; the unique constraint below backs the service-level existence
    check.
    """
    __tablename__ = 'registrations'
    __table_args__ = (
        Index('ix_registrations_event_id_status', 'event_id', 'status'),
        Index('ix_registrations_user_id', 'user_id'),
        UniqueConstraint('event_id', 'user_id', name='uq_registrations_event_user'),
    )
    
    id = Column(String(32), primary_key=True, default=generate_id)
    event_id = Column(String(32), nullable=False)
    user_id = Column(String(64), nullable=False)
    status = Column(Enum(RegistrationStatus, native_enum=False, length=16), nullable=False)
    registration_date = Column(DateTime(timezone=True), default=now_utc)
    notes = Column(Text)
    attended = Column(Boolean, nullable=False, default=False)
    
    def __init__(self, **kwargs):
        """Initialize Registration with the given attributes."""
        kwargs.setdefault('id', generate_id())
        if 'registration_date' in kwargs and kwargs['registration_date'] is not None:
            kwargs['registration_date'] = ensure_utc(kwargs['registration_date'])
        kwargs.setdefault('attended', False)
        
        super().__init__(**kwargs)
    
    def __str__(self) -> str:
        """String representation."""
        return f"Registration(id={self.id}, event_id={self.event_id}, user_id={self.user_id}, status={self.status})"
