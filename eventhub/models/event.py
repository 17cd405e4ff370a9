"""Event model definition."""

from sqlalchemy import Column, String, Text, Integer, DateTime, Enum, JSON, Index

from .base import Base, generate_id
from .enums import EventCategory, EventStatus, LocationType
from ..utils.timezone import ensure_utc, now_utc

class Event(Base):
    """
    Event model representing an event organized by a user.
    
    Fields:
        id: Unique identifier (opaque string)
        title: Event title
        description: Event description (optional)
        category: What kind of event this is
        organizer_id: ID of the user who owns the event
        start_date_time: When the event starts
        end_date_time: When the event ends
        location_type: Physical, virtual or hybrid
        address, city, country: Physical location (optional)
        virtual_link: Link for virtual attendance (optional)
        capacity: Number of confirmed spots available
        registration_deadline: When registration closes (optional)
        status: Draft, published or cancelled (soft deleted)
        tags: Free-form labels
        image_url: URL to the event's image (optional)
        requirements: What attendees need to bring or know (optional)
        agenda: Event agenda (optional)
        created_at: When the event was created
        updated_at: When the event was last modified
    """
    __tablename__ = 'events'
    __table_args__ = (
        Index('ix_events_organizer_id', 'organizer_id'),
        Index('ix_events_category', 'category'),
    )
    
    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    description = Column(Text)
    category = Column(Enum(EventCategory, native_enum=False, length=32), nullable=False,
                      default=EventCategory.OTHER)
    organizer_id = Column(String(64), nullable=False)
    start_date_time = Column(DateTime(timezone=True))
    end_date_time = Column(DateTime(timezone=True))
    
    # Location
    location_type = Column(Enum(LocationType, native_enum=False, length=16))
    address = Column(String)
    city = Column(String)
    country = Column(String)
    virtual_link = Column(String)
    
    capacity = Column(Integer, nullable=False, default=0)
    registration_deadline = Column(DateTime(timezone=True))
    status = Column(Enum(EventStatus, native_enum=False, length=16), nullable=False,
                    default=EventStatus.DRAFT)
    tags = Column(JSON, default=list)
    image_url = Column(String)
    requirements = Column(Text)
    agenda = Column(Text)
    
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc)
    
    def __init__(self, **kwargs):
        """Initialize Event with the given attributes."""
        kwargs.setdefault('id', generate_id())
        kwargs.setdefault('tags', [])
        # Ensure timezone-aware datetimes
        for field in ['start_date_time', 'end_date_time', 'registration_deadline',
                      'created_at', 'updated_at']:
            if field in kwargs and kwargs[field] is not None:
                kwargs[field] = ensure_utc(kwargs[field])
        
        super().__init__(**kwargs)
    
    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, status={self.status}, capacity={self.capacity})"
