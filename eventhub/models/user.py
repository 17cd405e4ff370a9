"""User profile model definition."""

from sqlalchemy import Column, String, Boolean, DateTime, JSON

from .base import Base, generate_id
from ..utils.timezone import ensure_utc, now_utc

class User(Base):
    """
    User profile.
    
    Fields:
        id: Unique identifier (opaque string)
        email: Unique e-mail address
        first_name, last_name: Display name
        phone: Phone number (optional)
        profile_image: URL to the profile image (optional)
        preferences: Event category names the user is interested in
        notifications: Whether the user wants notifications
        active: False once the user has been (soft) deleted
        created_at / updated_at: Timestamps
    """
    __tablename__ = 'users'
    
    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String, nullable=False, unique=True)
    first_name = Column(String)
    last_name = Column(String)
    phone = Column(String)
    profile_image = Column(String)
    preferences = Column(JSON, default=list)
    notifications = Column(Boolean, nullable=False, default=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc)
    
    def __init__(self, **kwargs):
        """Initialize User with the given attributes."""
        kwargs.setdefault('id', generate_id())
        kwargs.setdefault('preferences', [])
        for field in ['created_at', 'updated_at']:
            if field in kwargs and kwargs[field] is not None:
                kwargs[field] = ensure_utc(kwargs[field])
        
        super().__init__(**kwargs)
    
    def __str__(self) -> str:
        """String representation."""
        return f"User(id={self.id}, email={self.email}, active={self.active})"
