"""Request payloads and response views used by the services."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from math import ceil
from typing import Generic, List, Optional, Type, TypeVar

from ..models import (
    Event,
    EventCategory,
    LocationType,
    Registration,
    RegistrationStatus,
    EventStatus,
    User,
)
from ..config import settings
from ..utils.timezone import ensure_utc
from .exceptions import InvalidArgumentError

T = TypeVar('T')
E = TypeVar('E', bound=Enum)

def parse_enum(enum_cls: Type[E], value, label: Optional[str] = None) -> E:
    """
    Parse an enum member from a member or its name.
    
    Raises:
        InvalidArgumentError: If the value is not a member name of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        valid = ', '.join(member.name for member in enum_cls)
        raise InvalidArgumentError(
            f"Invalid {label or enum_cls.__name__} '{value}'. Must be one of: {valid}"
        ) from None

# --- Requests ---

@dataclass
class EventRequest:
    """
    Payload for creating or fully updating an event.
    
    Update requests overwrite every editable field, so omitted optional fields
    are cleared, the same as on creation.
    """
    title: str
    category: EventCategory
    capacity: int
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None
    description: Optional[str] = None
    location_type: Optional[LocationType] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    virtual_link: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
    requirements: Optional[str] = None
    agenda: Optional[str] = None

# Kept as separate names so callers read like the operations they feed
EventCreateRequest = EventRequest
EventUpdateRequest = EventRequest

@dataclass
class UserCreateRequest:
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None

@dataclass
class UserUpdateRequest:
    """Profile update. preferences/notifications are left alone when None."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    preferences: Optional[List[EventCategory]] = None
    notifications: Optional[bool] = None

# --- Views ---

@dataclass
class EventView:
    id: str
    title: str
    description: Optional[str]
    category: EventCategory
    organizer_id: str
    start_date_time: Optional[datetime]
    end_date_time: Optional[datetime]
    location_type: Optional[LocationType]
    address: Optional[str]
    city: Optional[str]
    country: Optional[str]
    virtual_link: Optional[str]
    capacity: int
    registration_deadline: Optional[datetime]
    status: EventStatus
    tags: List[str]
    image_url: Optional[str]
    requirements: Optional[str]
    agenda: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    registered_count: int = 0
    
    @classmethod
    def from_model(cls, event: Event, registered_count: int) -> 'EventView':
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            category=event.category,
            organizer_id=event.organizer_id,
            start_date_time=ensure_utc(event.start_date_time),
            end_date_time=ensure_utc(event.end_date_time),
            location_type=event.location_type,
            address=event.address,
            city=event.city,
            country=event.country,
            virtual_link=event.virtual_link,
            capacity=event.capacity,
            registration_deadline=ensure_utc(event.registration_deadline),
            status=event.status,
            tags=list(event.tags or []),
            image_url=event.image_url,
            requirements=event.requirements,
            agenda=event.agenda,
            created_at=ensure_utc(event.created_at),
            updated_at=ensure_utc(event.updated_at),
            registered_count=registered_count,
        )

@dataclass
class RegistrationView:
    id: str
    event_id: str
    user_id: str
    status: RegistrationStatus
    registration_date: Optional[datetime]
    notes: Optional[str]
    attended: bool
    
    @classmethod
    def from_model(cls, registration: Registration) -> 'RegistrationView':
        return cls(
            id=registration.id,
            event_id=registration.event_id,
            user_id=registration.user_id,
            status=registration.status,
            registration_date=ensure_utc(registration.registration_date),
            notes=registration.notes,
            attended=bool(registration.attended),
        )

@dataclass
class RegistrationWithEvent:
    """A registration paired with the event it refers to."""
    registration: RegistrationView
    event: EventView

@dataclass
class UserProfileView:
    id: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    phone: Optional[str]
    profile_image: Optional[str]
    preferences: List[EventCategory]
    notifications: bool
    active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    
    @classmethod
    def from_model(cls, user: User) -> 'UserProfileView':
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            profile_image=user.profile_image,
            preferences=[EventCategory(name) for name in (user.preferences or [])],
            notifications=bool(user.notifications),
            active=bool(user.active),
            created_at=ensure_utc(user.created_at),
            updated_at=ensure_utc(user.updated_at),
        )

@dataclass
class Page(Generic[T]):
    """One page of results. page is zero-based."""
    items: List[T]
    page: int
    size: int
    total: int
    
    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0
    
    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

def check_page_request(page: int, size: Optional[int]) -> int:
    """
    Validate pagination arguments.
    
    Returns:
        The effective page size (DEFAULT_PAGE_SIZE when size is None)
    
    Raises:
        InvalidArgumentError: If page is negative or size is out of range
    """
    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    if page < 0:
        raise InvalidArgumentError(f"page must be >= 0, got {page}")
    if size < 1 or size > settings.MAX_PAGE_SIZE:
        raise InvalidArgumentError(
            f"size must be between 1 and {settings.MAX_PAGE_SIZE}, got {size}"
        )
    return size

def paginate(items: List[T], page: int, size: int) -> Page[T]:
    """Slice an already fetched list into a page."""
    start = page * size
    return Page(items=items[start:start + size], page=page, size=size, total=len(items))
