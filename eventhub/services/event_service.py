"""Event lifecycle management.

Events are owned by their organizer: only the organizer may update, delete
or change the status of an event. Deleting is a soft delete that flips the
status to CANCELLED. Every EventView carries registered_count, the number of
CONFIRMED registrations, recomputed on each read.
"""

import logging
from typing import List, Optional

from ..config import settings
from ..models import Event, EventCategory, EventStatus, LocationType, RegistrationStatus
from ..stores import EventStore, RegistrationStore
from ..utils.timezone import now_utc, ensure_utc
from .exceptions import NotFoundError, ForbiddenError, InvalidArgumentError
from .schemas import (
    EventCreateRequest,
    EventUpdateRequest,
    EventRequest,
    EventView,
    Page,
    check_page_request,
    paginate,
    parse_enum,
)

logger = logging.getLogger(__name__)

class EventService:
    """Create, update, list and soft-delete events."""
    
    def __init__(self, event_store: EventStore, registration_store: RegistrationStore):
        self.event_store = event_store
        self.registration_store = registration_store
    
    def create_event(self, organizer_id: str, request: EventCreateRequest) -> EventView:
        """
        Create a published event owned by organizer_id.
        
        Raises:
            InvalidArgumentError: If the request fails validation
        """
        self._validate_request(request)
        now = now_utc()
        event = Event(organizer_id=organizer_id, status=EventStatus.PUBLISHED,
                      created_at=now, updated_at=now)
        self._apply_request(event, request)
        event = self.event_store.save(event)
        logger.info(f"Organizer {organizer_id} created event {event.id} ('{event.title}')")
        return self.to_view(event)
    
    def update_event(self, event_id: str, user_id: str, request: EventUpdateRequest) -> EventView:
        """
        Overwrite the editable fields of an event.
        
        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If user_id is not the organizer
            InvalidArgumentError: If the request fails validation
        """
        event = self._get_owned_event(event_id, user_id, "update")
        self._validate_request(request)
        self._apply_request(event, request)
        event.updated_at = now_utc()
        event = self.event_store.save(event)
        logger.info(f"Event {event_id} updated by {user_id}")
        return self.to_view(event)
    
    def delete_event(self, event_id: str, user_id: str) -> None:
        """
        Soft delete an event by marking it CANCELLED.
        
        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If user_id is not the organizer
        """
        event = self._get_owned_event(event_id, user_id, "delete")
        event.status = EventStatus.CANCELLED
        event.updated_at = now_utc()
        self.event_store.save(event)
        logger.info(f"Event {event_id} cancelled (soft delete) by {user_id}")
    
    def get_event(self, event_id: str) -> EventView:
        """Get a single event. Raises NotFoundError if it does not exist."""
        return self.to_view(self._get_event(event_id))
    
    def update_event_status(self, event_id: str, user_id: str, status) -> EventView:
        """
        Set the status of an event.
        
        The status is given as an EventStatus or its name. Any transition
        between known statuses is accepted.
        
        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If user_id is not the organizer
            InvalidArgumentError: If status is not a known status name; the
                event is left unchanged
        """
        event = self._get_owned_event(event_id, user_id, "change the status of")
        new_status = parse_enum(EventStatus, status, "event status")
        old_status = event.status
        event.status = new_status
        event.updated_at = now_utc()
        event = self.event_store.save(event)
        logger.info(f"Event {event_id} status {old_status.value} -> {new_status.value}")
        return self.to_view(event)
    
    def list_events(self, page: int = 0, size: Optional[int] = None) -> Page[EventView]:
        """List all events, paginated by the store."""
        size = check_page_request(page, size)
        events, total = self.event_store.find_all(page, size)
        return Page(items=[self.to_view(e) for e in events], page=page, size=size, total=total)
    
    def list_events_by_organizer(
        self,
        organizer_id: str,
        page: int = 0,
        size: Optional[int] = None
    ) -> Page[EventView]:
        """
        List the events owned by an organizer.
        
        Fetches all of the organizer's events and paginates in memory, which
        is fine while organizers own a handful of events each.
        """
        size = check_page_request(page, size)
        events = self.event_store.find_by_organizer(organizer_id)
        result = paginate(events, page, size)
        return Page(
            items=[self.to_view(e) for e in result.items],
            page=page,
            size=size,
            total=result.total,
        )
    
    def list_events_by_category(self, category) -> List[EventView]:
        """List all events of a category (EventCategory or its name)."""
        category = parse_enum(EventCategory, category, "category")
        return [self.to_view(e) for e in self.event_store.find_by_category(category)]
    
    def search_events(self, query: str, page: int = 0, size: Optional[int] = None) -> Page[EventView]:
        """Search titles and descriptions. A blank query lists all events."""
        if not query or not query.strip():
            return self.list_events(page, size)
        size = check_page_request(page, size)
        events, total = self.event_store.search(query.strip(), page, size)
        return Page(items=[self.to_view(e) for e in events], page=page, size=size, total=total)
    
    @staticmethod
    def list_categories() -> List[str]:
        """Names of all event categories."""
        return [category.name for category in EventCategory]
    
    def to_view(self, event: Event) -> EventView:
        """Build the response view of an event with a fresh registered_count."""
        registered_count = self.registration_store.count_by_event_and_status(
            event.id, RegistrationStatus.CONFIRMED
        )
        return EventView.from_model(event, registered_count)
    
    def _get_event(self, event_id: str) -> Event:
        event = self.event_store.get(event_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event
    
    def _get_owned_event(self, event_id: str, user_id: str, action: str) -> Event:
        event = self._get_event(event_id)
        if event.organizer_id != user_id:
            logger.warning(f"User {user_id} tried to {action} event {event_id} owned by {event.organizer_id}")
            raise ForbiddenError(f"Not authorized to {action} this event")
        return event
    
    @staticmethod
    def _validate_request(request: EventRequest) -> None:
        """Check the invariants of an event payload, normalizing enum fields in place."""
        if not request.title or not request.title.strip():
            raise InvalidArgumentError("title is required")
        if len(request.title) > settings.TITLE_MAX_LENGTH:
            raise InvalidArgumentError(
                f"Title must be {settings.TITLE_MAX_LENGTH} characters or less."
            )
        if isinstance(request.capacity, bool) or not isinstance(request.capacity, int):
            raise InvalidArgumentError("capacity must be an integer")
        if request.capacity < 0:
            raise InvalidArgumentError("capacity must be >= 0")
        
        request.category = parse_enum(EventCategory, request.category, "category")
        if request.location_type is not None:
            request.location_type = parse_enum(LocationType, request.location_type, "location type")
        
        start = ensure_utc(request.start_date_time)
        end = ensure_utc(request.end_date_time)
        if start and end and end < start:
            raise InvalidArgumentError("end_date_time must not be before start_date_time")
    
    @staticmethod
    def _apply_request(event: Event, request: EventRequest) -> None:
        event.title = request.title.strip()
        event.description = request.description
        event.category = request.category
        event.start_date_time = ensure_utc(request.start_date_time)
        event.end_date_time = ensure_utc(request.end_date_time)
        event.location_type = request.location_type
        event.address = request.address
        event.city = request.city
        event.country = request.country
        event.virtual_link = request.virtual_link
        event.capacity = request.capacity
        event.registration_deadline = ensure_utc(request.registration_deadline)
        event.tags = list(request.tags or [])
        event.image_url = request.image_url
        event.requirements = request.requirements
        event.agenda = request.agenda
