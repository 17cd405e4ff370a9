"""Registration admission and registration read models.

A new registration is CONFIRMED while the event has fewer CONFIRMED
registrations than its capacity, and WAITLISTED otherwise. The count and the
insert happen in one store transaction (see RegistrationStore.create_admitted).

Cancelling a registration never promotes a waitlisted one.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from ..db import IntegrityConstraintError
from ..models import Registration, RegistrationStatus
from ..stores import EventStore, RegistrationStore
from ..utils.timezone import now_utc
from .event_service import EventService
from .exceptions import NotFoundError, ForbiddenError, ConflictError, InvalidArgumentError
from .schemas import EventView, RegistrationView, RegistrationWithEvent, parse_enum

logger = logging.getLogger(__name__)

# Allowed status changes. Staying in the same status is always allowed.
ALLOWED_TRANSITIONS: Dict[RegistrationStatus, frozenset] = {
    RegistrationStatus.CONFIRMED: frozenset({RegistrationStatus.WAITLISTED, RegistrationStatus.CANCELLED}),
    RegistrationStatus.WAITLISTED: frozenset({RegistrationStatus.CONFIRMED, RegistrationStatus.CANCELLED}),
    RegistrationStatus.CANCELLED: frozenset(),
}

def is_allowed_transition(current: RegistrationStatus, new: RegistrationStatus) -> bool:
    """Whether a registration may move from current to new."""
    return current == new or new in ALLOWED_TRANSITIONS[current]

class RegistrationService:
    """Register, cancel and inspect registrations."""
    
    def __init__(
        self,
        registration_store: RegistrationStore,
        event_store: EventStore,
        event_service: Optional[EventService] = None
    ):
        self.registration_store = registration_store
        self.event_store = event_store
        self.event_service = event_service or EventService(event_store, registration_store)
    
    def register(self, user_id: str, event_id: str, notes: Optional[str] = None) -> RegistrationView:
        """
        Register a user for an event.
        
        Args:
            user_id: ID of the registering user
            event_id: ID of the event
            notes: Optional notes from the registrant
        
        Returns:
            RegistrationView: The new registration, CONFIRMED if the event had
            free capacity and WAITLISTED otherwise
        
        Raises:
            NotFoundError: If the event does not exist
            ConflictError: If the user already registered for the event,
                even if that registration was cancelled
        """
        event = self.event_store.get(event_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        if self.registration_store.exists_by_event_and_user(event_id, user_id):
            logger.warning(f"User {user_id} is already registered for event {event_id}")
            raise ConflictError("Already registered for this event")
        
        registration = Registration(
            event_id=event_id,
            user_id=user_id,
            registration_date=now_utc(),
            notes=notes,
            attended=False,
        )
        try:
            stored = self.registration_store.create_admitted(registration)
        except IntegrityConstraintError as e:
            # Lost a race against a concurrent registration by the same user
            raise ConflictError("Already registered for this event") from e
        if stored is None:
            raise NotFoundError(f"Event {event_id} not found")
        
        logger.info(
            f"User {user_id} registered for event {event_id} as {stored.status.value} "
            f"(registration {stored.id})"
        )
        return RegistrationView.from_model(stored)
    
    def cancel_registration(self, registration_id: str, user_id: str) -> None:
        """
        Cancel a registration. Waitlisted registrations are not promoted.
        
        Raises:
            NotFoundError: If the registration does not exist
            ForbiddenError: If user_id does not own the registration
        """
        registration = self._get_registration(registration_id)
        if registration.user_id != user_id:
            logger.warning(
                f"User {user_id} tried to cancel registration {registration_id} "
                f"owned by {registration.user_id}"
            )
            raise ForbiddenError("Not authorized to cancel this registration")
        registration.status = RegistrationStatus.CANCELLED
        self.registration_store.save(registration)
        logger.info(f"Registration {registration_id} cancelled by {user_id}")
    
    def mark_attendance(
        self,
        registration_id: str,
        attended: bool,
        organizer_id: Optional[str] = None
    ) -> RegistrationView:
        """
        Record whether the registrant attended.
        
        Args:
            registration_id: ID of the registration
            attended: Attendance flag to store
            organizer_id: When given, must be the organizer of the event
        
        Raises:
            NotFoundError: If the registration (or, when checking the
                organizer, its event) does not exist
            ForbiddenError: If organizer_id is given and does not own the event
        """
        registration = self._get_registration(registration_id)
        if organizer_id is not None:
            event = self.event_store.get(registration.event_id)
            if event is None:
                raise NotFoundError(f"Event {registration.event_id} not found")
            if event.organizer_id != organizer_id:
                raise ForbiddenError("Only the event organizer can mark attendance")
        registration.attended = bool(attended)
        registration = self.registration_store.save(registration)
        return RegistrationView.from_model(registration)
    
    def update_registration(self, registration_id: str, status, notes: Optional[str]) -> RegistrationView:
        """
        Change the status and notes of a registration.
        
        Allowed status changes: CONFIRMED <-> WAITLISTED and anything to
        CANCELLED. A cancelled registration stays cancelled.
        
        This is a manual override: moving a registration to CONFIRMED does not
        go through admission, so it may push the confirmed count above the
        event's capacity. That is allowed and logged as a warning.
        
        Raises:
            NotFoundError: If the registration does not exist
            InvalidArgumentError: If status is unknown or the change is not allowed
        """
        registration = self._get_registration(registration_id)
        new_status = parse_enum(RegistrationStatus, status, "registration status")
        if not is_allowed_transition(registration.status, new_status):
            raise InvalidArgumentError(
                f"Cannot change registration status from {registration.status.value} to {new_status.value}"
            )
        if new_status == RegistrationStatus.CONFIRMED and registration.status != RegistrationStatus.CONFIRMED:
            self._warn_if_over_capacity(registration.event_id)
        registration.status = new_status
        registration.notes = notes
        registration = self.registration_store.save(registration)
        logger.info(f"Registration {registration_id} updated to {new_status.value}")
        return RegistrationView.from_model(registration)
    
    def get_registration(self, registration_id: str) -> RegistrationView:
        return RegistrationView.from_model(self._get_registration(registration_id))
    
    def get_registrations_by_user(self, user_id: str) -> List[RegistrationView]:
        return [RegistrationView.from_model(r) for r in self.registration_store.find_by_user(user_id)]
    
    def get_registrations_by_event(self, event_id: str) -> List[RegistrationView]:
        return [RegistrationView.from_model(r) for r in self.registration_store.find_by_event(event_id)]
    
    def get_confirmed_registrations_by_user(self, user_id: str) -> List[RegistrationView]:
        return [
            RegistrationView.from_model(r)
            for r in self.registration_store.find_by_user(user_id)
            if r.status == RegistrationStatus.CONFIRMED
        ]
    
    # --- Composite views ---
    
    def iter_registrations_with_event(
        self,
        user_id: str,
        include: Callable[[Registration], bool] = lambda registration: True
    ) -> Iterator[RegistrationWithEvent]:
        """
        Yield the user's registrations paired with their events.
        
        Registrations filtered out by include, and registrations whose event
        no longer exists, are skipped. Each call starts a fresh pass over the
        store.
        """
        for registration in self.registration_store.find_by_user(user_id):
            if not include(registration):
                continue
            event = self.event_store.get(registration.event_id)
            if event is None:
                logger.debug(
                    f"Skipping registration {registration.id}: event {registration.event_id} is gone"
                )
                continue
            yield RegistrationWithEvent(
                registration=RegistrationView.from_model(registration),
                event=self.event_service.to_view(event),
            )
    
    def get_registered_events_for_user(self, user_id: str) -> List[EventView]:
        """Events the user has registered for, whatever the registration status."""
        return [pair.event for pair in self.iter_registrations_with_event(user_id)]
    
    def get_confirmed_registrations_with_event_by_user(self, user_id: str) -> List[RegistrationWithEvent]:
        return list(self.iter_registrations_with_event(
            user_id, lambda registration: registration.status == RegistrationStatus.CONFIRMED
        ))
    
    def get_active_registrations_with_event_by_user(self, user_id: str) -> List[RegistrationWithEvent]:
        """Confirmed and waitlisted registrations with their events."""
        return list(self.iter_registrations_with_event(
            user_id, lambda registration: registration.status != RegistrationStatus.CANCELLED
        ))
    
    def _warn_if_over_capacity(self, event_id: str) -> None:
        event = self.event_store.get(event_id)
        if event is None:
            return
        confirmed = self.registration_store.count_by_event_and_status(event_id, RegistrationStatus.CONFIRMED)
        if confirmed >= event.capacity:
            logger.warning(
                f"Confirming a registration for event {event_id} beyond capacity "
                f"({confirmed + 1}/{event.capacity} confirmed)"
            )
    
    def _get_registration(self, registration_id: str) -> Registration:
        registration = self.registration_store.get(registration_id)
        if registration is None:
            raise NotFoundError(f"Registration {registration_id} not found")
        return registration
