"""Registration persistence."""

import logging
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ..db import Database, with_retry, execute_in_transaction
from ..models import Event, Registration, RegistrationStatus

logger = logging.getLogger(__name__)

class RegistrationStore:
    """SQLAlchemy-backed store for Registration rows."""
    
    def __init__(self, db: Database):
        self.db = db
    
    @with_retry()
    def get(self, registration_id: str) -> Optional[Registration]:
        """Get a registration by ID, or None if it does not exist."""
        with self.db.session() as session:
            return session.get(Registration, registration_id)
    
    @with_retry()
    def find_by_event(self, event_id: str) -> List[Registration]:
        """Get all registrations for an event in registration order."""
        with self.db.session() as session:
            query = (
                select(Registration)
                .where(Registration.event_id == event_id)
                .order_by(Registration.registration_date, Registration.id)
            )
            return list(session.scalars(query))
    
    @with_retry()
    def find_by_user(self, user_id: str) -> List[Registration]:
        """Get all registrations made by a user in registration order."""
        with self.db.session() as session:
            query = (
                select(Registration)
                .where(Registration.user_id == user_id)
                .order_by(Registration.registration_date, Registration.id)
            )
            return list(session.scalars(query))
    
    @with_retry()
    def exists_by_event_and_user(self, event_id: str, user_id: str) -> bool:
        """Whether the user has ever registered for the event, whatever the status."""
        with self.db.session() as session:
            query = (
                select(Registration.id)
                .where(
                    Registration.event_id == event_id,
                    Registration.user_id == user_id,
                )
                .limit(1)
            )
            return session.execute(query).first() is not None
    
    @with_retry()
    def count_by_event_and_status(self, event_id: str, status: RegistrationStatus) -> int:
        """Count the registrations of an event that have the given status."""
        with self.db.session() as session:
            return self._count(session, event_id, status)
    
    def save(self, registration: Registration) -> Registration:
        """Insert or update a registration and return the stored copy."""
        with self.db.session() as session:
            stored = session.merge(registration)
        logger.debug(f"Saved {stored}")
        return stored
    
    def create_admitted(self, registration: Registration) -> Optional[Registration]:
        """
        Insert a new registration, deciding its status inside one transaction.
        
        The event row is locked first with SELECT ... FOR UPDATE, then the
        confirmed count is compared against the event's capacity and the
        registration is inserted as CONFIRMED or WAITLISTED. On PostgreSQL
        concurrent registrants for the same event queue on the lock and can
        never push the confirmed count above capacity. SQLite has no row locks
        and the engine shares one connection between threads, so there the
        guarantee only holds for sequential calls.
        
        Args:
            registration: New registration; its status is overwritten
        
        Returns:
            The stored registration, or None if the event does not exist
        
        Raises:
            IntegrityConstraintError: If the user already registered for the
                event (concurrent duplicate)
        """
        return execute_in_transaction(self.db, self._admit, registration)
    
    def _admit(self, session: Session, registration: Registration) -> Optional[Registration]:
        query = select(Event.capacity).where(Event.id == registration.event_id)
        if self.db.supports_row_locks:
            query = query.with_for_update()
        row = session.execute(query).first()
        if row is None:
            return None
        
        capacity = row[0] or 0
        confirmed = self._count(session, registration.event_id, RegistrationStatus.CONFIRMED)
        registration.status = (
            RegistrationStatus.CONFIRMED if confirmed < capacity
            else RegistrationStatus.WAITLISTED
        )
        session.add(registration)
        session.flush()
        
        logger.debug(
            f"Admitted {registration} ({confirmed}/{capacity} confirmed before insert)"
        )
        return registration
    
    @staticmethod
    def _count(session, event_id: str, status: RegistrationStatus) -> int:
        query = (
            select(func.count())
            .select_from(Registration)
            .where(Registration.event_id == event_id, Registration.status == status)
        )
        return session.scalar(query) or 0
