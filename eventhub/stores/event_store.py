"""Event persistence."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, or_

from ..db import Database, with_retry
from ..models import Event, EventCategory

logger = logging.getLogger(__name__)

class EventStore:
    """SQLAlchemy-backed store for Event rows."""
    
    def __init__(self, db: Database):
        self.db = db
    
    @with_retry()
    def get(self, event_id: str) -> Optional[Event]:
        """Get an event by ID, or None if it does not exist."""
        with self.db.session() as session:
            return session.get(Event, event_id)
    
    @with_retry()
    def find_by_organizer(self, organizer_id: str) -> List[Event]:
        """Get every event owned by an organizer, oldest start first."""
        with self.db.session() as session:
            query = (
                select(Event)
                .where(Event.organizer_id == organizer_id)
                .order_by(Event.start_date_time, Event.id)
            )
            return list(session.scalars(query))
    
    @with_retry()
    def find_by_category(self, category: EventCategory) -> List[Event]:
        """Get every event in a category."""
        with self.db.session() as session:
            query = (
                select(Event)
                .where(Event.category == category)
                .order_by(Event.start_date_time, Event.id)
            )
            return list(session.scalars(query))
    
    @with_retry()
    def find_all(self, page: int, size: int) -> Tuple[List[Event], int]:
        """
        Get one page of events.
        
        Args:
            page: Zero-based page number
            size: Page size
        
        Returns:
            Tuple of (events on the page, total number of events)
        """
        with self.db.session() as session:
            total = session.scalar(select(func.count()).select_from(Event))
            query = (
                select(Event)
                .order_by(Event.start_date_time, Event.id)
                .offset(page * size)
                .limit(size)
            )
            return list(session.scalars(query)), total or 0
    
    @with_retry()
    def search(self, text: str, page: int, size: int) -> Tuple[List[Event], int]:
        """Case-insensitive substring search over title and description."""
        pattern = f"%{text}%"
        condition = or_(Event.title.ilike(pattern), Event.description.ilike(pattern))
        with self.db.session() as session:
            total = session.scalar(select(func.count()).select_from(Event).where(condition))
            query = (
                select(Event)
                .where(condition)
                .order_by(Event.start_date_time, Event.id)
                .offset(page * size)
                .limit(size)
            )
            return list(session.scalars(query)), total or 0
    
    def save(self, event: Event) -> Event:
        """Insert or update an event and return the stored copy."""
        with self.db.session() as session:
            stored = session.merge(event)
        logger.debug(f"Saved {stored}")
        return stored
