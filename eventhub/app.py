"""Application wiring: stores and services built on one Database."""

import logging
from dataclasses import dataclass
from typing import Optional

from .db import Database, get_database
from .services import EventService, RegistrationService, UserService
from .stores import EventStore, RegistrationStore, UserStore

logger = logging.getLogger(__name__)

@dataclass
class Services:
    """The services of the backend, sharing stores and a database."""
    db: Database
    events: EventService
    registrations: RegistrationService
    users: UserService

def create_services(db: Optional[Database] = None) -> Services:
    """
    Create the services.
    
    Args:
        db: Database to use. Defaults to the one configured from the environment.
    """
    db = db or get_database()
    event_store = EventStore(db)
    registration_store = RegistrationStore(db)
    user_store = UserStore(db)
    
    event_service = EventService(event_store, registration_store)
    return Services(
        db=db,
        events=event_service,
        registrations=RegistrationService(registration_store, event_store, event_service),
        users=UserService(user_store),
    )
