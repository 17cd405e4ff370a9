"""Persistence stores for events, registrations and users.

Each store wraps a Database and exposes the lookups the services need.
Objects returned by a store are detached from their session; mutate them
and hand them back through save().
"""

from .event_store import EventStore
from .registration_store import RegistrationStore
from .user_store import UserStore

__all__ = ['EventStore', 'RegistrationStore', 'UserStore']
