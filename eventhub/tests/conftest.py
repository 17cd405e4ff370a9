import pytest
from datetime import datetime, timedelta, timezone

from eventhub.app import create_services
from eventhub.db import Database, DatabaseConfig
from eventhub.models import EventCategory, LocationType
from eventhub.services import EventCreateRequest

from .constants import ORGANIZER




@pytest.fixture
def db():
    """A fresh in-memory SQLite database per test."""
    database = Database(DatabaseConfig(url="sqlite://"))
    database.init_db()
    yield database
    database.dispose()

@pytest.fixture
def services(db):
    return create_services(db)

@pytest.fixture
def make_request():
    def _make(**overrides):
        start = datetime(2030, 5, 1, 10, 0, tzinfo=timezone.utc)
        fields = dict(
            title="PyCon Meetup",
            category=EventCategory.MEETUP,
            capacity=2,
            start_date_time=start,
            end_date_time=start + timedelta(hours=2),
            description="Talks and pizza",
            location_type=LocationType.PHYSICAL,
            address="Gaustadalleen 23B",
            city="Oslo",
            country="Norway",
            tags=["python", "community"],
        )
        fields.update(overrides)
        return EventCreateRequest(**fields)
    return _make

@pytest.fixture
def make_event(services, make_request):
    """Create an event owned by ORGANIZER and return its view."""
    def _make(organizer_id=ORGANIZER, **overrides):
        return services.events.create_event(organizer_id, make_request(**overrides))
    return _make
