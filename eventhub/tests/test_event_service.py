import pytest
from datetime import timedelta

from eventhub.models import EventCategory, EventStatus, LocationType
from eventhub.services import ForbiddenError, InvalidArgumentError, NotFoundError

from .constants import ORGANIZER, OTHER_ORGANIZER

def test_create_event_is_published(services, make_event):
    event = make_event()

    assert event.status == EventStatus.PUBLISHED
    assert event.organizer_id == ORGANIZER
    assert event.category == EventCategory.MEETUP
    assert event.location_type == LocationType.PHYSICAL
    assert event.city == "Oslo"
    assert event.tags == ["python", "community"]
    assert event.registered_count == 0
    assert event.created_at is not None
    assert event.created_at.tzinfo is not None

def test_create_event_accepts_enum_names(services, make_event):
    event = make_event(category="workshop", location_type="VIRTUAL")

    assert event.category == EventCategory.WORKSHOP
    assert event.location_type == LocationType.VIRTUAL

@pytest.mark.parametrize("overrides", [
    {"title": ""},
    {"title": "x" * 201},
    {"capacity": -1},
    {"capacity": "ten"},
    {"category": "PARTY"},
])
def test_create_event_validation(services, make_request, overrides):
    with pytest.raises(InvalidArgumentError):
        services.events.create_event(ORGANIZER, make_request(**overrides))

def test_create_event_rejects_end_before_start(services, make_request):
    request = make_request()
    request.end_date_time = request.start_date_time - timedelta(hours=1)

    with pytest.raises(InvalidArgumentError):
        services.events.create_event(ORGANIZER, request)

def test_get_unknown_event(services):
    with pytest.raises(NotFoundError):
        services.events.get_event("missing")

def test_update_event_overwrites_fields(services, make_event, make_request):
    event = make_event()

    updated = services.events.update_event(
        event.id, ORGANIZER, make_request(title="Renamed", capacity=50, tags=[])
    )

    assert updated.title == "Renamed"
    assert updated.capacity == 50
    assert updated.tags == []
    assert updated.updated_at >= event.updated_at
    assert services.events.get_event(event.id).title == "Renamed"

def test_update_event_requires_organizer(services, make_event, make_request):
    event = make_event()

    with pytest.raises(ForbiddenError):
        services.events.update_event(event.id, OTHER_ORGANIZER, make_request(title="Hijacked"))

    assert services.events.get_event(event.id).title == event.title

def test_update_unknown_event(services, make_request):
    with pytest.raises(NotFoundError):
        services.events.update_event("missing", ORGANIZER, make_request())

def test_delete_event_is_soft(services, make_event):
    event = make_event()

    services.events.delete_event(event.id, ORGANIZER)

    assert services.events.get_event(event.id).status == EventStatus.CANCELLED

def test_delete_event_by_other_organizer_is_forbidden(services, make_event):
    event = make_event(organizer_id=OTHER_ORGANIZER)

    with pytest.raises(ForbiddenError):
        services.events.delete_event(event.id, ORGANIZER)

    assert services.events.get_event(event.id).status == EventStatus.PUBLISHED

def test_update_event_status(services, make_event):
    event = make_event()

    updated = services.events.update_event_status(event.id, ORGANIZER, "DRAFT")

    assert updated.status == EventStatus.DRAFT

def test_update_event_status_rejects_unknown_status(services, make_event):
    event = make_event()

    with pytest.raises(InvalidArgumentError):
        services.events.update_event_status(event.id, ORGANIZER, "BOGUS")

    unchanged = services.events.get_event(event.id)
    assert unchanged.status == EventStatus.PUBLISHED
    assert unchanged.updated_at == event.updated_at

def test_update_event_status_requires_organizer(services, make_event):
    event = make_event()

    with pytest.raises(ForbiddenError):
        services.events.update_event_status(event.id, OTHER_ORGANIZER, "CANCELLED")

def test_registered_count_is_recomputed(services, make_event):
    event = make_event(capacity=5)
    registrations = [services.registrations.register(u, event.id) for u in ("a", "b", "c")]
    assert services.events.get_event(event.id).registered_count == 3

    services.registrations.cancel_registration(registrations[0].id, "a")
    services.registrations.update_registration(registrations[1].id, "WAITLISTED", None)

    assert services.events.get_event(event.id).registered_count == 1
    assert services.events.list_events().items[0].registered_count == 1

def test_list_events_paginates(services, make_event):
    for i in range(5):
        make_event(title=f"Event {i}")

    first = services.events.list_events(page=0, size=2)
    last = services.events.list_events(page=2, size=2)

    assert first.total == 5
    assert first.total_pages == 3
    assert len(first.items) == 2
    assert first.has_next
    assert len(last.items) == 1
    assert not last.has_next

@pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, 1000)])
def test_list_events_rejects_bad_page_arguments(services, page, size):
    with pytest.raises(InvalidArgumentError):
        services.events.list_events(page=page, size=size)

def test_list_events_by_organizer(services, make_event):
    for i in range(3):
        make_event(title=f"Mine {i}")
    make_event(organizer_id=OTHER_ORGANIZER, title="Theirs")

    page = services.events.list_events_by_organizer(ORGANIZER, page=1, size=2)

    assert page.total == 3
    assert len(page.items) == 1
    assert all(e.organizer_id == ORGANIZER for e in page.items)

def test_list_events_by_category(services, make_event):
    make_event(category=EventCategory.WORKSHOP, title="Hands-on")
    make_event(category=EventCategory.CONCERT, title="Jazz")

    workshops = services.events.list_events_by_category("WORKSHOP")

    assert [e.title for e in workshops] == ["Hands-on"]

def test_search_events(services, make_event):
    make_event(title="Intro to SQLAlchemy")
    make_event(title="Jazz night", description="Live music with a SQL pun")
    make_event(title="Board games", description="Bring snacks")

    page = services.events.search_events("sql")

    assert page.total == 2
    assert {e.title for e in page.items} == {"Intro to SQLAlchemy", "Jazz night"}
    assert services.events.search_events("  ").total == 3

def test_list_categories(services):
    categories = services.events.list_categories()

    assert "CONFERENCE" in categories
    assert len(categories) == len(EventCategory)
