import pytest

from eventhub.models import Event, RegistrationStatus

def _delete_event(db, event_id):
    with db.session() as session:
        session.delete(session.get(Event, event_id))

@pytest.fixture
def alice_registrations(services, make_event):
    """alice: confirmed at kept, waitlisted at full, cancelled at dropped."""
    kept = make_event(capacity=5, title="Kept")
    full = make_event(capacity=0, title="Full")
    dropped = make_event(capacity=5, title="Dropped")
    services.registrations.register("alice", kept.id)
    services.registrations.register("alice", full.id)
    cancelled = services.registrations.register("alice", dropped.id)
    services.registrations.cancel_registration(cancelled.id, "alice")
    return kept, full, dropped

def test_confirmed_with_event(services, alice_registrations):
    kept, _, _ = alice_registrations

    pairs = services.registrations.get_confirmed_registrations_with_event_by_user("alice")

    assert [p.event.id for p in pairs] == [kept.id]
    assert pairs[0].registration.status == RegistrationStatus.CONFIRMED
    assert pairs[0].event.registered_count == 1

def test_active_with_event_excludes_cancelled(services, alice_registrations):
    kept, full, _ = alice_registrations

    pairs = services.registrations.get_active_registrations_with_event_by_user("alice")

    assert {p.event.id for p in pairs} == {kept.id, full.id}
    assert all(p.registration.event_id == p.event.id for p in pairs)

def test_registered_events_include_every_status(services, alice_registrations):
    ids = {e.id for e in services.registrations.get_registered_events_for_user("alice")}

    assert ids == {e.id for e in alice_registrations}

def test_missing_events_are_silently_dropped(services, db, alice_registrations):
    kept, full, _ = alice_registrations
    _delete_event(db, kept.id)

    active = services.registrations.get_active_registrations_with_event_by_user("alice")
    confirmed = services.registrations.get_confirmed_registrations_with_event_by_user("alice")
    events = services.registrations.get_registered_events_for_user("alice")

    assert [p.event.id for p in active] == [full.id]
    assert confirmed == []
    assert kept.id not in {e.id for e in events}

def test_iterator_is_lazy_and_restartable(services, alice_registrations, mocker):
    spy = mocker.spy(services.registrations.registration_store, "find_by_user")

    iterator = services.registrations.iter_registrations_with_event("alice")
    assert spy.call_count == 0

    first_pass = list(iterator)
    second_pass = list(services.registrations.iter_registrations_with_event("alice"))

    assert spy.call_count == 2
    assert len(first_pass) == len(second_pass) == 3

def test_unknown_user_has_no_registrations(services):
    assert services.registrations.get_active_registrations_with_event_by_user("nobody") == []
