"""Test the dummy mailing-list backend."""

from mailform.api.backends.dummy import DummyBackend


def test_dummy_subscribe():
    """Subscriptions always succeed with a new member."""
    backend = DummyBackend()

    record = backend.subscribe("list-a", "john@example.com", {"status": "pending"})

    assert record.id
    assert record.email_address == "john@example.com"
    assert record.status == "pending"
    assert record.list_id == "list-a"
    assert record.is_update() is False
    assert backend.error_code is None


def test_dummy_unsubscribe():
    """Unsubscriptions always succeed."""
    record = DummyBackend().unsubscribe("list-a", "john@example.com")

    assert record.status == "unsubscribed"
