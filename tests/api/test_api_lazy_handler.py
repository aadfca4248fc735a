"""Test the API lazy handler."""

from mailform.api import api, api_handler, get_api
from mailform.api.backends.dummy import DummyBackend


def test_api_lazy_handler():
    """The default API is built from the settings on first use."""
    assert isinstance(api, DummyBackend)


def test_get_api_returns_the_shared_backend():
    """get_api always returns the backend built by the default handler."""
    backend = get_api()

    assert isinstance(backend, DummyBackend)
    assert get_api() is backend
    assert api_handler() is backend
