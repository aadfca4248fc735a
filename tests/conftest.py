"""Fixtures for the test suite."""

from unittest import mock

import pytest

from mailform.api.backends.base import BaseBackend
from mailform.forms.request import SubmissionRequest
from mailform.hooks import HookBus


@pytest.fixture
def hook_bus():
    """Return an empty hook bus recording every published event."""
    bus = HookBus(load_settings=False)
    with mock.patch.object(bus, "publish", wraps=bus.publish):
        yield bus


@pytest.fixture
def published(hook_bus):
    """Return a callable listing the names of the events published so far."""

    def _published():
        return [call.args[0] for call in hook_bus.publish.call_args_list]

    return _published


@pytest.fixture
def api():
    """Return a mocked mailing-list API backend without error."""
    backend = mock.create_autospec(BaseBackend, instance=True)
    backend.error_code = None
    backend.error_message = ""
    return backend


@pytest.fixture
def make_request(rf):
    """Return a factory of submission requests posted from 203.0.113.7."""

    def _make_request(data=None, query=None, headers=None, is_async=None):
        path = "/page/"
        if query:
            path = f"{path}?{query}"
        django_request = rf.post(path, data or {}, headers=headers or {}, REMOTE_ADDR="203.0.113.7")
        return SubmissionRequest(django_request, is_async=is_async)

    return _make_request
