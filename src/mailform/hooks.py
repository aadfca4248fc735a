"""
Hook bus for form lifecycle events and filters.

Events are Django signals, one per event name. Receivers are called
synchronously in the order they were connected, with the submitted form as
``form`` keyword argument::

    from django.dispatch import receiver
    from mailform.hooks import form_subscribed

    @receiver(form_subscribed)
    def notify_sales(sender, form, email, merge_vars, **kwargs):
        ...

Filters transform a value before the listener uses it. Each filter receives
the result of the previous one and must return the new value.
"""

import logging
from collections import defaultdict

from django.conf import settings
from django.dispatch import Signal
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

FORM_SUBSCRIBED = "form_subscribed"
FORM_UNSUBSCRIBED = "form_unsubscribed"
FORM_SUCCESS = "form_success"
FORM_ERROR = "form_error"
FORM_RESPOND = "form_respond"
FORM_ERROR_PREFIX = "form_error_"

FORM_MERGE_VARS = "form_merge_vars"


class HookBus:
    """Named events and filters injected into the form listener."""

    def __init__(self, load_settings=True):
        """Initialize an empty bus."""
        self._signals: dict[str, Signal] = {}
        self._filters: dict[str, list] = defaultdict(list)
        self._settings_loaded = not load_settings

    def signal(self, name: str) -> Signal:
        """Return the signal of an event, creating it on first use."""
        if name not in self._signals:
            self._signals[name] = Signal()
        return self._signals[name]

    def connect(self, name: str, receiver, **kwargs):
        """Connect a receiver to an event."""
        kwargs.setdefault("weak", False)
        self.signal(name).connect(receiver, **kwargs)

    def disconnect(self, name: str, receiver, **kwargs) -> bool:
        """Disconnect a receiver from an event."""
        return self.signal(name).disconnect(receiver, **kwargs)

    def publish(self, name: str, form, **payload):
        """Send an event to its receivers, if any."""
        signal = self._signals.get(name)
        if signal is None or not signal.has_listeners():
            return []
        logger.debug("Publishing %s for form %s", name, getattr(form, "id", None))
        return signal.send(sender=type(form), form=form, **payload)

    def add_filter(self, name: str, func):
        """Register a filter, run after the ones already registered."""
        self._filters[name].append(func)

    def remove_filter(self, name: str, func):
        """Unregister a filter."""
        self._filters[name].remove(func)

    def get_filters(self, name: str) -> list:
        """Return the filters registered for a name, in order."""
        self._load_settings_filters()
        return list(self._filters.get(name, []))

    def apply_filters(self, name: str, value, **kwargs):
        """Pass a value through every filter registered for a name."""
        for func in self.get_filters(name):
            value = func(value, **kwargs)
        return value

    def _load_settings_filters(self):
        """Prepend filters declared in settings.MAILFORM_FILTERS."""
        if self._settings_loaded:
            return
        self._settings_loaded = True
        declared = getattr(settings, "MAILFORM_FILTERS", None) or {}
        for name, paths in declared.items():
            self._filters[name][:0] = [import_string(path) for path in paths]


hooks = HookBus()

form_subscribed = hooks.signal(FORM_SUBSCRIBED)
form_unsubscribed = hooks.signal(FORM_UNSUBSCRIBED)
form_success = hooks.signal(FORM_SUCCESS)
form_error = hooks.signal(FORM_ERROR)
form_respond = hooks.signal(FORM_RESPOND)


def error_signal(error_code: str) -> Signal:
    """Return the signal fired for a specific error code of the default bus."""
    return hooks.signal(f"{FORM_ERROR_PREFIX}{error_code}")
