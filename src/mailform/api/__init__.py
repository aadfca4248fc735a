"""Mailing-list API module."""

from django.utils.functional import SimpleLazyObject

from .handler import ApiHandler

api_handler = ApiHandler()


def get_api():
    """Return the backend configured in ``settings.MAILFORM_API``."""
    return api_handler()


# resolved on first attribute access, once settings are loaded
api = SimpleLazyObject(get_api)
