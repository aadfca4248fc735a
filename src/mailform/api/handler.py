"""Mailing-list API backend handler."""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from mailform.exceptions import ApiInvalidBackendError

from .backends.base import BaseBackend

logger = logging.getLogger(__name__)


class ApiHandler:
    """
    Build the mailing-list backend described by ``settings.MAILFORM_API``.

    The configuration is a dict with a dotted ``BACKEND`` path to a
    ``BaseBackend`` subclass and optional ``PARAMETERS`` passed to it.
    The backend is built once, on first call.
    """

    setting_name = "MAILFORM_API"

    def __init__(self, config=None):
        """Initialize the handler, from the settings unless a config is given."""
        self._config = config
        self._backend = None

    def get_config(self) -> dict:
        """Return a copy of the backend configuration."""
        config = self._config
        if config is None:
            config = getattr(settings, self.setting_name, None)
        if not config:
            raise ImproperlyConfigured(f"settings.{self.setting_name} is not configured")
        if "BACKEND" not in config:
            raise ImproperlyConfigured(f"settings.{self.setting_name} has no BACKEND")
        return dict(config)

    @staticmethod
    def get_backend_class(path) -> type[BaseBackend]:
        """Import a backend class, which must implement ``BaseBackend``."""
        try:
            klass = import_string(path)
        except ImportError as e:
            raise ApiInvalidBackendError(f"Could not find backend {path!r}: {e}") from e

        if not isinstance(klass, type) or not issubclass(klass, BaseBackend):
            raise ApiInvalidBackendError(f"{path!r} is not a mailing-list backend")
        return klass

    def __call__(self) -> BaseBackend:
        """Return the backend, building it on first use."""
        if self._backend is None:
            config = self.get_config()
            klass = self.get_backend_class(config["BACKEND"])
            self._backend = klass(**config.get("PARAMETERS", {}))
            logger.debug("Mailing-list backend %s ready", config["BACKEND"])
        return self._backend

    def reset(self):
        """Forget the built backend, the next call builds a new one."""
        self._backend = None
