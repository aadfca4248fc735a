"""Mailform exceptions module."""

from django.http import HttpResponseRedirect


class MailformError(Exception):
    """Base exception for all mailform exceptions."""


class FormNotFoundError(MailformError):
    """Exception raised when no form matches the requested identifier."""


class UnknownFormActionError(MailformError):
    """Exception raised when a form declares an action without handler."""


class ApiInvalidBackendError(MailformError):
    """Exception raised when the API backend is invalid."""


class FormRedirect(MailformError):  # noqa: N818
    """
    Raised to end request processing with a redirect.

    The middleware turns it into the response it carries.
    """

    def __init__(self, url):
        """Store the redirect target."""
        super().__init__(url)
        self.url = url

    @property
    def response(self):
        """Build the redirect response."""
        return HttpResponseRedirect(self.url)
