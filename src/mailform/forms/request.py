"""Read-only view of an inbound form submission."""

from django.conf import settings


class SubmissionRequest:
    """
    Wrap a Django request for the form listener.

    ``post`` holds the POST parameters, ``params`` the GET and POST
    parameters merged (POST wins).
    """

    def __init__(self, request, is_async=None):
        """Build the view from a Django HttpRequest."""
        self._request = request
        self.post = request.POST

        params = request.GET.copy()
        for key in request.POST:
            params.setlist(key, request.POST.getlist(key))
        self.params = params

        if is_async is None:
            is_async = request.headers.get("x-requested-with") == "XMLHttpRequest"
        self.is_async = is_async

    @property
    def client_ip(self) -> str | None:
        """Return the IP address of the client."""
        if getattr(settings, "MAILFORM_TRUST_FORWARDED_FOR", False):
            forwarded_for = self._request.META.get("HTTP_X_FORWARDED_FOR", "")
            if forwarded_for:
                return forwarded_for.split(",")[0].strip()
        return self._request.META.get("REMOTE_ADDR")

    def get_client_ip(self) -> str | None:
        """Return the IP address of the client."""
        return self.client_ip
