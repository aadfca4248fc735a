"""Mailchimp marketing API integration."""

import hashlib
import logging

import requests

from mailform.api.backends import MemberRecord
from mailform.enums import ApiErrorCode

from .base import BaseBackend

logger = logging.getLogger(__name__)

# Error titles returned by the API, mapped to the codes the form listener classifies
ERROR_TITLE_CODES = {
    "Member Exists": ApiErrorCode.ALREADY_SUBSCRIBED,
    "Member In Compliance State": ApiErrorCode.PREVIOUSLY_UNSUBSCRIBED,
    "Forgotten Email Not Subscribed": ApiErrorCode.PREVIOUSLY_UNSUBSCRIBED,
}


class MailchimpBackend(BaseBackend):
    """
    Mailchimp Marketing API (v3) integration.

    Handles:
    - Subscribing members to audiences (lists), creating or updating them
    - Unsubscribing members from audiences
    """

    def __init__(self, api_key: str, timeout: float = 10, base_url: str | None = None):
        """Configure the Mailchimp backend."""
        super().__init__()
        self._api_key = api_key
        self.timeout = timeout
        if base_url is None:
            # API keys end with the data center, e.g. "xxxxxxxx-us6"
            data_center = api_key.rsplit("-", 1)[-1] if "-" in api_key else "us1"
            base_url = f"https://{data_center}.api.mailchimp.com/3.0"
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def subscriber_hash(email: str) -> str:
        """Return the member identifier Mailchimp derives from an email address."""
        return hashlib.md5(email.lower().encode()).hexdigest()  # noqa: S324

    def subscribe(self, list_id, email, fields, update_existing=False, replace_interests=True):
        """
        Subscribe an email address to a Mailchimp audience.

        With ``update_existing`` the member is upserted, otherwise the call
        fails with an "already subscribed" error when the member exists.

        Note:
            Merge fields must exist in the audience, unknown ones are
            rejected by the API.

        """
        payload = {**fields, "email_address": email}
        if not replace_interests and payload.get("interests"):
            payload["interests"] = {key: True for key, value in payload["interests"].items() if value}

        if update_existing:
            payload["status_if_new"] = payload.pop("status", "pending")
            path = f"/lists/{list_id}/members/{self.subscriber_hash(email)}"
            return self._request("PUT", path, payload)

        return self._request("POST", f"/lists/{list_id}/members", payload)

    def unsubscribe(self, list_id, email):
        """Unsubscribe an email address from a Mailchimp audience."""
        path = f"/lists/{list_id}/members/{self.subscriber_hash(email)}"
        return self._request(
            "PATCH",
            path,
            {"status": "unsubscribed"},
            not_found_code=ApiErrorCode.NOT_SUBSCRIBED,
        )

    def _request(self, method, path, payload, not_found_code=None) -> MemberRecord | None:
        """Send a request and turn the response into a member record."""
        self.reset_error()
        try:
            response = requests.request(
                method,
                f"{self.base_url}{path}",
                json=payload,
                auth=("apikey", self._api_key),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as err:
            self._set_http_error(err.response, not_found_code)
            return None
        except requests.RequestException as err:
            logger.warning("Mailchimp API unreachable: %s", err)
            self.set_error(ApiErrorCode.NETWORK_ERROR, str(err))
            return None

        return MemberRecord.from_api(response.json())

    def _set_http_error(self, response, not_found_code=None):
        """Record the error code and message of a failed response."""
        try:
            body = response.json()
        except ValueError:
            body = {}

        title = body.get("title", "")
        message = body.get("detail") or title or response.reason or ""

        if title in ERROR_TITLE_CODES:
            code = ERROR_TITLE_CODES[title]
        elif response.status_code == requests.codes.not_found and not_found_code is not None:
            code = not_found_code
        else:
            code = response.status_code

        self.set_error(int(code), message)
