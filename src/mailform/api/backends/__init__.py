"""Mailing-list API backends module."""

from dataclasses import dataclass, field
from datetime import datetime

from django.utils.dateparse import parse_datetime

from mailform.enums import EmailType, MemberStatus


@dataclass
class ListMember:
    """Per-list projection of a form submission."""

    email_address: str
    email_type: str = EmailType.HTML
    status: str = MemberStatus.PENDING
    ip_signup: str | None = None
    merge_fields: dict[str, str] = field(default_factory=dict)
    interests: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return the member fields sent to the API."""
        data = {
            "email_address": self.email_address,
            "email_type": str(self.email_type),
            "status": str(self.status),
        }
        if self.ip_signup:
            data["ip_signup"] = self.ip_signup
        if self.merge_fields:
            data["merge_fields"] = dict(self.merge_fields)
        if self.interests:
            data["interests"] = dict(self.interests)
        return data


def _parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return parse_datetime(value)


@dataclass
class MemberRecord:
    """List member as returned by the mailing-list API."""

    id: str
    email_address: str
    status: str
    timestamp_signup: datetime | None = None
    last_changed: datetime | None = None
    list_id: str | None = None

    @classmethod
    def from_api(cls, payload: dict) -> "MemberRecord":
        """Build a record from an API response payload."""
        return cls(
            id=payload.get("id", ""),
            email_address=payload.get("email_address", ""),
            status=payload.get("status", ""),
            timestamp_signup=_parse_timestamp(payload.get("timestamp_signup")),
            last_changed=_parse_timestamp(payload.get("last_changed")),
            list_id=payload.get("list_id"),
        )

    def is_update(self) -> bool:
        """Return True when an existing subscriber was updated rather than created."""
        if self.status != MemberStatus.SUBSCRIBED:
            return False
        if self.timestamp_signup is None or self.last_changed is None:
            return False
        return self.timestamp_signup < self.last_changed
