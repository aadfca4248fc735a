"""Dummy mailing-list backend."""

import uuid

from django.utils import timezone

from mailform.api.backends import MemberRecord
from mailform.enums import MemberStatus

from .base import BaseBackend


class DummyBackend(BaseBackend):
    """Dummy backend accepting every call without network access."""

    def subscribe(self, list_id, email, fields, update_existing=False, replace_interests=True):
        """Pretend to subscribe a member."""
        self.reset_error()
        now = timezone.now()
        return MemberRecord(
            id=uuid.uuid4().hex,
            email_address=email,
            status=fields.get("status", MemberStatus.SUBSCRIBED),
            timestamp_signup=now,
            last_changed=now,
            list_id=list_id,
        )

    def unsubscribe(self, list_id, email):
        """Pretend to unsubscribe a member."""
        self.reset_error()
        return MemberRecord(
            id=uuid.uuid4().hex,
            email_address=email,
            status=MemberStatus.UNSUBSCRIBED,
            last_changed=timezone.now(),
            list_id=list_id,
        )
