"""Enums for mailing-list forms."""

from enum import IntEnum, StrEnum


class FormAction(StrEnum):
    """Action a form performs on its lists."""

    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"


class MemberStatus(StrEnum):
    """Status of a list member as reported by the mailing-list API."""

    SUBSCRIBED = "subscribed"
    PENDING = "pending"
    UNSUBSCRIBED = "unsubscribed"
    CLEANED = "cleaned"
    TRANSACTIONAL = "transactional"


class EmailType(StrEnum):
    """Email format preference of a list member."""

    HTML = "html"
    TEXT = "text"


# Numeric error codes exposed by API backends
class ApiErrorCode(IntEnum):
    """Error codes the form listener knows how to classify."""

    NETWORK_ERROR = -1
    PREVIOUSLY_UNSUBSCRIBED = 212
    ALREADY_SUBSCRIBED = 214
    NOT_SUBSCRIBED = 215
    EMAIL_NOT_EXISTS = 232
