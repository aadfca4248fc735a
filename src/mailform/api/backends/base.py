"""Mailing-list API backend base module."""

from abc import ABC, abstractmethod

from mailform.api.backends import MemberRecord


class BaseBackend(ABC):
    """
    Base class for all mailing-list API backends.

    Failed calls return None and keep the error of the last call in
    ``error_code`` and ``error_message``.
    """

    def __init__(self):
        """Initialize the error state."""
        self.error_code = None
        self.error_message = ""

    def reset_error(self):
        """Forget the error of the previous call."""
        self.error_code = None
        self.error_message = ""

    def set_error(self, code: int, message: str):
        """Record the error of the current call."""
        self.error_code = code
        self.error_message = message

    def has_error(self) -> bool:
        """Return True if the last call failed."""
        return self.error_code is not None

    @abstractmethod
    def subscribe(
        self,
        list_id: str,
        email: str,
        fields: dict,
        update_existing: bool = False,
        replace_interests: bool = True,
    ) -> MemberRecord | None:
        """
        Subscribe an email address to a list.

        Args:
            list_id: Identifier of the list
            email: Email address to subscribe
            fields: Member fields (status, merge fields, interests...)
            update_existing: Update the member if already on the list
            replace_interests: Replace the member interests instead of adding to them

        Returns:
            MemberRecord: the list member, or None on failure

        """

    @abstractmethod
    def unsubscribe(self, list_id: str, email: str) -> MemberRecord | None:
        """
        Unsubscribe an email address from a list.

        Args:
            list_id: Identifier of the list
            email: Email address to unsubscribe

        Returns:
            MemberRecord: the list member, or None on failure

        """
