"""Map submitted form data to list members."""

from mailform.api.backends import ListMember

from .form import EMAIL_FIELD

INTERESTS_FIELD = "INTERESTS"


class ListDataMapper:
    """Build one ListMember per target list from the submitted data."""

    def __init__(self, data: dict, lists: list[str], fields: dict[str, list[str]] | None = None):
        """
        Store the data and the target lists.

        ``fields`` maps a list id to the merge field tags that list accepts.
        Lists without declared tags receive every submitted field.
        """
        self.data = data
        self.lists = lists
        self.fields = fields or {}

    def map(self) -> dict[str, ListMember]:
        """Return the list members, keyed by list id in list order."""
        return {list_id: self.map_list(list_id) for list_id in self.lists}

    def map_list(self, list_id: str) -> ListMember:
        """Return the member for one list."""
        return ListMember(
            email_address=str(self.data.get(EMAIL_FIELD, "")).strip(),
            merge_fields=self.get_merge_fields(list_id),
            interests=self.get_interests(list_id),
        )

    def get_merge_fields(self, list_id: str) -> dict[str, str]:
        """Return the submitted fields the list accepts as merge fields."""
        allowed = self.fields.get(list_id)
        if allowed is not None:
            allowed = {tag.upper() for tag in allowed}
        merge_fields = {}
        for name, value in self.data.items():
            if name in (EMAIL_FIELD, INTERESTS_FIELD) or not name.isupper():
                continue
            if allowed is not None and name not in allowed:
                continue
            if isinstance(value, list | tuple):
                value = ", ".join(str(item) for item in value)
            merge_fields[name] = value
        return merge_fields

    def get_interests(self, list_id: str) -> dict[str, bool]:
        """
        Return the interests selected for a list.

        Interests are either a mapping of list id to interest ids, or a flat
        sequence applied to every list.
        """
        interests = self.data.get(INTERESTS_FIELD)
        if not interests:
            return {}
        if isinstance(interests, dict):
            interests = interests.get(list_id, [])
        if isinstance(interests, str):
            interests = [interests]
        return {interest_id: True for interest_id in interests}
