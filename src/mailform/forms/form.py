"""Submitted mailing-list form."""

from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from mailform.enums import EmailType, FormAction
from mailform.exceptions import UnknownFormActionError

FORM_ID_FIELD = "_mailform_form_id"
HONEYPOT_FIELD = "_mailform_honeypot"
LISTS_FIELD = "_mailform_lists"
EMAIL_TYPE_FIELD = "_mailform_email_type"

EMAIL_FIELD = "EMAIL"

# posted by Django forms, never part of the subscriber data
IGNORED_FIELDS = {"csrfmiddlewaretoken"}


@dataclass
class FormSettings:
    """Per-form options."""

    double_optin: bool = True
    update_existing: bool = False
    replace_interests: bool = True
    redirect: str = ""
    required_fields: list[str] = field(default_factory=lambda: [EMAIL_FIELD])
    email_type: str = EmailType.HTML


class Form:
    """
    A configured form and the state of its current submission.

    ``errors`` and ``messages`` only grow while a request is handled.
    """

    def __init__(self, form_id, action, lists=None, settings=None, name="", merge_fields=None):  # noqa: PLR0913
        """Initialize the form, rejecting actions without handler."""
        try:
            self.action = FormAction(action)
        except ValueError as e:
            raise UnknownFormActionError(f"Form {form_id} has unknown action {action!r}") from e
        self.id = int(form_id)
        self.name = name
        self.lists = list(lists or [])
        # list id -> merge field tags accepted by that list
        self.merge_fields = dict(merge_fields or {})
        self.settings = settings or FormSettings()
        self.data = {}
        self.raw_data = {}
        self.errors = []
        self.messages = []

    def __repr__(self):
        """Return a short description of the form."""
        return f"<Form {self.id} ({self.action})>"

    @property
    def email(self) -> str:
        """Return the submitted email address, the first one if posted several times."""
        email = self.data.get(EMAIL_FIELD, "")
        if isinstance(email, list):
            return email[0] if email else ""
        return email or ""

    def handle_request(self, request):
        """Bind the submitted fields of a request to the form."""
        post = request.post
        self.raw_data = {key: _value(post, key) for key in post}
        self.data = {
            key.upper(): value
            for key, value in self.raw_data.items()
            if not key.startswith("_") and key.lower() not in IGNORED_FIELDS
        }
        if isinstance(self.data.get(EMAIL_FIELD), list):
            self.data[EMAIL_FIELD] = self.email

        chosen = post.getlist(LISTS_FIELD) if hasattr(post, "getlist") else post.get(LISTS_FIELD)
        if chosen:
            if isinstance(chosen, str):
                chosen = [chosen]
            # subscribers can only narrow down the configured lists
            self.lists = [list_id for list_id in self.lists if list_id in chosen]

    def validate(self) -> bool:
        """Run the validation rules, adding an error code per failed rule."""
        if self.raw_data.get(HONEYPOT_FIELD):
            self.add_error("spam")
            return False

        if not self.lists:
            self.add_error("no_lists_selected")

        if any(not self.data.get(name) for name in self.settings.required_fields):
            self.add_error("required_field_missing")

        if self.email:
            try:
                validate_email(self.email.strip())
            except ValidationError:
                self.add_error("invalid_email")
        elif EMAIL_FIELD not in self.settings.required_fields:
            self.add_error("invalid_email")

        return not self.has_errors()

    def add_error(self, error_code: str):
        """Add an error code, once."""
        if error_code not in self.errors:
            self.errors.append(error_code)

    def has_errors(self) -> bool:
        """Return True if the submission failed."""
        return len(self.errors) > 0

    def queue_message(self, message_code: str):
        """Queue an outcome message code."""
        self.messages.append(message_code)

    def get_lists(self) -> list[str]:
        """Return the target lists, in order."""
        return list(self.lists)

    def get_merge_fields(self) -> dict[str, list[str]]:
        """Return the merge field tags declared per list."""
        return {list_id: list(tags) for list_id, tags in self.merge_fields.items()}

    def get_email_type(self) -> str:
        """Return the email format chosen by the subscriber or configured on the form."""
        chosen = self.raw_data.get(EMAIL_TYPE_FIELD)
        if chosen in list(EmailType):
            return chosen
        return self.settings.email_type

    def get_redirect_url(self) -> str:
        """Return the URL to redirect to after a successful submission."""
        return self.settings.redirect or ""


def _value(post, key):
    """Return a single value, or a list for multi-valued fields."""
    if hasattr(post, "getlist"):
        values = post.getlist(key)
        return values[0] if len(values) == 1 else values
    return post.get(key)
