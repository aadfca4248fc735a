"""Unit tests for the submitted form."""

import pytest

from mailform.enums import FormAction
from mailform.exceptions import UnknownFormActionError
from mailform.forms.form import Form, FormSettings
from tests import factories


def test_form_unknown_action():
    """Forms cannot be built with an action without handler."""
    with pytest.raises(UnknownFormActionError, match="Form 3 has unknown action 'resubscribe'"):
        Form(3, action="resubscribe")


def test_form_defaults():
    """A form starts without data, error nor message."""
    form = Form("4", action="unsubscribe", lists=["list-a"])

    assert form.id == 4
    assert form.action == FormAction.UNSUBSCRIBE
    assert form.settings == FormSettings()
    assert form.data == {}
    assert form.errors == []
    assert form.messages == []
    assert form.has_errors() is False
    assert form.get_redirect_url() == ""


def test_form_handle_request(make_request):
    """Fields are upper-cased and internal fields are not part of the data."""
    form = factories.FormFactory()

    form.handle_request(
        make_request(
            {
                "_mailform_form_id": "1",
                "email": "john@example.com",
                "fname": "John",
                "GROUPS": ["a", "b"],
            }
        )
    )

    assert form.data == {"EMAIL": "john@example.com", "FNAME": "John", "GROUPS": ["a", "b"]}
    assert form.email == "john@example.com"
    assert form.raw_data["_mailform_form_id"] == "1"


def test_form_handle_request_chosen_lists(make_request):
    """Subscribers can only choose among the configured lists."""
    form = factories.FormFactory(lists=["list-a", "list-b", "list-c"])

    form.handle_request(make_request({"email": "john@example.com", "_mailform_lists": ["list-c", "list-a", "other"]}))

    assert form.get_lists() == ["list-a", "list-c"]


def test_form_validate_valid(make_request):
    """Complete submissions are valid."""
    form = factories.FormFactory()
    form.handle_request(make_request({"email": "john@example.com"}))

    assert form.validate() is True
    assert form.errors == []


def test_form_validate_spam(make_request):
    """A filled honeypot stops validation with the spam error."""
    form = factories.FormFactory(lists=[])
    form.handle_request(make_request({"email": "", "_mailform_honeypot": "http://spam.example"}))

    assert form.validate() is False
    assert form.errors == ["spam"]


@pytest.mark.parametrize(
    ("data", "lists", "errors"),
    [
        ({"email": "john@example.com"}, [], ["no_lists_selected"]),
        ({}, ["list-a"], ["required_field_missing"]),
        ({"email": "john@"}, ["list-a"], ["invalid_email"]),
        ({"email": "john@"}, [], ["no_lists_selected", "invalid_email"]),
    ],
)
def test_form_validate_errors(make_request, data, lists, errors):
    """Each failed rule adds its error code, in rule order."""
    form = factories.FormFactory(lists=lists)
    form.handle_request(make_request(data))

    assert form.validate() is False
    assert form.errors == errors


def test_form_validate_required_fields(make_request):
    """Configured required fields must be filled."""
    form = factories.FormFactory(settings__required_fields=["EMAIL", "FNAME"])
    form.handle_request(make_request({"email": "john@example.com", "fname": ""}))

    assert form.validate() is False
    assert form.errors == ["required_field_missing"]


def test_form_add_error_once():
    """Error codes are only added once and keep their order."""
    form = factories.FormFactory()

    form.add_error("error")
    form.add_error("spam")
    form.add_error("error")

    assert form.errors == ["error", "spam"]
    assert form.has_errors() is True


def test_form_queue_message():
    """Messages are queued in order."""
    form = factories.FormFactory()

    form.queue_message("subscribed")

    assert form.messages == ["subscribed"]


@pytest.mark.parametrize(
    ("submitted", "expected"),
    [(None, "html"), ("text", "text"), ("html", "html"), ("pdf", "html")],
)
def test_form_get_email_type(make_request, submitted, expected):
    """Subscribers may choose a known email type."""
    form = factories.FormFactory()
    data = {"email": "john@example.com"}
    if submitted:
        data["_mailform_email_type"] = submitted
    form.handle_request(make_request(data))

    assert form.get_email_type() == expected


def test_form_handle_request_ignores_csrf_token(make_request):
    """The CSRF token is kept in the raw data only."""
    form = factories.FormFactory()

    form.handle_request(make_request({"email": "john@example.com", "csrfmiddlewaretoken": "abc123"}))

    assert form.data == {"EMAIL": "john@example.com"}
    assert form.raw_data["csrfmiddlewaretoken"] == "abc123"


def test_form_email_posted_twice(make_request):
    """The first of several posted email addresses is the form email."""
    form = factories.FormFactory()

    form.handle_request(make_request({"email": ["john@example.com", "jane@example.com"]}))

    assert form.email == "john@example.com"
    assert form.data["EMAIL"] == "john@example.com"
    assert form.validate() is True


def test_form_get_merge_fields():
    """Declared merge fields are returned per list, as copies."""
    form = factories.FormFactory(merge_fields={"list-a": ["FNAME"]})

    merge_fields = form.get_merge_fields()
    merge_fields["list-a"].append("LNAME")

    assert form.get_merge_fields() == {"list-a": ["FNAME"]}
