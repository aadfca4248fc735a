"""Form lookup from the project settings."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from mailform.exceptions import FormNotFoundError

from .form import Form, FormSettings


def get_forms_config() -> dict:
    """Return the form definitions, keyed by integer id."""
    try:
        forms = settings.MAILFORM_FORMS
    except AttributeError as e:
        raise ImproperlyConfigured("settings.MAILFORM_FORMS is not configured") from e
    if forms is None:
        raise ImproperlyConfigured("settings.MAILFORM_FORMS is not configured")
    return {int(form_id): config for form_id, config in forms.items()}


def get_form(form_id) -> Form:
    """
    Build a fresh form from its definition.

    Raises:
        FormNotFoundError: If the id is not an integer or no form has this id
        UnknownFormActionError: If the form definition has an unknown action

    """
    try:
        form_id = int(form_id)
    except (TypeError, ValueError) as e:
        raise FormNotFoundError(f"Invalid form id {form_id!r}") from e

    try:
        config = get_forms_config()[form_id]
    except KeyError as e:
        raise FormNotFoundError(f"No form with id {form_id}") from e

    return Form(
        form_id,
        action=config.get("action", "subscribe"),
        lists=config.get("lists", []),
        settings=FormSettings(**config.get("settings", {})),
        name=config.get("name", ""),
        merge_fields=config.get("merge_fields", {}),
    )
