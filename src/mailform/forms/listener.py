"""Listener processing mailing-list form submissions."""

import logging

from mailform import hooks as hooks_module
from mailform.api import api as default_api
from mailform.enums import ApiErrorCode, FormAction, MemberStatus
from mailform.exceptions import FormNotFoundError, FormRedirect, UnknownFormActionError
from mailform.tools.email import obfuscate_email

from .form import FORM_ID_FIELD
from .mapper import ListDataMapper
from .repository import get_form

logger = logging.getLogger(__name__)

NOT_SUBSCRIBED_CODES = (ApiErrorCode.NOT_SUBSCRIBED, ApiErrorCode.EMAIL_NOT_EXISTS)


def raise_redirect(url):
    """End request processing with a redirect to the given URL."""
    raise FormRedirect(url)


class FormListener:
    """
    Handle a form submission from validation to the mailing-list API.

    After ``listen`` returns, ``submitted_form`` holds the processed form so
    callers can inspect its errors and messages.
    """

    def __init__(  # noqa: PLR0913
        self,
        api=None,
        hooks=None,
        repository=None,
        mapper_class=ListDataMapper,
        log=None,
        redirect=raise_redirect,
    ):
        """Configure the listener collaborators."""
        self.api = api if api is not None else default_api
        self.hooks = hooks if hooks is not None else hooks_module.hooks
        self.repository = repository or get_form
        self.mapper_class = mapper_class
        self.log = log or logger
        self.redirect = redirect
        self.submitted_form = None
        self.handlers = {
            FormAction.SUBSCRIBE: self.process_subscribe,
            FormAction.UNSUBSCRIBE: self.process_unsubscribe,
        }

    def listen(self, request) -> bool:
        """
        Process a submission.

        Returns:
            bool: False if the request is not a submission of a known form,
            True once the submission was handled, whatever its outcome.

        """
        if not request.post.get(FORM_ID_FIELD):
            return False

        try:
            form = self.repository(request.params.get(FORM_ID_FIELD))
        except FormNotFoundError:
            return False

        form.handle_request(request)
        form.validate()

        self.submitted_form = form

        if not form.has_errors():
            self.get_handler(form.action)(form, request)
        else:
            self.log.info("Form %d > Submitted with errors: %s", form.id, ", ".join(form.errors))

        self.respond(form, is_async=request.is_async)

        return True

    def get_handler(self, action):
        """Return the handler of a form action."""
        try:
            return self.handlers[action]
        except KeyError as e:
            raise UnknownFormActionError(f"No handler for form action {action!r}") from e

    def process_subscribe(self, form, request):
        """Subscribe the submitted email address to every list of the form."""
        result = None
        email_type = form.get_email_type()
        client_ip = request.client_ip

        merge_vars = self.hooks.apply_filters(hooks_module.FORM_MERGE_VARS, dict(form.data), form=form)

        members = self.mapper_class(merge_vars, form.get_lists(), form.get_merge_fields()).map()

        # only the last list decides the outcome
        for list_id, member in members.items():
            member.status = MemberStatus.PENDING if form.settings.double_optin else MemberStatus.SUBSCRIBED
            member.email_type = email_type
            member.ip_signup = client_ip

            result = self.api.subscribe(
                list_id,
                member.email_address,
                member.to_dict(),
                form.settings.update_existing,
                form.settings.replace_interests,
            )

        if result is None or not result.id:
            error_code = self.api.error_code
            if error_code == ApiErrorCode.PREVIOUSLY_UNSUBSCRIBED:
                form.add_error("previously_unsubscribed")
                self.log.warning(
                    "Form %d > %s has unsubscribed before and cannot be resubscribed.",
                    form.id,
                    obfuscate_email(form.email),
                )
            elif error_code == ApiErrorCode.ALREADY_SUBSCRIBED:
                form.add_error("already_subscribed")
                self.log.warning(
                    "Form %d > %s is already subscribed to the selected list(s)",
                    form.id,
                    obfuscate_email(form.email),
                )
            else:
                form.add_error("error")
                self.log.error("Form %d > Mailing list API error: %s", form.id, self.api.error_message)
            return

        if result.is_update():
            form.queue_message("updated")
        else:
            form.queue_message("subscribed")

        self.log.info("Form %d > Successfully subscribed %s", form.id, form.email)

        self.hooks.publish(hooks_module.FORM_SUBSCRIBED, form, email=form.email, merge_vars=merge_vars)

    def process_unsubscribe(self, form, request=None):
        """Unsubscribe the submitted email address from every list of the form."""
        result = None

        for list_id in form.get_lists():
            result = self.api.unsubscribe(list_id, form.email)

        if not result:
            if self.api.error_code in NOT_SUBSCRIBED_CODES:
                form.add_error("not_subscribed")
                self.log.info("Form %d > %s is not subscribed to the selected list(s)", form.id, form.email)
            else:
                form.add_error("error")
                self.log.error("Form %d > Mailing list API error: %s", form.id, self.api.error_message)

        self.hooks.publish(hooks_module.FORM_UNSUBSCRIBED, form)

    def respond(self, form, is_async=False):
        """Fire the outcome events, then redirect successful non-async submissions."""
        success = not form.has_errors()

        if success:
            self.hooks.publish(hooks_module.FORM_SUCCESS, form)
        else:
            self.hooks.publish(hooks_module.FORM_ERROR, form)

            # one event per error, e.g. "form_error_already_subscribed"
            for error in form.errors:
                self.hooks.publish(f"{hooks_module.FORM_ERROR_PREFIX}{error}", form)

        self.hooks.publish(hooks_module.FORM_RESPOND, form)

        if success and not is_async:
            redirect_url = form.get_redirect_url()
            if redirect_url:
                self.redirect(redirect_url)
