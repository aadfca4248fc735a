"""Middleware running the form listener on submissions."""

from mailform.exceptions import FormRedirect

from .listener import FormListener
from .request import SubmissionRequest
from .views import FormSubmitView


class FormListenerMiddleware:
    """
    Process form submissions posted to any page.

    The submitted form is available to views as ``request.mailform_form``
    (None when the request was not a form submission). Submissions posted to
    FormSubmitView are left to the view.
    """

    listener_class = FormListener

    def __init__(self, get_response):
        """Store the next handler of the chain."""
        self.get_response = get_response

    def __call__(self, request):
        """Call the rest of the chain."""
        request.mailform_form = None
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        """Run the listener on POST requests before the view."""
        if request.method != "POST":
            return None
        view_class = getattr(view_func, "view_class", None)
        if view_class is not None and issubclass(view_class, FormSubmitView):
            return None

        listener = self.listener_class()
        try:
            listener.listen(SubmissionRequest(request))
        except FormRedirect as redirect:
            return redirect.response
        request.mailform_form = listener.submitted_form
        return None
