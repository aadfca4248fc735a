"""Views for asynchronous form submissions."""

from django.http import JsonResponse
from django.views import View

from .listener import FormListener
from .request import SubmissionRequest


class FormSubmitView(View):
    """
    Handle a form posted in the background (AJAX).

    Never redirects: the redirect URL is returned so the client can follow it.
    """

    http_method_names = ["post"]
    listener_class = FormListener

    def post(self, request, *args, **kwargs):
        """Process the submission and describe its outcome as JSON."""
        listener = self.listener_class()
        if not listener.listen(SubmissionRequest(request, is_async=True)):
            return JsonResponse({"error": "invalid_form"}, status=400)

        form = listener.submitted_form
        success = not form.has_errors()
        return JsonResponse(
            {
                "success": success,
                "errors": form.errors,
                "messages": form.messages,
                "redirect_url": form.get_redirect_url() if success else "",
            }
        )
