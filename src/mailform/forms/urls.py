"""URL patterns for mailing-list forms."""

from django.urls import path

from .views import FormSubmitView

urlpatterns = [
    path("mailform/submit/", FormSubmitView.as_view(), name="mailform_submit"),
]
