"""Mailing-list forms module."""

from .form import Form, FormSettings
from .listener import FormListener
from .request import SubmissionRequest

__all__ = ["Form", "FormListener", "FormSettings", "SubmissionRequest"]
