"""
Notification channel for screen outcomes.

Screens report what happened through these helpers; the Django
messages framework renders the result as toasts on the next page.
Request logic never formats notification UI itself.
"""

import logging

from django.contrib import messages

from tenant_backoffice.exceptions import ApiError, BackofficeException
from tenant_backoffice.results import Failed

logger = logging.getLogger(__name__)


def notify_success(request, message: str):
    messages.success(request, message)


def notify_info(request, message: str):
    messages.info(request, message)


def notify_error(request, error, fallback: str = None):
    """
    Report a failure.

    Args:
        request: The current request
        error: An ApiError, another BackofficeException, a Failed
            result, or a plain message string
        fallback: Generic text used when the backend sent no message
    """
    if isinstance(error, ApiError):
        text = error.display_message(fallback)
        if fallback and error.response_message:
            text = f"{fallback}: {error.response_message}"
    elif isinstance(error, Failed):
        text = f"{fallback}: {error.reason}" if fallback else error.reason
    elif isinstance(error, BackofficeException):
        text = error.message
    else:
        text = str(error)
    logger.debug("Notifying error: %s", text)
    messages.error(request, text)


def notify_form_errors(request, form):
    """Summarize a failed form validation in one toast."""
    errors = []
    for field, field_errors in form.errors.items():
        for error in field_errors:
            if field == "__all__":
                errors.append(str(error))
            else:
                label = form[field].label if field in form.fields else field
                errors.append(f"{label}: {error}")
    messages.error(request, " ".join(errors) or "Please correct the errors in the form.")
