"""
Middleware for django-tenant-backoffice.

Provides TenantSessionMiddleware, which publishes the tenant session
context on each request and handles authentication failures reported
by the backend.
"""

from typing import Callable

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect

from tenant_backoffice.conf import backoffice_settings
from tenant_backoffice.exceptions import AuthenticationError
from tenant_backoffice.notifications import notify_error
from tenant_backoffice.session import TenantSession
from tenant_backoffice.utils import audit_log


class TenantSessionMiddleware:
    """
    Middleware that attaches ``request.tenant_session``.

    This middleware must run after SessionMiddleware and
    MessageMiddleware. When a view lets an AuthenticationError escape
    (expired or rejected token), the session is cleared and the user is
    sent to the login screen matching the area they were in.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        """
        Initialize the middleware.

        Args:
            get_response: The next middleware/view in the chain
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request.tenant_session = TenantSession(request.session)
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exception: Exception):
        """Turn a rejected token into logout + redirect to login."""
        if not isinstance(exception, AuthenticationError):
            return None

        tenant_session = getattr(request, "tenant_session", None)
        audit_log(
            event="session_expired",
            tenant_id=tenant_session.tenant_id if tenant_session else None,
            request=request,
            success=False,
            extra={"error": str(exception)},
        )
        if tenant_session is not None:
            tenant_session.logout()
        notify_error(request, exception.message)
        return redirect(login_url_for(request.path))


def login_url_for(path: str) -> str:
    """The login screen guarding the area a path belongs to."""
    if path.startswith("/admin"):
        return backoffice_settings.ADMIN_LOGIN_URL
    return backoffice_settings.BACKOFFICE_LOGIN_URL
