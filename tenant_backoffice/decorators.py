"""
View decorators for django-tenant-backoffice.

Provides the auth gates protecting the backoffice and superadmin
areas. Both run before the wrapped view, so no tenant-scoped fetch is
attempted for a visitor without a stored session.
"""

from functools import wraps
from typing import Callable

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect

from tenant_backoffice.conf import backoffice_settings
from tenant_backoffice.notifications import notify_error
from tenant_backoffice.session import TenantSession
from tenant_backoffice.utils import audit_log


def _tenant_session(request: HttpRequest) -> TenantSession:
    tenant_session = getattr(request, "tenant_session", None)
    if tenant_session is None:
        tenant_session = TenantSession(request.session)
        request.tenant_session = tenant_session
    return tenant_session


def _deny(request: HttpRequest, tenant_session: TenantSession, reason: str, login_url: str):
    audit_log(
        event="access_denied",
        tenant_id=tenant_session.tenant_id,
        request=request,
        success=False,
        extra={"reason": reason},
    )
    tenant_session.logout()
    notify_error(request, "Please log in to continue.")
    return redirect(login_url)


def backoffice_login_required(view_func: Callable = None, login_url: str = None):
    """
    Decorator that requires a stored token and tenant id.

    Checks:
    1. A token is stored in the session
    2. A tenant id is stored in the session

    If either check fails the session is cleared, the user is notified
    and redirected to the backoffice login screen.

    Usage:
        @backoffice_login_required
        def dashboard(request):
            ...

    For class-based views, use as method_decorator:
        @method_decorator(backoffice_login_required, name='dispatch')
        class CategoryEditor(ResourceEditorView):
            ...
    """
    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def _wrapped_view(request: HttpRequest, *args, **kwargs) -> HttpResponse:
            tenant_session = _tenant_session(request)
            resolved_login_url = login_url or backoffice_settings.BACKOFFICE_LOGIN_URL

            if not tenant_session.is_authenticated:
                return _deny(request, tenant_session, "no_token", resolved_login_url)

            if not tenant_session.has_tenant:
                return _deny(request, tenant_session, "no_tenant_context", resolved_login_url)

            return view_func(request, *args, **kwargs)

        return _wrapped_view

    if view_func:
        return decorator(view_func)
    return decorator


def admin_login_required(view_func: Callable = None, login_url: str = None):
    """
    Decorator that requires a stored token for the superadmin area.

    Usage:
        @admin_login_required
        def create_user(request):
            ...
    """
    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def _wrapped_view(request: HttpRequest, *args, **kwargs) -> HttpResponse:
            tenant_session = _tenant_session(request)

            if not tenant_session.is_authenticated:
                return _deny(
                    request,
                    tenant_session,
                    "no_token",
                    login_url or backoffice_settings.ADMIN_LOGIN_URL,
                )

            return view_func(request, *args, **kwargs)

        return _wrapped_view

    if view_func:
        return decorator(view_func)
    return decorator
