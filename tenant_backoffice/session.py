"""
Tenant session context.

The auth token and tenant identifier persisted at login live in the
Django session. TenantSession is the only object that reads or writes
them; screens receive it on ``request.tenant_session`` and never touch
the session keys directly.
"""

from typing import Optional

from tenant_backoffice.client import build_client
from tenant_backoffice.conf import backoffice_settings


class TenantSession:
    """
    Read-only view of the persisted tenant session plus login/logout.

    Usage:
        session = request.tenant_session
        if session.is_authenticated and session.has_tenant:
            client = session.get_client()
    """

    def __init__(self, session):
        """
        Args:
            session: The Django session of the current request
        """
        self._session = session
        self._client = None

    @property
    def token(self) -> Optional[str]:
        return self._session.get(backoffice_settings.TOKEN_SESSION_KEY)

    @property
    def tenant_id(self) -> Optional[str]:
        value = self._session.get(backoffice_settings.TENANT_SESSION_KEY)
        return str(value) if value not in (None, "") else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def has_tenant(self) -> bool:
        return self.tenant_id is not None

    def login(self, token: str, tenant_id=None):
        """Persist a freshly issued token (and tenant id for backoffice users)."""
        self._session.cycle_key()
        self._session[backoffice_settings.TOKEN_SESSION_KEY] = token
        if tenant_id is not None:
            self._session[backoffice_settings.TENANT_SESSION_KEY] = str(tenant_id)
        self._client = None

    def logout(self):
        """Clear everything persisted for this browser."""
        self._session.flush()
        self._client = None

    def get_client(self):
        """The API client bound to this session's token and tenant."""
        if self._client is None:
            self._client = build_client(token=self.token, tenant_id=self.tenant_id)
        return self._client

    def __repr__(self):
        return f"<TenantSession tenant={self.tenant_id!r} authenticated={self.is_authenticated}>"
