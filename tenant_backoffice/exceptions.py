"""
Custom exception classes for django-tenant-backoffice.

These exceptions carry the failures of backend calls and tenant
session checks up to the screen that initiated them, where they are
turned into user-visible notifications.
"""


class BackofficeException(Exception):
    """
    Base exception for all backoffice errors.

    All custom exceptions in this library inherit from this class,
    allowing catch-all handling when needed.
    """

    def __init__(self, message: str = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
        """
        self.message = message or self.__class__.__doc__.strip().splitlines()[0]
        super().__init__(self.message)


class ApiError(BackofficeException):
    """
    Raised when a backend call fails.

    Covers transport failures (no status code) and non-2xx responses.
    The parsed response body, when there is one, is kept so that the
    backend-supplied message can be shown to the user.
    """

    def __init__(
        self,
        message: str = None,
        status_code: int = None,
        response_data=None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status of the failed response, if any
            response_data: Parsed response body, if any
        """
        self.status_code = status_code
        self.response_data = response_data
        if message is None and status_code:
            message = f"Request failed with status code {status_code}"
        super().__init__(message)

    @property
    def response_message(self):
        """The backend-supplied message, or None."""
        if isinstance(self.response_data, dict):
            return self.response_data.get("message") or self.response_data.get("detail")
        return None

    def display_message(self, fallback: str = None) -> str:
        """
        Message suitable for a notification.

        Prefers the backend message, then the fallback, then the
        exception's own message.
        """
        return self.response_message or fallback or self.message


class AuthenticationError(ApiError):
    """
    Raised when the backend rejects the session token.

    This occurs when:
    - No token is stored in the session
    - The backend answers 401 for an expired or revoked token
    """

    def __init__(self, message: str = None, **kwargs):
        if message is None:
            message = "No authentication token found"
        kwargs.setdefault("status_code", 401)
        super().__init__(message, **kwargs)


class TenantSessionError(BackofficeException):
    """
    Raised when a tenant-scoped operation runs without a tenant id.
    """

    def __init__(self, message: str = None):
        if message is None:
            message = "Tenant ID not found. Please log in again."
        super().__init__(message)


class TemplateResolutionError(BackofficeException):
    """
    Raised when a public site cannot be loaded for a slug.
    """

    def __init__(self, message: str = None, slug: str = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            slug: The public slug that failed to resolve
        """
        self.slug = slug
        if message is None and slug:
            message = f"Failed to load tenant: '{slug}'"
        super().__init__(message)
