"""
django-tenant-backoffice

A Django app providing the tenant backoffice (content editors, settings
wizard, dashboard) and the public storefront template resolver for a
multi-tenant website-building platform backed by a remote REST API.
"""

__version__ = "0.1.0"

# Public API exports
from tenant_backoffice.exceptions import (
    BackofficeException,
    ApiError,
    AuthenticationError,
    TenantSessionError,
    TemplateResolutionError,
)
from tenant_backoffice.results import Found, NotFound, Failed

__all__ = [
    "__version__",
    "BackofficeException",
    "ApiError",
    "AuthenticationError",
    "TenantSessionError",
    "TemplateResolutionError",
    "Found",
    "NotFound",
    "Failed",
]
