"""
Configuration settings for django-tenant-backoffice.

Provides default settings and a Settings accessor class that
allows per-project customization via Django settings.
"""

from django.conf import settings


MEGABYTE = 1024 * 1024


# Default configuration values
TENANT_BACKOFFICE_DEFAULTS = {
    # Base URL of the remote REST backend (no trailing slash)
    "API_BASE_URL": "http://localhost:5000/api",

    # Request timeout for backend calls (seconds)
    "API_TIMEOUT": 30,

    # Dotted path of the API client class used by every screen
    "API_CLIENT_CLASS": "tenant_backoffice.client.TenantApiClient",

    # Session keys holding the persisted auth token and tenant identifier
    "TOKEN_SESSION_KEY": "token",
    "TENANT_SESSION_KEY": "tenant_id",

    # Login screens and landing pages
    "BACKOFFICE_LOGIN_URL": "/backoffice-login",
    "ADMIN_LOGIN_URL": "/superadmin-login",
    "BACKOFFICE_HOME_URL": "/backoffice/dashboard",
    "ADMIN_HOME_URL": "/admin/dashboard",

    # Upload constraints enforced before a file is attached to a submission
    "MAX_IMAGE_SIZE": 4 * MEGABYTE,
    "MAX_VIDEO_SIZE": 50 * MEGABYTE,
    "MAX_DOCUMENT_SIZE": 50 * MEGABYTE,
    "IMAGE_CONTENT_TYPES": ["image/jpeg", "image/jpg", "image/png"],
    "VIDEO_CONTENT_TYPES": ["video/mp4"],
    "DOCUMENT_CONTENT_TYPES": ["application/pdf"],

    # Storage prefix for files parked between settings wizard steps
    "WIZARD_UPLOAD_DIR": "tenant_backoffice/wizard",

    # Enable audit logging for session and access events
    "AUDIT_ENABLED": True,

    # Audit logger name
    "AUDIT_LOGGER": "tenant_backoffice.audit",

    # Template catalogue offered when the backend list cannot be loaded
    "FALLBACK_TEMPLATES": [
        {
            "id": 1,
            "name": "Modern Storefront",
            "description": "Clean, minimalist design with focus on product display",
        },
        {
            "id": 2,
            "name": "Vibrant Marketplace",
            "description": "Bold colors and dynamic layout for engaging shopping experience",
        },
        {
            "id": 3,
            "name": "Elegant Boutique",
            "description": "Sophisticated design with premium feel for luxury products",
        },
    ],
}


class Settings:
    """
    Settings accessor that reads from Django settings with fallback to defaults.

    Usage:
        from tenant_backoffice.conf import backoffice_settings
        base_url = backoffice_settings.API_BASE_URL
    """

    def __getattr__(self, name: str):
        """
        Get a setting value.

        First checks Django settings for TENANT_BACKOFFICE_{name},
        then falls back to default value.

        Args:
            name: Setting name (without TENANT_BACKOFFICE_ prefix)

        Returns:
            The setting value

        Raises:
            AttributeError: If setting name is not valid
        """
        if name not in TENANT_BACKOFFICE_DEFAULTS:
            raise AttributeError(f"Invalid tenant_backoffice setting: '{name}'")

        django_setting_name = f"TENANT_BACKOFFICE_{name}"
        return getattr(
            settings,
            django_setting_name,
            TENANT_BACKOFFICE_DEFAULTS[name]
        )

    def __dir__(self):
        """Return list of available settings."""
        return list(TENANT_BACKOFFICE_DEFAULTS.keys())


# Singleton instance for easy access
backoffice_settings = Settings()
