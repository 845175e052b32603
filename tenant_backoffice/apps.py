"""
Django app configuration for tenant_backoffice.
"""

from django.apps import AppConfig


class TenantBackofficeConfig(AppConfig):
    """
    App configuration for django-tenant-backoffice.
    
    Provides the tenant backoffice editors and the public
    storefront template resolver for multi-tenant site builders.
    """
    
    name = "tenant_backoffice"
    verbose_name = "Tenant Backoffice"
    default_auto_field = "django.db.models.BigAutoField"
