"""
Utility functions for django-tenant-backoffice.

Provides helper functions for audit logging, client-side record
filtering and small presentation helpers shared by the screens.
"""

import logging
from typing import Iterable, List

from django.utils import timezone

from tenant_backoffice.conf import backoffice_settings


def get_audit_logger() -> logging.Logger:
    """
    Get the audit logger instance.

    Returns:
        Logger instance for audit events
    """
    return logging.getLogger(backoffice_settings.AUDIT_LOGGER)


def audit_log(
    event: str,
    tenant_id: str = None,
    success: bool = True,
    request=None,
    extra: dict = None,
):
    """
    Log an audit event for session and access activities.

    Args:
        event: Event type (e.g., 'login', 'access_denied')
        tenant_id: The tenant context (if any)
        success: Whether the operation succeeded
        request: The HTTP request (for IP/user agent extraction)
        extra: Additional context data
    """
    if not backoffice_settings.AUDIT_ENABLED:
        return

    logger = get_audit_logger()

    log_data = {
        "event": event,
        "timestamp": timezone.now().isoformat(),
        "success": success,
    }

    if tenant_id:
        log_data["tenant_id"] = str(tenant_id)

    if request is not None:
        log_data["ip_address"] = get_client_ip(request)
        log_data["user_agent"] = request.META.get("HTTP_USER_AGENT", "")[:200]
        log_data["path"] = request.path
        log_data["method"] = request.method

    if extra:
        log_data.update(extra)

    if success:
        logger.info(f"Audit: {event}", extra={"audit_data": log_data})
    else:
        logger.warning(f"Audit: {event} FAILED", extra={"audit_data": log_data})


def get_client_ip(request) -> str:
    """
    Extract client IP address from request.

    Handles proxied requests via X-Forwarded-For header.
    """
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def filter_records(records: Iterable[dict], term: str, fields: Iterable[str]) -> List[dict]:
    """
    Case-insensitive substring filter over already-fetched records.

    A record matches when any of ``fields`` contains ``term``. An empty
    term returns every record. Never re-queries the backend.
    """
    records = list(records or [])
    term = (term or "").strip().lower()
    if not term:
        return records
    return [
        record for record in records
        if any(term in str(record.get(field) or "").lower() for field in fields)
    ]


def as_list(payload) -> list:
    """Normalize a list endpoint payload; some endpoints wrap lists in {"data": [...]}."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return [payload]


def excerpt(text: str, length: int = 50) -> str:
    """Leading characters of a text followed by an ellipsis."""
    if not text:
        return "No content available"
    return f"{text[:length]}..."
