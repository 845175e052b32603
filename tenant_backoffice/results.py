"""
Result variants returned by TenantApiClient.fetch().

A fetch ends in exactly one of Found, NotFound or Failed, so screens
switch over a closed set instead of probing the payload for
truthiness.
"""

from typing import Any, Optional


class FetchResult:
    """Base class for fetch outcomes."""

    found = False
    failed = False

    def unwrap_or(self, default: Any = None) -> Any:
        """Return the record when found, otherwise the default."""
        return default


class Found(FetchResult):
    """The backend returned a record (or a list of records)."""

    found = True

    def __init__(self, record: Any):
        self.record = record

    def unwrap_or(self, default: Any = None) -> Any:
        return self.record

    def __eq__(self, other):
        return isinstance(other, Found) and other.record == self.record

    def __repr__(self):
        return f"Found({self.record!r})"


class NotFound(FetchResult):
    """The resource does not exist yet for this tenant."""

    def __eq__(self, other):
        return isinstance(other, NotFound)

    def __repr__(self):
        return "NotFound()"


class Failed(FetchResult):
    """The fetch failed; ``reason`` is ready to show to the user."""

    failed = True

    def __init__(self, reason: str, error: Optional[Exception] = None):
        self.reason = reason
        self.error = error

    def __eq__(self, other):
        return isinstance(other, Failed) and other.reason == self.reason

    def __repr__(self):
        return f"Failed({self.reason!r})"
