"""
Pytest configuration for tenant_backoffice tests.

This conftest.py file ensures Django settings are properly configured
and the Python path is set up correctly for testing. It also provides
the fake backend and logged-in client fixtures shared by the suites.
"""

import os
import sys

import django
import pytest
from django.conf import settings

# Add project root to Python path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def pytest_configure(config):
    """Configure Django settings for pytest."""
    if not settings.configured:
        os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")
        django.setup()


@pytest.fixture
def backend():
    """The in-memory backend behind FakeApiClient, emptied per test."""
    from tests.fakes import backend as fake_backend

    fake_backend.reset()
    yield fake_backend
    fake_backend.reset()


def _store_session(client, **values):
    session = client.session
    for key, value in values.items():
        session[key] = value
    session.save()


@pytest.fixture
def tenant_client(client, backend):
    """A test client logged into the backoffice as tenant 42."""
    _store_session(client, token="token-abc", tenant_id="42")
    return client


@pytest.fixture
def superadmin_client(client, backend):
    """A test client holding a superadmin token (no tenant)."""
    _store_session(client, token="admin-token")
    return client
