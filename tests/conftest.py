"""
Shared fixtures.

Every test builds its own store and app, so no test can see
another test's writes.
"""

import pytest
from fastapi.testclient import TestClient

from finance_dashboard.api import create_app
from finance_dashboard.audit import AuditLogger
from finance_dashboard.config import AppSettings
from finance_dashboard.services.storage import MemoryFinanceStorage


@pytest.fixture
def storage():
    """Empty in-memory store."""
    return MemoryFinanceStorage()


@pytest.fixture
def seeded_storage():
    """Store preloaded with the sample categories and transactions."""
    return MemoryFinanceStorage(seed=True)


@pytest.fixture
def app_settings():
    return AppSettings(_env_file=None, seed_sample_data=False, environment="test")


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=100)


@pytest.fixture
def client(seeded_storage, app_settings, audit_logger):
    """API client over the seeded store."""
    app = create_app(storage=seeded_storage, settings=app_settings, audit_logger=audit_logger)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def empty_client(storage, app_settings, audit_logger):
    """API client over an empty store."""
    app = create_app(storage=storage, settings=app_settings, audit_logger=audit_logger)
    with TestClient(app) as test_client:
        yield test_client
