"""
Pytest configuration and shared fixtures for the replacement-schedule tests.
"""
import logging
from datetime import datetime, timezone

import pytest
from click.testing import CliRunner

from bathlance.models import Product
from bathlance.services import ExpiryService, NotificationService, NotificationState, ReplacementService


@pytest.fixture(autouse=True)
def reset_package_logger():
    """configure_logging detaches the package logger; put it back after each test."""
    yield
    package_logger = logging.getLogger("bathlance")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def now():
    return datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults."""
    def _make(**overrides):
        values = {
            'id': 'p-1',
            'name': 'Mint Toothbrush',
            'category': 'toothbrush',
            'registration_date': datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return Product(**values)
    return _make


@pytest.fixture
def expiry_service():
    return ExpiryService()


@pytest.fixture
def notification_service(expiry_service):
    return NotificationService(lead_days=7, expiry_service=expiry_service)


@pytest.fixture
def notification_state():
    return NotificationState()


@pytest.fixture
def replacement_service(expiry_service):
    return ReplacementService(expiry_service)


@pytest.fixture
def runner(monkeypatch):
    """A click runner isolated from the developer's BATHLANCE_* environment."""
    for key in ('BATHLANCE_NOTIFICATION_DAYS', 'BATHLANCE_TIMEZONE', 'BATHLANCE_FALLBACK_USAGE_MONTHS', 'LOG_LEVEL'):
        monkeypatch.delenv(key, raising=False)
    return CliRunner()
