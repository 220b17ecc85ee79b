"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - integration/: Real GraphQL data service (skipped unless DATA_URL is set)
    - component/  : Component tests (mocked GraphQL executor)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Keep tests away from developer env files
os.environ.setdefault("ENV", "testing")

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    make_notification_id,
    make_subject_id,
    make_user_id,
    make_template,
    make_template_record,
    make_notification_request,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    DATA_URL = os.getenv("DATA_URL", "")
    ADMIN_SECRET = os.getenv("HASURA_GRAPHQL_ADMIN_SECRET")

    # Timeouts
    HTTP_TIMEOUT = 30


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Test configuration fixture"""
    return TestConfig()


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture
def template_factory():
    """Factory for NotificationTemplate objects"""
    return make_template


@pytest.fixture
def request_factory():
    """Factory for NotificationRequest objects"""
    return make_notification_request


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "requires_graphql: needs a running GraphQL data service")


def pytest_collection_modifyitems(config, items):
    """Skip tests whose infrastructure is not configured"""
    skip_graphql = pytest.mark.skip(reason="DATA_URL not configured")

    for item in items:
        if "requires_graphql" in item.keywords and not os.getenv("DATA_URL"):
            item.add_marker(skip_graphql)
