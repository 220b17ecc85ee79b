"""
Component Test Layer Configuration

Structure:
    tests/component/
    └── notification_service/   Service, composer and resolver with a mocked executor

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.notification_service.mocks import MockGraphQLExecutor


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Executor Mocks
# =============================================================================

@pytest.fixture
def mock_executor() -> MockGraphQLExecutor:
    """Mock GraphQL executor"""
    return MockGraphQLExecutor()
