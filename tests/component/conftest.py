"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── tax/         Tax service component tests
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
"""
import pytest

from tests.component.mocks import (
    MockAsyncPostgresClient,
    MockEventBus,
    MockHttpClient,
)


@pytest.fixture
def mock_db() -> MockAsyncPostgresClient:
    """Mock PostgreSQL client"""
    return MockAsyncPostgresClient()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock event bus"""
    return MockEventBus()


@pytest.fixture
def mock_http() -> MockHttpClient:
    """Mock HTTP client"""
    return MockHttpClient()
