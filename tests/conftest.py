"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/: Component tests (mocked dependencies)
    - unit/     : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Provider credentials must never leak in from the developer's shell
for key in ("TAXJAR_API_KEY", "AVALARA_API_KEY"):
    os.environ.pop(key, None)

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.fixtures import (
    make_company_id,
    make_invoice_id,
    make_tax_request,
    make_tax_response,
)


# =============================================================================
# Test Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "component: marks tests as component tests")
    config.addinivalue_line("markers", "golden: safety net tests - DO NOT MODIFY")


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def company_id() -> str:
    return make_company_id()


@pytest.fixture
def invoice_id() -> str:
    return make_invoice_id()


@pytest.fixture
def tax_request():
    """Shipment of 1000.00 to California"""
    return make_tax_request()


@pytest.fixture
def provider_response():
    """TaxJar-style answer of 82.50 split state/county"""
    return make_tax_response()
