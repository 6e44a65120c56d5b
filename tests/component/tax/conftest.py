"""
Tax Service Component Test Fixtures

Provides mocks for tax service component testing:
- MockTaxRepository: in-memory ledger
- ScriptedTaxProvider: primary/secondary providers with canned behaviour
- TaxJar/Avalara adapters wired to MockHttpClient
"""
from datetime import date

import pytest

from microservices.tax_service.models import TaxProviderName
from microservices.tax_service.protocols import TaxProviderError
from microservices.tax_service.providers.avalara import AvalaraProvider
from microservices.tax_service.providers.taxjar import TaxJarProvider
from microservices.tax_service.tax_service import TaxService
from tests.component.tax.mocks import MockTaxRepository, ScriptedTaxProvider
from tests.fixtures import make_tax_response


@pytest.fixture
def mock_repository() -> MockTaxRepository:
    return MockTaxRepository()


@pytest.fixture
def primary() -> ScriptedTaxProvider:
    """Primary provider answering 82.50"""
    return ScriptedTaxProvider(
        TaxProviderName.TAXJAR, 0.95,
        response=make_tax_response(provider=TaxProviderName.TAXJAR, confidence=0.95),
    )


@pytest.fixture
def secondary() -> ScriptedTaxProvider:
    """Secondary provider answering 82.50"""
    return ScriptedTaxProvider(
        TaxProviderName.AVALARA, 0.98,
        response=make_tax_response(provider=TaxProviderName.AVALARA, confidence=0.98),
    )


@pytest.fixture
def failing_provider_error() -> TaxProviderError:
    return TaxProviderError("Tax calculation failed: HTTP 500", provider="taxjar", status_code=500)


@pytest.fixture
def tax_service(primary, secondary, mock_repository, mock_event_bus) -> TaxService:
    return TaxService(
        providers=[primary, secondary],
        repository=mock_repository,
        event_bus=mock_event_bus,
    )


@pytest.fixture
def taxjar(mock_http) -> TaxJarProvider:
    return TaxJarProvider(
        api_key="tj_test_key",
        base_url="https://api.taxjar.test/v2",
        http_client=mock_http,
    )


@pytest.fixture
def avalara(mock_http) -> AvalaraProvider:
    return AvalaraProvider(
        api_key="av_test_key",
        base_url="https://avatax.test/api/v2",
        http_client=mock_http,
        today=lambda: date(2026, 3, 14),
    )
