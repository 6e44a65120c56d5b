"""
Component Tests for Tax API

Tests the HTTP endpoints with TaxService wired to scripted providers and an
in-memory ledger.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from microservices.tax_service import main
from microservices.tax_service.tax_repository import TaxRepository
from microservices.tax_service.tax_service import TaxService
from tests.fixtures import make_tax_response

pytestmark = [pytest.mark.component]


@pytest.fixture
def client(tax_service, monkeypatch):
    monkeypatch.setattr(main, "tax_service", tax_service)
    main.app.dependency_overrides[main.get_tax_service] = lambda: tax_service
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def ledgerless_client(primary):
    service = TaxService(providers=[primary])
    main.app.dependency_overrides[main.get_tax_service] = lambda: service
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


def _calculate_body(to_state="CA", amount=1000.0):
    return {
        "amount": amount,
        "from_address": {"state": "NV", "zip": "89501"},
        "to_address": {"state": to_state, "zip": "94105"},
        "line_items": [{"id": "load_1", "quantity": 1, "unit_price": amount}],
    }


def _record_body(company_id="cmp_api", invoice_id="inv_api"):
    return {
        "company_id": company_id,
        "invoice_id": invoice_id,
        "tax": make_tax_response().model_dump(mode="json"),
    }


class TestHealthEndpoints:
    """Health and info"""

    def test_health(self, client, mock_repository):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "tax_service"
        assert data["dependencies"]["ledger"] == "healthy"
        assert ("health_check",) in mock_repository.method_calls

    def test_unreachable_ledger_degrades_health(self, client, mock_repository):
        mock_repository.healthy = False

        response = client.get("/api/v1/tax/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["ledger"] == "unhealthy"

    def test_failing_database_degrades_health(self, primary, mock_db, monkeypatch):
        mock_db.set_healthy(False)
        service = TaxService(providers=[primary], repository=TaxRepository(db=mock_db))
        monkeypatch.setattr(main, "tax_service", service)

        data = TestClient(main.app).get("/health").json()

        assert data["status"] == "degraded"
        assert data["dependencies"]["ledger"] == "unhealthy"
        assert mock_db.get_queries("health_check")

    def test_health_check_error_degrades_health(self, client, mock_repository, monkeypatch):
        async def broken():
            raise ConnectionError("pool closed")

        monkeypatch.setattr(mock_repository, "health_check", broken)

        data = client.get("/health").json()

        assert data["status"] == "degraded"

    def test_disabled_ledger_is_still_healthy(self, primary, monkeypatch):
        monkeypatch.setattr(main, "tax_service", TaxService(providers=[primary]))

        data = TestClient(main.app).get("/health").json()

        assert data["status"] == "healthy"
        assert data["dependencies"]["ledger"] == "disabled"

    def test_info_lists_routes(self, client):
        response = client.get("/api/v1/tax/info")

        assert response.status_code == 200
        paths = [route["path"] for route in response.json()["endpoints"]]
        assert "/api/v1/tax/calculate" in paths
        assert "/api/v1/tax/reports/{company_id}" in paths

    def test_provider_chain(self, client):
        response = client.get("/api/v1/tax/providers")

        assert response.status_code == 200
        names = [p["name"] for p in response.json()["providers"]]
        assert names == ["taxjar", "avalara", "fallback"]


class TestCalculateEndpoint:
    """POST /api/v1/tax/calculate"""

    def test_primary_answer(self, client):
        response = client.post("/api/v1/tax/calculate", json=_calculate_body())

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "taxjar"
        assert data["confidence"] == 0.95
        assert data["tax_amount"] == 82.5

    def test_fallback_answer_is_still_200(self, client, primary, secondary, failing_provider_error):
        primary.error = failing_provider_error
        secondary.error = failing_provider_error

        response = client.post("/api/v1/tax/calculate", json=_calculate_body(to_state="TX"))

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "fallback"
        assert data["confidence"] == 0.75
        assert data["tax_amount"] == 62.5
        assert data["breakdown"][0]["jurisdiction"] == "TX State Tax"

    def test_missing_destination_is_rejected(self, client):
        body = _calculate_body()
        del body["to_address"]

        response = client.post("/api/v1/tax/calculate", json=body)

        assert response.status_code == 422

    def test_negative_amount_is_rejected(self, client):
        response = client.post("/api/v1/tax/calculate", json=_calculate_body(amount=-5))

        assert response.status_code == 422


class TestLedgerEndpoints:
    """Liability, collected and ledger listing"""

    def test_record_liability(self, client, mock_repository):
        response = client.post("/api/v1/tax/liabilities", json=_record_body())

        assert response.status_code == 200
        data = response.json()
        assert len(data["entries"]) == 2
        assert data["total_amount"] == 82.5
        assert {e["entry_type"] for e in data["entries"]} == {"liability"}
        assert len(mock_repository.entries) == 2

    def test_record_collected(self, client):
        response = client.post("/api/v1/tax/collections", json=_record_body())

        assert response.status_code == 200
        assert {e["entry_type"] for e in response.json()["entries"]} == {"collected"}

    def test_blank_company_is_rejected(self, client):
        response = client.post("/api/v1/tax/liabilities", json=_record_body(company_id="   "))

        assert response.status_code == 400
        assert "company_id" in response.json()["detail"]

    def test_empty_invoice_fails_validation(self, client):
        response = client.post("/api/v1/tax/liabilities", json=_record_body(invoice_id=""))

        assert response.status_code == 422

    def test_ledger_not_configured_is_503(self, ledgerless_client):
        response = ledgerless_client.post("/api/v1/tax/liabilities", json=_record_body())

        assert response.status_code == 503

    def test_list_ledger(self, client):
        client.post("/api/v1/tax/liabilities", json=_record_body(invoice_id="inv_1"))
        client.post("/api/v1/tax/collections", json=_record_body(invoice_id="inv_2"))

        response = client.get("/api/v1/tax/ledger/cmp_api", params={"invoice_id": "inv_2"})

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert len(entries) == 2
        assert {e["invoice_id"] for e in entries} == {"inv_2"}

    def test_list_ledger_limit_out_of_range(self, client):
        response = client.get("/api/v1/tax/ledger/cmp_api", params={"limit": 5000})

        assert response.status_code == 422


class TestReportEndpoint:
    """GET /api/v1/tax/reports/{company_id}"""

    def test_report(self, client, mock_repository):
        day = datetime(2026, 3, 10, tzinfo=timezone.utc)
        mock_repository.add_entry("cmp_api", "California State", "collected", 25000, day)
        mock_repository.add_entry("cmp_api", "California State", "liability", 24800, day)

        response = client.get(
            "/api/v1/tax/reports/cmp_api",
            params={"start_date": "2026-03-01", "end_date": "2026-03-31"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_tax_collected"] == 25000
        assert data["total_tax_liability"] == 24800
        assert data["breakdown"] == [{
            "jurisdiction": "California State",
            "jurisdiction_type": "state",
            "collected": 25000,
            "liability": 24800,
            "difference": 200,
        }]

    def test_reversed_range_is_400(self, client):
        response = client.get(
            "/api/v1/tax/reports/cmp_api",
            params={"start_date": "2026-03-31", "end_date": "2026-03-01"},
        )

        assert response.status_code == 400

    def test_bad_date_is_422(self, client):
        response = client.get(
            "/api/v1/tax/reports/cmp_api",
            params={"start_date": "March 1", "end_date": "2026-03-31"},
        )

        assert response.status_code == 422

    def test_report_without_ledger_is_503(self, ledgerless_client):
        response = ledgerless_client.get(
            "/api/v1/tax/reports/cmp_api",
            params={"start_date": "2026-03-01", "end_date": "2026-03-31"},
        )

        assert response.status_code == 503
