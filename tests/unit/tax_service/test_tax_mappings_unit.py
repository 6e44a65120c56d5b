"""
Unit Tests for Provider Mapping Helpers

Jurisdiction type mapping, payload building and breakdown reconciliation.
"""

from datetime import date

import pytest

from microservices.tax_service.models import JurisdictionType, TaxProviderName
from microservices.tax_service.providers.avalara import (
    AvalaraProvider,
    map_avalara_jurisdiction_type,
)
from microservices.tax_service.providers.base import reconcile_breakdown
from microservices.tax_service.providers.taxjar import (
    TaxJarProvider,
    map_taxjar_jurisdiction_type,
)
from tests.fixtures import make_line_item, make_tax_request, make_tax_response

pytestmark = [pytest.mark.unit]


class TestJurisdictionTypeMapping:

    @pytest.mark.parametrize("value, expected", [
        ("state", JurisdictionType.STATE),
        ("county", JurisdictionType.COUNTY),
        ("city", JurisdictionType.CITY),
        ("special", JurisdictionType.SPECIAL),
        ("district", JurisdictionType.SPECIAL),
        ("STATE", JurisdictionType.STATE),
        (None, JurisdictionType.SPECIAL),
    ])
    def test_taxjar(self, value, expected):
        assert map_taxjar_jurisdiction_type(value) == expected

    @pytest.mark.parametrize("value, expected", [
        ("STA", JurisdictionType.STATE),
        ("COU", JurisdictionType.COUNTY),
        ("CIT", JurisdictionType.CITY),
        ("STJ", JurisdictionType.SPECIAL),
        ("CTY", JurisdictionType.SPECIAL),
        ("", JurisdictionType.SPECIAL),
        (None, JurisdictionType.SPECIAL),
    ])
    def test_avalara(self, value, expected):
        assert map_avalara_jurisdiction_type(value) == expected


class TestPayloads:

    def test_taxjar_discount_defaults_to_zero(self):
        provider = TaxJarProvider(api_key="k")

        payload = provider.build_payload(make_tax_request())

        assert payload["line_items"][0]["discount"] == 0

    def test_avalara_amount_is_after_discount(self):
        provider = AvalaraProvider(api_key="k", today=lambda: date(2026, 1, 2))
        request = make_tax_request(line_items=[make_line_item(quantity=3, unit_price=100.0, discount=25.0)])

        payload = provider.build_payload(request)

        assert payload["date"] == "2026-01-02"
        assert payload["lines"][0]["amount"] == 275.0

    def test_avalara_codes_are_configurable(self):
        provider = AvalaraProvider(api_key="k", company_code="ACME", customer_code="C-1")

        payload = provider.build_payload(make_tax_request())

        assert payload["companyCode"] == "ACME"
        assert payload["customerCode"] == "C-1"

    def test_base_url_trailing_slash_is_dropped(self):
        provider = TaxJarProvider(api_key="k", base_url="https://api.taxjar.com/v2/")

        assert provider.base_url == "https://api.taxjar.com/v2"


class TestReconcileBreakdown:

    def test_matching_breakdown_is_unchanged(self):
        response = make_tax_response()

        result = reconcile_breakdown(response, make_tax_request())

        assert result.breakdown == response.breakdown

    def test_empty_breakdown_gets_summary_line(self):
        response = make_tax_response(breakdown=[])

        result = reconcile_breakdown(response, make_tax_request(to_state="ny"))

        (line,) = result.breakdown
        assert line.jurisdiction == "NY Tax"
        assert line.amount == 82.5
        assert line.rate == 0.0825
        assert line.type == JurisdictionType.SPECIAL

    def test_zero_tax_keeps_empty_breakdown(self):
        response = make_tax_response(tax_amount=0.0, tax_rate=0.0, breakdown=[])

        assert reconcile_breakdown(response, make_tax_request()).breakdown == []

    def test_overstated_breakdown_gets_negative_remainder(self):
        response = make_tax_response(tax_amount=80.0)

        result = reconcile_breakdown(response, make_tax_request())

        assert result.breakdown[-1].jurisdiction == "Unallocated Tax"
        assert result.breakdown[-1].amount == pytest.approx(-2.5)
        assert sum(line.amount for line in result.breakdown) == pytest.approx(80.0)

    def test_other_fields_are_kept(self):
        response = make_tax_response(provider=TaxProviderName.AVALARA, confidence=0.98, breakdown=[])

        result = reconcile_breakdown(response, make_tax_request())

        assert result.provider == TaxProviderName.AVALARA
        assert result.confidence == 0.98
        assert result.tax_amount == 82.5
