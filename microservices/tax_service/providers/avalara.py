"""Avalara AvaTax tax provider (secondary)."""

from datetime import date
from typing import Any, Callable, Dict, Optional

import httpx

from core.config import AVALARA_CONFIDENCE

from ..models import (
    Address,
    JurisdictionType,
    TaxBreakdown,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxProviderName,
)
from .base import HttpTaxProvider

AVALARA_JURISDICTION_TYPES = {
    "sta": JurisdictionType.STATE,
    "cou": JurisdictionType.COUNTY,
    "cit": JurisdictionType.CITY,
}

# Freight tax code, used when a line has no product tax code
DEFAULT_TAX_CODE = "FR"


def map_avalara_jurisdiction_type(value: Optional[str]) -> JurisdictionType:
    """Map AvaTax's three-letter jurisType; unknown codes are special districts."""
    return AVALARA_JURISDICTION_TYPES.get((value or "").lower(), JurisdictionType.SPECIAL)


def _avalara_address(address: Address) -> Dict[str, str]:
    return {
        "line1": address.street,
        "city": address.city,
        "region": address.state,
        "country": address.country,
        "postalCode": address.zip,
    }


class AvalaraProvider(HttpTaxProvider):
    """POST /transactions/create with a SalesInvoice document."""

    name = TaxProviderName.AVALARA
    display_name = "Avalara"
    confidence = AVALARA_CONFIDENCE
    endpoint = "/transactions/create"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://rest.avatax.com/api/v2",
        company_code: str = "DEFAULT",
        customer_code: str = "CUSTOMER",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(api_key, base_url, timeout=timeout, http_client=http_client)
        self.company_code = company_code
        self.customer_code = customer_code
        self._today = today

    def build_payload(self, request: TaxCalculationRequest) -> Dict[str, Any]:
        return {
            "type": "SalesInvoice",
            "companyCode": self.company_code,
            "date": self._today().isoformat(),
            "customerCode": self.customer_code,
            "addresses": {
                "shipFrom": _avalara_address(request.from_address),
                "shipTo": _avalara_address(request.to_address),
            },
            "lines": [
                {
                    "number": str(index + 1),
                    "quantity": item.quantity,
                    "amount": item.taxable_amount,
                    "taxCode": item.product_tax_code or DEFAULT_TAX_CODE,
                    "itemCode": item.id,
                    "description": f"Transportation Service {item.id}",
                }
                for index, item in enumerate(request.line_items)
            ],
        }

    def parse_response(
        self, data: Dict[str, Any], request: TaxCalculationRequest
    ) -> TaxCalculationResponse:
        total_tax = data["totalTax"]
        tax_rate = total_tax / request.amount if request.amount else 0.0

        return TaxCalculationResponse(
            tax_amount=total_tax,
            tax_rate=tax_rate,
            breakdown=[
                TaxBreakdown(
                    jurisdiction=summary["jurisName"],
                    rate=summary.get("rate") or 0.0,
                    amount=summary.get("tax") or 0.0,
                    type=map_avalara_jurisdiction_type(summary.get("jurisType")),
                )
                for summary in data.get("summary") or []
            ],
            confidence=self.confidence,
            provider=self.name,
        )

    def extract_error_message(self, data: Any) -> Optional[str]:
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict):
                return error.get("message")
        return None
