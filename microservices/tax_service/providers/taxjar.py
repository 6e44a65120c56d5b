"""TaxJar tax provider (primary)."""

from typing import Any, Dict, Optional

import httpx

from core.config import TAXJAR_CONFIDENCE

from ..models import (
    JurisdictionType,
    TaxBreakdown,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxProviderName,
)
from .base import HttpTaxProvider

TAXJAR_JURISDICTION_TYPES = {
    "state": JurisdictionType.STATE,
    "county": JurisdictionType.COUNTY,
    "city": JurisdictionType.CITY,
}


def map_taxjar_jurisdiction_type(value: Optional[str]) -> JurisdictionType:
    """Map TaxJar's jurisdiction_type; unknown codes are special districts."""
    return TAXJAR_JURISDICTION_TYPES.get((value or "").lower(), JurisdictionType.SPECIAL)


class TaxJarProvider(HttpTaxProvider):
    """POST /taxes with snake_case from_/to_ address fields."""

    name = TaxProviderName.TAXJAR
    display_name = "TaxJar"
    confidence = TAXJAR_CONFIDENCE
    endpoint = "/taxes"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.taxjar.com/v2",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key, base_url, timeout=timeout, http_client=http_client)

    def build_payload(self, request: TaxCalculationRequest) -> Dict[str, Any]:
        origin = request.from_address
        destination = request.to_address
        return {
            "from_country": origin.country,
            "from_zip": origin.zip,
            "from_state": origin.state,
            "from_city": origin.city,
            "from_street": origin.street,
            "to_country": destination.country,
            "to_zip": destination.zip,
            "to_state": destination.state,
            "to_city": destination.city,
            "to_street": destination.street,
            "amount": request.amount,
            "shipping": 0,
            "line_items": [
                {
                    "id": item.id,
                    "quantity": item.quantity,
                    "product_tax_code": item.product_tax_code,
                    "unit_price": item.unit_price,
                    "discount": item.discount or 0,
                }
                for item in request.line_items
            ],
        }

    def parse_response(
        self, data: Dict[str, Any], request: TaxCalculationRequest
    ) -> TaxCalculationResponse:
        tax = data["tax"]
        jurisdictions = (tax.get("breakdown") or {}).get("jurisdictions") or []

        return TaxCalculationResponse(
            tax_amount=tax["amount_to_collect"],
            tax_rate=tax["rate"],
            breakdown=[
                TaxBreakdown(
                    jurisdiction=jurisdiction["jurisdiction_name"],
                    rate=jurisdiction.get("rate") or 0.0,
                    amount=jurisdiction.get("tax_collectable") or 0.0,
                    type=map_taxjar_jurisdiction_type(jurisdiction.get("jurisdiction_type")),
                )
                for jurisdiction in jurisdictions
            ],
            confidence=self.confidence,
            provider=self.name,
        )

    def extract_error_message(self, data: Any) -> Optional[str]:
        if isinstance(data, dict):
            return data.get("detail") or data.get("error")
        return None
