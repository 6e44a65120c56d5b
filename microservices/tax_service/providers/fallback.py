"""Static state-rate tax provider used when every external provider fails."""

from types import MappingProxyType
from typing import Mapping

from core.config import DEFAULT_FALLBACK_RATE, FALLBACK_CONFIDENCE

from ..models import (
    JurisdictionType,
    TaxBreakdown,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxProviderName,
)
from .base import TaxProvider

STATE_TAX_RATES: Mapping[str, float] = MappingProxyType({
    "CA": 0.0825,  # California
    "TX": 0.0625,  # Texas
    "FL": 0.06,    # Florida
    "NY": 0.08,    # New York
    "IL": 0.0625,  # Illinois
    "PA": 0.06,    # Pennsylvania
    "OH": 0.0575,  # Ohio
    "GA": 0.04,    # Georgia
    "NC": 0.0475,  # North Carolina
    "MI": 0.06,    # Michigan
})


class StaticRateTaxProvider(TaxProvider):
    """
    State-level sales tax from a fixed table.

    Never raises: unknown states get the default rate. The answer is a pure
    function of the destination state and the amount.
    """

    name = TaxProviderName.FALLBACK
    confidence = FALLBACK_CONFIDENCE

    def __init__(
        self,
        rates: Mapping[str, float] = STATE_TAX_RATES,
        default_rate: float = DEFAULT_FALLBACK_RATE,
    ):
        self.rates = MappingProxyType({code.upper(): rate for code, rate in rates.items()})
        self.default_rate = default_rate

    def rate_for(self, state: str) -> float:
        return self.rates.get((state or "").upper(), self.default_rate)

    def calculate_sync(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        state = request.to_address.state
        tax_rate = self.rate_for(state)
        tax_amount = request.amount * tax_rate

        return TaxCalculationResponse(
            tax_amount=tax_amount,
            tax_rate=tax_rate,
            breakdown=[
                TaxBreakdown(
                    jurisdiction=f"{state} State Tax",
                    rate=tax_rate,
                    amount=tax_amount,
                    type=JurisdictionType.STATE,
                )
            ],
            confidence=self.confidence,
            provider=self.name,
        )

    async def calculate(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        return self.calculate_sync(request)
