"""Tax provider interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..models import (
    JurisdictionType,
    TaxBreakdown,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxProviderName,
)
from ..protocols import TaxProviderConfigurationError, TaxProviderError

logger = logging.getLogger(__name__)

# Breakdown lines must sum to the total within this tolerance
BREAKDOWN_TOLERANCE = 1e-6


class TaxProvider(ABC):
    """Abstract tax provider."""

    name: TaxProviderName
    confidence: float

    def is_configured(self) -> bool:
        """Whether the provider can be called at all."""
        return True

    @abstractmethod
    async def calculate(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        """Calculate tax for a request."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release provider resources."""
        return None


class HttpTaxProvider(TaxProvider):
    """
    Base for providers reached over HTTP with Bearer-token auth.

    Subclasses build the provider payload, name the endpoint path, and map
    the provider's response body into the common response shape.
    """

    display_name: str = ""
    endpoint: str = ""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    @abstractmethod
    def build_payload(self, request: TaxCalculationRequest) -> Dict[str, Any]:
        """Translate the common request into the provider's request body."""
        raise NotImplementedError

    @abstractmethod
    def parse_response(
        self, data: Dict[str, Any], request: TaxCalculationRequest
    ) -> TaxCalculationResponse:
        """Translate the provider's response body into the common response."""
        raise NotImplementedError

    @abstractmethod
    def extract_error_message(self, data: Any) -> Optional[str]:
        """Pull the provider's error message out of an error body."""
        raise NotImplementedError

    async def calculate(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        if not self.is_configured():
            raise TaxProviderConfigurationError(
                f"{self.display_name} API key not configured",
                provider=self.name.value,
            )

        url = f"{self.base_url}{self.endpoint}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self.http_client.post(
                url,
                json=self.build_payload(request),
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error(f"{self.display_name} API error: {e}")
            raise TaxProviderError(
                f"Tax calculation failed: {e}", provider=self.name.value
            ) from e

        if response.status_code >= 400:
            body = _safe_json(response)
            message = self.extract_error_message(body) or f"HTTP {response.status_code}"
            logger.error(f"{self.display_name} API error: {body or response.status_code}")
            raise TaxProviderError(
                f"Tax calculation failed: {message}",
                provider=self.name.value,
                status_code=response.status_code,
            )

        body = _safe_json(response)
        if not isinstance(body, dict):
            raise TaxProviderError(
                f"Tax calculation failed: {self.display_name} returned a non-JSON body",
                provider=self.name.value,
                status_code=response.status_code,
            )

        try:
            result = self.parse_response(body, request)
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"{self.display_name} returned an unexpected response: {e}")
            raise TaxProviderError(
                f"Tax calculation failed: malformed {self.display_name} response",
                provider=self.name.value,
                status_code=response.status_code,
            ) from e

        return reconcile_breakdown(result, request)


def reconcile_breakdown(
    result: TaxCalculationResponse, request: TaxCalculationRequest
) -> TaxCalculationResponse:
    """
    Make breakdown amounts sum to the total tax.

    A provider answer without jurisdiction detail gets one summary line; a
    breakdown that does not add up gets an extra line carrying the remainder.
    """
    breakdown: List[TaxBreakdown] = list(result.breakdown)

    if not breakdown:
        if result.tax_amount > 0:
            breakdown.append(TaxBreakdown(
                jurisdiction=f"{request.to_address.state.upper()} Tax",
                rate=result.tax_rate,
                amount=result.tax_amount,
                type=JurisdictionType.SPECIAL,
            ))
    else:
        remainder = result.tax_amount - sum(line.amount for line in breakdown)
        if abs(remainder) > BREAKDOWN_TOLERANCE:
            logger.warning(
                f"{result.provider.value} breakdown is off by {remainder:.6f}, "
                "adding unallocated line"
            )
            breakdown.append(TaxBreakdown(
                jurisdiction="Unallocated Tax",
                rate=0.0,
                amount=remainder,
                type=JurisdictionType.SPECIAL,
            ))

    return result.model_copy(update={"breakdown": breakdown})


def _safe_json(response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
