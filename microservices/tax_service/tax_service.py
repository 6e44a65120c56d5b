"""
Tax Service - Business Logic Layer

Tax calculation with provider fallback:
- External providers are tried one at a time in priority order
- Provider failures are logged and demoted to the next step
- The static state-rate table always answers when every provider failed

Ledger and reporting:
- Liabilities and collected tax recorded per jurisdiction
- Collected vs liability report per jurisdiction over a date range
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union

from .events.models import TaxEventType
from .events.publishers import (
    publish_tax_calculated,
    publish_tax_provider_fallback,
    publish_tax_ledger_recorded,
)
from .models import (
    JurisdictionReportLine,
    LedgerEntryType,
    ProviderStatus,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxLedgerEntry,
    TaxReport,
)
from .protocols import (
    EventBusProtocol,
    TaxProviderError,
    TaxRepositoryProtocol,
    TaxLedgerUnavailableError,
)
from .providers.base import TaxProvider
from .providers.fallback import StaticRateTaxProvider

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


class TaxService:
    """
    Tax Service - Core business logic

    Providers are injected as an ordered list, so adding a provider does not
    touch the fallback chain below.
    """

    def __init__(
        self,
        providers: Sequence[TaxProvider],
        fallback: Optional[StaticRateTaxProvider] = None,
        repository: Optional[TaxRepositoryProtocol] = None,
        event_bus: Optional[EventBusProtocol] = None,
    ):
        """
        Initialize tax service with dependencies.

        Args:
            providers: External providers in priority order
            fallback: Static table used when every provider fails
            repository: Tax ledger (optional, ledger operations need it)
            event_bus: Event bus for publishing events (optional)
        """
        self.providers = list(providers)
        self.fallback = fallback or StaticRateTaxProvider()
        self.repository = repository
        self.event_bus = event_bus

    async def close(self) -> None:
        """Close provider HTTP clients"""
        for provider in self.providers:
            await provider.close()

    # ====================
    # Calculation
    # ====================

    async def calculate_tax(self, request: TaxCalculationRequest) -> TaxCalculationResponse:
        """
        Calculate tax, falling back through the provider chain.

        Never raises for provider problems: missing credentials, HTTP errors,
        timeouts and malformed responses all move on to the next provider,
        and the static table answers last.
        """
        failed_providers: List[str] = []
        errors: List[str] = []

        for provider in self.providers:
            try:
                result = await provider.calculate(request)
            except TaxProviderError as e:
                logger.warning(f"{provider.name.value} failed, trying next provider: {e}")
                failed_providers.append(provider.name.value)
                errors.append(str(e))
                continue
            except Exception as e:
                logger.error(f"Unexpected {provider.name.value} error, trying next provider: {e}", exc_info=True)
                failed_providers.append(provider.name.value)
                errors.append(str(e))
                continue

            await self._publish_calculated(request, result)
            return result

        logger.info("All tax providers failed, using fallback calculation")
        result = self.fallback.calculate_sync(request)

        await publish_tax_provider_fallback(
            self.event_bus,
            to_state=request.to_address.state,
            failed_providers=failed_providers,
            errors=errors,
        )
        await self._publish_calculated(request, result)
        return result

    def get_provider_status(self) -> List[ProviderStatus]:
        """Provider chain in priority order, static table last"""
        chain = self.providers + [self.fallback]
        return [
            ProviderStatus(
                name=provider.name,
                configured=provider.is_configured(),
                confidence=provider.confidence,
                priority=priority,
            )
            for priority, provider in enumerate(chain, start=1)
        ]

    async def _publish_calculated(
        self, request: TaxCalculationRequest, result: TaxCalculationResponse
    ) -> None:
        await publish_tax_calculated(
            self.event_bus,
            provider=result.provider.value,
            confidence=result.confidence,
            tax_amount=result.tax_amount,
            tax_rate=result.tax_rate,
            amount=request.amount,
            to_state=request.to_address.state,
        )

    # ====================
    # Ledger
    # ====================

    async def record_tax_liability(
        self, company_id: str, tax_data: TaxCalculationResponse, invoice_id: str
    ) -> List[TaxLedgerEntry]:
        """Record tax owed to each jurisdiction for an invoice"""
        return await self._record(
            company_id, tax_data, invoice_id,
            LedgerEntryType.LIABILITY, TaxEventType.TAX_LIABILITY_RECORDED,
        )

    async def record_tax_collected(
        self, company_id: str, tax_data: TaxCalculationResponse, invoice_id: str
    ) -> List[TaxLedgerEntry]:
        """Record tax charged to the customer for an invoice"""
        return await self._record(
            company_id, tax_data, invoice_id,
            LedgerEntryType.COLLECTED, TaxEventType.TAX_COLLECTED_RECORDED,
        )

    async def _record(
        self,
        company_id: str,
        tax_data: TaxCalculationResponse,
        invoice_id: str,
        entry_type: LedgerEntryType,
        event_type: TaxEventType,
    ) -> List[TaxLedgerEntry]:
        company_id = _required(company_id, "company_id")
        invoice_id = _required(invoice_id, "invoice_id")

        logger.info(
            f"Recording tax {entry_type.value} for company {company_id}: "
            f"invoice={invoice_id} tax_amount={tax_data.tax_amount} "
            f"tax_rate={tax_data.tax_rate} jurisdictions={len(tax_data.breakdown)}"
        )

        repository = self._require_repository()
        recorded_at = datetime.now(timezone.utc)

        entries = [
            {
                "entry_id": f"txl_{uuid.uuid4().hex[:24]}",
                "company_id": company_id,
                "invoice_id": invoice_id,
                "jurisdiction": line.jurisdiction,
                "jurisdiction_type": line.type.value,
                "entry_type": entry_type.value,
                "rate": line.rate,
                "amount": line.amount,
                "provider": tax_data.provider.value,
                "recorded_at": recorded_at,
            }
            for line in tax_data.breakdown
        ]

        stored = await repository.create_entries(entries)
        recorded = [TaxLedgerEntry(**entry) for entry in stored]

        await publish_tax_ledger_recorded(
            self.event_bus,
            event_type=event_type,
            company_id=company_id,
            invoice_id=invoice_id,
            entry_type=entry_type.value,
            total_amount=sum(entry.amount for entry in recorded),
            jurisdictions=[entry.jurisdiction for entry in recorded],
            provider=tax_data.provider.value,
        )
        return recorded

    async def list_ledger_entries(
        self,
        company_id: str,
        invoice_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[TaxLedgerEntry]:
        """Ledger entries for a company, newest first"""
        company_id = _required(company_id, "company_id")
        if limit < 1 or limit > 1000:
            raise ValueError("limit must be between 1 and 1000")
        if offset < 0:
            raise ValueError("offset must not be negative")

        rows = await self._require_repository().list_entries(
            company_id, invoice_id=invoice_id, limit=limit, offset=offset
        )
        return [TaxLedgerEntry(**row) for row in rows]

    # ====================
    # Reporting
    # ====================

    async def generate_tax_report(
        self, company_id: str, start_date: DateLike, end_date: DateLike
    ) -> TaxReport:
        """
        Collected vs liability per jurisdiction over a date range.

        Both dates are inclusive. Lines are per jurisdiction name and type, so a
        county and a city sharing a name stay separate. ``difference`` is
        collected minus liability, so a positive value means more was charged
        than is owed.
        """
        company_id = _required(company_id, "company_id")
        start = _parse_date(start_date, "start_date")
        end = _parse_date(end_date, "end_date")
        if start > end:
            raise ValueError("start_date must not be after end_date")

        totals = await self._require_repository().get_jurisdiction_totals(company_id, start, end)

        breakdown = [
            JurisdictionReportLine(
                jurisdiction=row["jurisdiction"],
                jurisdiction_type=row["jurisdiction_type"],
                collected=row["collected"],
                liability=row["liability"],
                difference=row["collected"] - row["liability"],
            )
            for row in sorted(totals, key=lambda row: (row["jurisdiction"], row["jurisdiction_type"]))
        ]

        return TaxReport(
            company_id=company_id,
            start_date=start,
            end_date=end,
            total_tax_collected=sum(line.collected for line in breakdown),
            total_tax_liability=sum(line.liability for line in breakdown),
            breakdown=breakdown,
        )

    def _require_repository(self) -> TaxRepositoryProtocol:
        if self.repository is None:
            raise TaxLedgerUnavailableError("Tax ledger is not configured")
        return self.repository


def _required(value: Optional[str], field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


def _parse_date(value: DateLike, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an ISO date (YYYY-MM-DD)")
