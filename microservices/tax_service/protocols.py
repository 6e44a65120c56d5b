"""
Tax Service Protocols

Defines interfaces for dependency injection and testing.
Following the protocol-based architecture pattern.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


# ====================
# Repository Protocol
# ====================


@runtime_checkable
class TaxRepositoryProtocol(Protocol):
    """Ledger interface for recorded tax amounts"""

    async def create_entries(self, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Persist ledger entries.

        Args:
            entries: Entry dictionaries (entry_id, company_id, invoice_id,
                jurisdiction, jurisdiction_type, entry_type, rate, amount,
                provider, recorded_at)

        Returns:
            The stored entries
        """
        ...

    async def get_jurisdiction_totals(
        self, company_id: str, start_date: date, end_date: date
    ) -> List[Dict[str, Any]]:
        """
        Sum ledger amounts per jurisdiction and type for a company and date range.

        Args:
            company_id: Company identifier
            start_date: First day included
            end_date: Last day included

        Returns:
            Rows of {jurisdiction, jurisdiction_type, collected, liability}
        """
        ...

    async def list_entries(
        self,
        company_id: str,
        invoice_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """List ledger entries for a company, newest first"""
        ...

    async def health_check(self) -> bool:
        """Whether the ledger store is reachable"""
        ...


# ====================
# Event Bus Protocol
# ====================


@runtime_checkable
class EventBusProtocol(Protocol):
    """Event publishing interface"""

    async def publish_event(self, event: Any) -> None:
        """Publish an event"""
        ...


# ====================
# Exceptions
# ====================


class TaxServiceError(Exception):
    """Base exception for tax service errors"""
    pass


class TaxProviderError(TaxServiceError):
    """Raised when an external tax provider fails to answer"""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class TaxProviderConfigurationError(TaxProviderError):
    """Raised when a provider is called without its credential"""
    pass


class TaxLedgerUnavailableError(TaxServiceError):
    """Raised when a ledger operation is requested but no ledger is configured"""
    pass


class TaxLedgerError(TaxServiceError):
    """Raised when reading or writing the ledger fails"""
    pass


__all__ = [
    "TaxRepositoryProtocol",
    "EventBusProtocol",
    "TaxServiceError",
    "TaxProviderError",
    "TaxProviderConfigurationError",
    "TaxLedgerUnavailableError",
    "TaxLedgerError",
]
