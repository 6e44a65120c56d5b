"""
Tax Service Events Module

Exports all event-related functionality for tax service
"""

from .models import (
    TaxEventType,
    TaxCalculatedEvent,
    TaxProviderFallbackEvent,
    TaxLedgerRecordedEvent,
)

from .publishers import (
    publish_tax_calculated,
    publish_tax_provider_fallback,
    publish_tax_ledger_recorded,
)

__all__ = [
    # Event Types
    "TaxEventType",
    # Event Models
    "TaxCalculatedEvent",
    "TaxProviderFallbackEvent",
    "TaxLedgerRecordedEvent",
    # Publishers
    "publish_tax_calculated",
    "publish_tax_provider_fallback",
    "publish_tax_ledger_recorded",
]
