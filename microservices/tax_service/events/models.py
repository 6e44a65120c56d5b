"""
Tax Service Event Models

Pydantic models for events published by tax service
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field


# =============================================================================
# Event Type Definitions (Service-Specific)
# =============================================================================

class TaxEventType(str, Enum):
    """
    Events published by tax_service.

    Stream: tax-stream
    Subjects: tax.>
    """
    TAX_CALCULATED = "tax.calculated"
    TAX_PROVIDER_FALLBACK = "tax.provider_fallback"
    TAX_LIABILITY_RECORDED = "tax.liability_recorded"
    TAX_COLLECTED_RECORDED = "tax.collected_recorded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Event Data Models
# =============================================================================

class TaxCalculatedEvent(BaseModel):
    """Event published after every tax calculation"""
    provider: str
    confidence: float
    tax_amount: float
    tax_rate: float
    amount: float
    to_state: str
    timestamp: datetime = Field(default_factory=_utcnow)


class TaxProviderFallbackEvent(BaseModel):
    """Event published when no external provider answered"""
    to_state: str
    failed_providers: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)


class TaxLedgerRecordedEvent(BaseModel):
    """Event published when tax amounts are written to the ledger"""
    company_id: str
    invoice_id: str
    entry_type: str
    total_amount: float
    jurisdictions: List[str] = Field(default_factory=list)
    provider: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
