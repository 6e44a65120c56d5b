"""
Tax Service Data Models

Calculates sales tax for shipments and invoices through external providers
with a static state-rate fallback, and keeps a ledger of collected and owed
tax per jurisdiction.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field, ConfigDict


class JurisdictionType(str, Enum):
    """Taxing authority level"""
    STATE = "state"
    COUNTY = "county"
    CITY = "city"
    SPECIAL = "special"


class TaxProviderName(str, Enum):
    """Which path produced a tax answer"""
    TAXJAR = "taxjar"
    AVALARA = "avalara"
    FALLBACK = "fallback"


class LedgerEntryType(str, Enum):
    """Ledger entry kind"""
    COLLECTED = "collected"
    LIABILITY = "liability"


# =============================================================================
# Calculation Models
# =============================================================================

class Address(BaseModel):
    """Postal address of a shipment origin or destination"""
    country: str = "US"
    state: str = Field(..., description="State or region code, drives fallback lookup")
    zip: str = ""
    city: str = ""
    street: str = ""


class LineItem(BaseModel):
    """Taxable line item"""
    id: str
    quantity: float = Field(..., ge=0)
    unit_price: float = Field(..., ge=0)
    discount: float = Field(default=0.0, ge=0)
    product_tax_code: Optional[str] = None

    @property
    def taxable_amount(self) -> float:
        """Line total after discount"""
        return self.unit_price * self.quantity - self.discount


class TaxCalculationRequest(BaseModel):
    """Tax calculation request for one invoice or shipment"""
    amount: float = Field(..., ge=0, description="Pre-tax total")
    from_address: Address
    to_address: Address
    line_items: List[LineItem] = Field(default_factory=list)


class TaxBreakdown(BaseModel):
    """One jurisdiction's contribution to the total tax"""
    jurisdiction: str
    rate: float = 0.0
    amount: float = 0.0
    type: JurisdictionType = JurisdictionType.SPECIAL


class TaxCalculationResponse(BaseModel):
    """Normalized tax answer from any provider or the fallback table"""
    tax_amount: float = Field(..., ge=0)
    tax_rate: float = Field(..., ge=0)
    breakdown: List[TaxBreakdown] = Field(default_factory=list)
    confidence: float = Field(..., gt=0, le=1)
    provider: TaxProviderName

    @property
    def is_fallback(self) -> bool:
        return self.provider == TaxProviderName.FALLBACK


# =============================================================================
# Ledger Models
# =============================================================================

class TaxLedgerEntry(BaseModel):
    """Recorded tax amount for one jurisdiction of one invoice"""
    entry_id: str
    company_id: str
    invoice_id: str
    jurisdiction: str
    jurisdiction_type: JurisdictionType = JurisdictionType.SPECIAL
    entry_type: LedgerEntryType
    rate: float = 0.0
    amount: float
    provider: Optional[TaxProviderName] = None
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecordTaxRequest(BaseModel):
    """Record the tax answer of an invoice against the company ledger"""
    company_id: str = Field(..., min_length=1)
    invoice_id: str = Field(..., min_length=1)
    tax: TaxCalculationResponse


class TaxLedgerEntryListResponse(BaseModel):
    """Entries written by a record operation"""
    entries: List[TaxLedgerEntry] = Field(default_factory=list)
    total_amount: float = 0.0


# =============================================================================
# Reporting Models
# =============================================================================

class JurisdictionReportLine(BaseModel):
    """Collected vs owed tax for one jurisdiction"""
    jurisdiction: str
    jurisdiction_type: JurisdictionType = JurisdictionType.SPECIAL
    collected: float = 0.0
    liability: float = 0.0
    difference: float = 0.0


class TaxReport(BaseModel):
    """Tax report for a company over a date range"""
    company_id: str
    start_date: date
    end_date: date
    total_tax_collected: float = 0.0
    total_tax_liability: float = 0.0
    breakdown: List[JurisdictionReportLine] = Field(default_factory=list)


# =============================================================================
# Service Models
# =============================================================================

class ProviderStatus(BaseModel):
    """Provider chain entry"""
    name: TaxProviderName
    configured: bool
    confidence: float
    priority: int


class ProviderStatusResponse(BaseModel):
    """Provider chain in priority order"""
    providers: List[ProviderStatus] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    port: int
    version: str
    dependencies: Dict[str, str] = Field(default_factory=dict)


class ServiceInfo(BaseModel):
    """Service information"""
    service: str
    version: str
    description: str
    capabilities: List[str] = Field(default_factory=list)
    endpoints: List[Dict[str, Any]] = Field(default_factory=list)
