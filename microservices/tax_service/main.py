"""Tax Service API with provider fallback and PostgreSQL tax ledger."""

from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from core.config import get_settings
from core.logger import setup_service_logger

from .factory import create_tax_service
from .models import (
    HealthResponse,
    ProviderStatusResponse,
    RecordTaxRequest,
    ServiceInfo,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxLedgerEntry,
    TaxLedgerEntryListResponse,
    TaxReport,
)
from .protocols import TaxLedgerUnavailableError, TaxServiceError
from .routes_registry import SERVICE_METADATA, get_routes_summary
from .tax_service import TaxService

config = get_settings()
logger = setup_service_logger("tax_service", level=config.log_level.upper())

tax_service: Optional[TaxService] = None
SERVICE_PORT = config.service_port


@asynccontextmanager
async def lifespan(app: FastAPI):
    global tax_service

    tax_service = create_tax_service(config=config)

    # Initialize ledger (PostgreSQL); calculation keeps working without it
    if tax_service.repository is not None:
        try:
            await tax_service.repository.initialize()
            logger.info("Tax ledger initialized with PostgreSQL")
        except Exception as e:
            logger.error(f"Failed to initialize tax ledger: {e}. Continuing without ledger.")
            tax_service.repository = None

    logger.info(f"Tax Service started on port {SERVICE_PORT}")

    yield

    # Cleanup
    await tax_service.close()
    if tax_service.repository is not None:
        try:
            await tax_service.repository.close()
            logger.info("Tax ledger connections closed")
        except Exception as e:
            logger.error(f"Error closing tax ledger: {e}")

    logger.info("Tax Service shutting down...")


app = FastAPI(
    title="tax_service",
    description=SERVICE_METADATA["description"],
    version=SERVICE_METADATA["version"],
    lifespan=lifespan,
)


# ====================
# Dependency injection
# ====================

async def get_tax_service() -> TaxService:
    if not tax_service:
        raise HTTPException(status_code=503, detail="Tax service not initialized")
    return tax_service


def _raise_http(e: Exception, action: str):
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, TaxLedgerUnavailableError):
        raise HTTPException(status_code=503, detail=str(e))
    logger.error(f"Error {action}: {e}")
    raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


# ====================
# Health and info
# ====================

@app.get("/api/v1/tax/health", response_model=HealthResponse)
@app.get("/health", response_model=HealthResponse)
async def health():
    dependencies = {"ledger": "disabled"}

    # Check ledger database connection
    if tax_service and tax_service.repository is not None:
        try:
            healthy = await tax_service.repository.health_check()
        except Exception as e:
            logger.warning(f"Tax ledger health check failed: {e}")
            healthy = False
        dependencies["ledger"] = "healthy" if healthy else "unhealthy"

    return HealthResponse(
        status="degraded" if "unhealthy" in dependencies.values() else "healthy",
        service="tax_service",
        port=SERVICE_PORT,
        version=SERVICE_METADATA["version"],
        dependencies=dependencies,
    )


@app.get("/api/v1/tax/info", response_model=ServiceInfo)
async def service_info():
    return ServiceInfo(
        service=SERVICE_METADATA["service_name"],
        version=SERVICE_METADATA["version"],
        description=SERVICE_METADATA["description"],
        capabilities=SERVICE_METADATA["capabilities"],
        endpoints=get_routes_summary(),
    )


@app.get("/api/v1/tax/providers", response_model=ProviderStatusResponse)
async def provider_status(service: TaxService = Depends(get_tax_service)):
    return ProviderStatusResponse(providers=service.get_provider_status())


# ====================
# Calculation
# ====================

@app.post("/api/v1/tax/calculate", response_model=TaxCalculationResponse)
async def calculate_tax(
    request: TaxCalculationRequest,
    service: TaxService = Depends(get_tax_service),
):
    """
    Calculate tax for a shipment or invoice.

    Always answers: when no provider is reachable the static state-rate table
    is used and the response carries confidence 0.75.
    """
    return await service.calculate_tax(request)


# ====================
# Ledger
# ====================

def _entry_list(entries: List[TaxLedgerEntry]) -> TaxLedgerEntryListResponse:
    return TaxLedgerEntryListResponse(
        entries=entries,
        total_amount=sum(entry.amount for entry in entries),
    )


@app.post("/api/v1/tax/liabilities", response_model=TaxLedgerEntryListResponse)
async def record_tax_liability(
    request: RecordTaxRequest,
    service: TaxService = Depends(get_tax_service),
):
    try:
        entries = await service.record_tax_liability(
            request.company_id, request.tax, request.invoice_id
        )
        return _entry_list(entries)
    except (ValueError, TaxServiceError) as e:
        _raise_http(e, "recording tax liability")


@app.post("/api/v1/tax/collections", response_model=TaxLedgerEntryListResponse)
async def record_tax_collected(
    request: RecordTaxRequest,
    service: TaxService = Depends(get_tax_service),
):
    try:
        entries = await service.record_tax_collected(
            request.company_id, request.tax, request.invoice_id
        )
        return _entry_list(entries)
    except (ValueError, TaxServiceError) as e:
        _raise_http(e, "recording tax collected")


@app.get("/api/v1/tax/ledger/{company_id}", response_model=TaxLedgerEntryListResponse)
async def list_ledger_entries(
    company_id: str,
    invoice_id: Optional[str] = None,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: TaxService = Depends(get_tax_service),
):
    try:
        entries = await service.list_ledger_entries(
            company_id, invoice_id=invoice_id, limit=limit, offset=offset
        )
        return _entry_list(entries)
    except (ValueError, TaxServiceError) as e:
        _raise_http(e, "listing ledger entries")


# ====================
# Reporting
# ====================

@app.get("/api/v1/tax/reports/{company_id}", response_model=TaxReport)
async def generate_tax_report(
    company_id: str,
    start_date: date,
    end_date: date,
    service: TaxService = Depends(get_tax_service),
):
    try:
        return await service.generate_tax_report(company_id, start_date, end_date)
    except (ValueError, TaxServiceError) as e:
        _raise_http(e, "generating tax report")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.tax_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        log_level=config.log_level.lower(),
    )
