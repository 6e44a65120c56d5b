"""
Tax Service Routes Registry
Defines all API routes exposed by the tax service.
"""
from typing import List, Dict, Any

SERVICE_ROUTES = [
    # Health and Service Info
    {
        "path": "/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Basic health check endpoint"
    },
    {
        "path": "/api/v1/tax/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check (API v1)"
    },
    {
        "path": "/api/v1/tax/info",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service information and route list"
    },
    # Calculation
    {
        "path": "/api/v1/tax/providers",
        "methods": ["GET"],
        "auth_required": True,
        "description": "Provider chain status in priority order"
    },
    {
        "path": "/api/v1/tax/calculate",
        "methods": ["POST"],
        "auth_required": True,
        "description": "Calculate tax with provider fallback"
    },
    # Ledger
    {
        "path": "/api/v1/tax/liabilities",
        "methods": ["POST"],
        "auth_required": True,
        "description": "Record tax liability for an invoice"
    },
    {
        "path": "/api/v1/tax/collections",
        "methods": ["POST"],
        "auth_required": True,
        "description": "Record tax collected for an invoice"
    },
    {
        "path": "/api/v1/tax/ledger/{company_id}",
        "methods": ["GET"],
        "auth_required": True,
        "description": "List ledger entries for a company"
    },
    # Reporting
    {
        "path": "/api/v1/tax/reports/{company_id}",
        "methods": ["GET"],
        "auth_required": True,
        "description": "Collected vs liability report per jurisdiction"
    },
]


def get_routes_summary() -> List[Dict[str, Any]]:
    """Route list for the service info endpoint"""
    return [
        {"path": route["path"], "methods": route["methods"]}
        for route in SERVICE_ROUTES
    ]


# Service metadata
SERVICE_METADATA = {
    "service_name": "tax_service",
    "version": "1.0.0",
    "description": "Sales tax calculation with provider fallback and tax ledger reporting",
    "tags": ["v1", "tax", "billing"],
    "capabilities": [
        "tax_calculation",
        "provider_fallback",
        "tax_liability_ledger",
        "tax_reporting",
        "event_driven"
    ]
}
