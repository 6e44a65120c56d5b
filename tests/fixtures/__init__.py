"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators
    - tax_fixtures.py: Tax requests, responses and provider bodies
"""

from .common import (
    make_company_id,
    make_invoice_id,
)

from .tax_fixtures import (
    make_address,
    make_line_item,
    make_tax_request,
    make_tax_response,
    make_taxjar_body,
    make_avalara_body,
)

__all__ = [
    "make_company_id",
    "make_invoice_id",
    "make_address",
    "make_line_item",
    "make_tax_request",
    "make_tax_response",
    "make_taxjar_body",
    "make_avalara_body",
]
