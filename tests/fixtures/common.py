"""
Common/Shared Fixtures

Base ID generators used across test layers.
"""
import uuid


def make_company_id() -> str:
    """Generate a unique company ID"""
    return f"cmp_test_{uuid.uuid4().hex[:12]}"


def make_invoice_id() -> str:
    """Generate a unique invoice ID"""
    return f"inv_test_{uuid.uuid4().hex[:12]}"
