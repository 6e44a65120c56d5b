"""Tax providers: external HTTP adapters and the static fallback table."""

from .base import TaxProvider, HttpTaxProvider, reconcile_breakdown
from .taxjar import TaxJarProvider, map_taxjar_jurisdiction_type
from .avalara import AvalaraProvider, map_avalara_jurisdiction_type
from .fallback import StaticRateTaxProvider, STATE_TAX_RATES

__all__ = [
    "TaxProvider",
    "HttpTaxProvider",
    "reconcile_breakdown",
    "TaxJarProvider",
    "AvalaraProvider",
    "StaticRateTaxProvider",
    "STATE_TAX_RATES",
    "map_taxjar_jurisdiction_type",
    "map_avalara_jurisdiction_type",
]
