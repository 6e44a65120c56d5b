#!/usr/bin/env python3
"""Tax provider configuration

Credentials and endpoints for the external tax calculation providers.
An empty API key disables that provider.
"""
import os
from dataclasses import dataclass

# Fixed reliability scores attached to each answer path
TAXJAR_CONFIDENCE = 0.95
AVALARA_CONFIDENCE = 0.98
FALLBACK_CONFIDENCE = 0.75

DEFAULT_FALLBACK_RATE = 0.05


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class TaxConfig:
    """External tax provider settings"""

    # ===========================================
    # TaxJar (primary)
    # ===========================================
    taxjar_api_key: str = ""
    taxjar_base_url: str = "https://api.taxjar.com/v2"

    # ===========================================
    # Avalara AvaTax (secondary)
    # ===========================================
    avalara_api_key: str = ""
    avalara_base_url: str = "https://rest.avatax.com/api/v2"
    avalara_company_code: str = "DEFAULT"
    avalara_customer_code: str = "CUSTOMER"

    # Per-provider request timeout (seconds)
    provider_timeout: float = 10.0

    # Static table fallback
    fallback_default_rate: float = DEFAULT_FALLBACK_RATE

    @property
    def taxjar_enabled(self) -> bool:
        return bool(self.taxjar_api_key)

    @property
    def avalara_enabled(self) -> bool:
        return bool(self.avalara_api_key)

    @classmethod
    def from_env(cls) -> 'TaxConfig':
        """Load tax provider config from environment"""
        return cls(
            taxjar_api_key=os.getenv("TAXJAR_API_KEY", ""),
            taxjar_base_url=os.getenv("TAXJAR_API_URL", "https://api.taxjar.com/v2"),
            avalara_api_key=os.getenv("AVALARA_API_KEY", ""),
            avalara_base_url=os.getenv("AVALARA_API_URL", "https://rest.avatax.com/api/v2"),
            avalara_company_code=os.getenv("AVALARA_COMPANY_CODE", "DEFAULT"),
            avalara_customer_code=os.getenv("AVALARA_CUSTOMER_CODE", "CUSTOMER"),
            provider_timeout=_float(os.getenv("TAX_PROVIDER_TIMEOUT", "10"), 10.0),
            fallback_default_rate=_float(
                os.getenv("TAX_FALLBACK_DEFAULT_RATE", ""), DEFAULT_FALLBACK_RATE
            ),
        )
