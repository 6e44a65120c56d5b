"""
Tax Service Factory

Factory for creating TaxService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config import ServiceConfig

from .providers.avalara import AvalaraProvider
from .providers.fallback import StaticRateTaxProvider
from .providers.taxjar import TaxJarProvider
from .tax_repository import TaxRepository
from .tax_service import TaxService

logger = logging.getLogger(__name__)


def create_tax_service(
    config: Optional[ServiceConfig] = None,
    event_bus=None,
    repository=None,
) -> TaxService:
    """
    Create TaxService with all real dependencies

    Args:
        config: Optional service config (loaded from environment if not provided)
        event_bus: Optional event bus for event publishing
        repository: Optional ledger repository (created from config if not provided)

    Returns:
        Fully initialized TaxService instance
    """
    if config is None:
        config = ServiceConfig.from_env()

    tax_config = config.tax

    # Provider priority: TaxJar first, Avalara second, static table last
    providers = [
        TaxJarProvider(
            api_key=tax_config.taxjar_api_key,
            base_url=tax_config.taxjar_base_url,
            timeout=tax_config.provider_timeout,
        ),
        AvalaraProvider(
            api_key=tax_config.avalara_api_key,
            base_url=tax_config.avalara_base_url,
            company_code=tax_config.avalara_company_code,
            customer_code=tax_config.avalara_customer_code,
            timeout=tax_config.provider_timeout,
        ),
    ]

    for provider in providers:
        if provider.is_configured():
            logger.info(f"✅ {provider.display_name} tax provider configured")
        else:
            logger.warning(f"⚠️ {provider.display_name} API key not set, provider will be skipped")

    if repository is None and config.ledger_enabled:
        repository = TaxRepository(config=config.infrastructure)

    return TaxService(
        providers=providers,
        fallback=StaticRateTaxProvider(default_rate=tax_config.fallback_default_rate),
        repository=repository,
        event_bus=event_bus,
    )


__all__ = ["create_tax_service"]
