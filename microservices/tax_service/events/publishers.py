"""
Tax Service Event Publishers

Functions to publish events from tax service
"""

import logging
from typing import List, Optional

from core.event_bus import Event, ServiceSource
from .models import (
    TaxEventType,
    TaxCalculatedEvent,
    TaxProviderFallbackEvent,
    TaxLedgerRecordedEvent,
)

logger = logging.getLogger(__name__)


async def publish_tax_calculated(
    event_bus,
    provider: str,
    confidence: float,
    tax_amount: float,
    tax_rate: float,
    amount: float,
    to_state: str,
) -> bool:
    """Publish tax.calculated event"""
    if not event_bus:
        logger.debug("Event bus not available, skipping tax.calculated event")
        return False

    try:
        event_data = TaxCalculatedEvent(
            provider=provider,
            confidence=confidence,
            tax_amount=tax_amount,
            tax_rate=tax_rate,
            amount=amount,
            to_state=to_state,
        )

        event = Event(
            event_type=TaxEventType.TAX_CALCULATED,
            source=ServiceSource.TAX_SERVICE,
            data=event_data.model_dump(mode='json')
        )

        await event_bus.publish_event(event)
        logger.info(f"Published tax.calculated event ({provider})")
        return True

    except Exception as e:
        logger.error(f"Failed to publish tax.calculated event: {e}")
        return False


async def publish_tax_provider_fallback(
    event_bus,
    to_state: str,
    failed_providers: Optional[List[str]] = None,
    errors: Optional[List[str]] = None,
) -> bool:
    """Publish tax.provider_fallback event"""
    if not event_bus:
        logger.debug("Event bus not available, skipping tax.provider_fallback event")
        return False

    try:
        event_data = TaxProviderFallbackEvent(
            to_state=to_state,
            failed_providers=failed_providers or [],
            errors=errors or [],
        )

        event = Event(
            event_type=TaxEventType.TAX_PROVIDER_FALLBACK,
            source=ServiceSource.TAX_SERVICE,
            data=event_data.model_dump(mode='json')
        )

        await event_bus.publish_event(event)
        logger.info(f"Published tax.provider_fallback event for state {to_state}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish tax.provider_fallback event: {e}")
        return False


async def publish_tax_ledger_recorded(
    event_bus,
    event_type: TaxEventType,
    company_id: str,
    invoice_id: str,
    entry_type: str,
    total_amount: float,
    jurisdictions: Optional[List[str]] = None,
    provider: Optional[str] = None,
) -> bool:
    """Publish tax.liability_recorded / tax.collected_recorded event"""
    if not event_bus:
        logger.debug(f"Event bus not available, skipping {event_type.value} event")
        return False

    try:
        event_data = TaxLedgerRecordedEvent(
            company_id=company_id,
            invoice_id=invoice_id,
            entry_type=entry_type,
            total_amount=total_amount,
            jurisdictions=jurisdictions or [],
            provider=provider,
        )

        event = Event(
            event_type=event_type,
            source=ServiceSource.TAX_SERVICE,
            data=event_data.model_dump(mode='json')
        )

        await event_bus.publish_event(event)
        logger.info(f"Published {event_type.value} event for invoice {invoice_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish {event_type.value} event: {e}")
        return False
