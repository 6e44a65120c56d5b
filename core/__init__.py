#!/usr/bin/env python3
"""
Core Module for the Tax Service

Shared infrastructure components.

COMPONENTS:
    - config/: Dataclass configuration loaded from environment (.env files via python-dotenv)
    - logger.py: Service logger setup
    - postgres_client.py: asyncpg pool wrapper used by repositories
    - event_bus.py: Event envelope published through an injected event bus

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    config = get_settings()
    logger = setup_service_logger("tax_service", level=config.log_level)
"""

from .config import ServiceConfig, get_settings
from .event_bus import Event, ServiceSource

__all__ = [
    "ServiceConfig",
    "get_settings",
    "Event",
    "ServiceSource",
]

__version__ = "2.0.0"
