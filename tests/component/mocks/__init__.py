"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (database, event bus, HTTP).
"""

from .db_mock import MockAsyncPostgresClient
from .event_bus_mock import MockEventBus
from .http_mock import MockHttpClient, MockHttpResponse

__all__ = [
    'MockAsyncPostgresClient',
    'MockEventBus',
    'MockHttpClient',
    'MockHttpResponse',
]
