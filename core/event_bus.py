"""
Event envelope for inter-service communication

Services publish events through an injected event bus. Any object exposing
``async publish_event(event)`` satisfies the contract; the service runs
without one and simply skips publishing.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ServiceSource(Enum):
    """Event sources"""

    TAX_SERVICE = "tax_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: Union[Enum, str],
        source: Union[ServiceSource, str],
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value if isinstance(event_type, Enum) else event_type
        self.source = source.value if isinstance(source, Enum) else source
        self.data = data
        self.subject = subject or f"{self.source}.{self.type}"
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"


__all__ = ["Event", "ServiceSource"]
