#!/usr/bin/env python3
"""Tax service main configuration

Combines all sub-configs with the service's own host/port settings.
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .tax_config import TaxConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Main tax service configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Service settings
    service_name: str = "tax_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8253

    # Ledger persistence can be switched off (calculation still works)
    ledger_enabled: bool = True

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    infrastructure: InfraConfig = field(default_factory=InfraConfig)
    tax: TaxConfig = field(default_factory=TaxConfig)

    @property
    def log_level(self) -> str:
        return self.logging.log_level

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            # Environment
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),

            # Service settings
            service_name=os.getenv("SERVICE_NAME", "tax_service"),
            service_host=os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv("PORT", "8253"), 8253),
            ledger_enabled=_bool(os.getenv("TAX_LEDGER_ENABLED", "true")),

            # Load sub-configs
            logging=LoggingConfig.from_env(),
            infrastructure=InfraConfig.from_env(),
            tax=TaxConfig.from_env(),
        )
