#!/usr/bin/env python3
"""Modular configuration system for the tax service

Configuration hierarchy:
- service_config: Service settings, combines all sub-configs
- infra_config: PostgreSQL connection for the tax ledger
- tax_config: External tax provider credentials and endpoints
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .tax_config import (
    TaxConfig,
    TAXJAR_CONFIDENCE,
    AVALARA_CONFIDENCE,
    FALLBACK_CONFIDENCE,
    DEFAULT_FALLBACK_RATE,
)
from .service_config import ServiceConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = ServiceConfig.from_env()

def get_settings() -> ServiceConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> ServiceConfig:
    """Reload settings from environment"""
    global settings
    settings = ServiceConfig.from_env()
    return settings

__all__ = [
    # Main config
    'ServiceConfig',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'InfraConfig',
    'TaxConfig',
    # Constants
    'TAXJAR_CONFIDENCE',
    'AVALARA_CONFIDENCE',
    'FALLBACK_CONFIDENCE',
    'DEFAULT_FALLBACK_RATE',
]
