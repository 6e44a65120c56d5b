#!/usr/bin/env python3
"""Logging configuration"""
import os
from dataclasses import dataclass


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: str = ""
    enable_console: bool = True

    # httpx logs every provider request at INFO
    http_client_log_level: str = "WARNING"

    # Service identity for logging
    service_name: str = "tax_service"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
            http_client_log_level=os.getenv("HTTPX_LOG_LEVEL", "WARNING"),
            service_name=os.getenv("SERVICE_NAME", "tax_service"),
            environment=env,
        )
