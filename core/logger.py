"""
Service logger setup

Configures a named logger from LoggingConfig: console output always, plus a
file handler when LOG_FILE is set.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("tax_service", level="INFO")
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service.

    Args:
        service_name: Logger name (also used as the root of module loggers)
        level: Log level override, defaults to LoggingConfig.log_level
        config: Logging config, loaded from environment if not given

    Returns:
        Configured logger
    """
    config = config or LoggingConfig.from_env()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format)

    logging.getLogger("httpx").setLevel(
        getattr(logging, config.http_client_log_level.upper(), logging.WARNING)
    )

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)

    # Re-running setup (e.g. app reload) must not duplicate handlers
    if logger.handlers:
        return logger

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Module loggers (microservices.tax_service.*) share the same handlers
    package_logger = logging.getLogger(f"microservices.{service_name}")
    package_logger.setLevel(log_level)
    for handler in logger.handlers:
        package_logger.addHandler(handler)

    return logger


__all__ = ["setup_service_logger"]
