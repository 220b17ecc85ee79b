#!/usr/bin/env python3
"""
Service logger setup

Configures a named logger from LoggingConfig so that every module logging
through logging.getLogger(__name__) below it shares handlers and level.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("notification_service")
"""
import logging
import sys
from typing import Optional

from .config.logging_config import LoggingConfig


def setup_service_logger(
    name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service.

    Args:
        name: Logger name, usually the service package name
        level: Overrides config.log_level when given
        config: LoggingConfig, loaded from the environment when omitted

    Returns:
        The configured logger
    """
    config = config or LoggingConfig.from_env()
    logger = logging.getLogger(name)
    logger.setLevel((level or config.log_level).upper())

    # Re-running setup must not stack handlers
    if getattr(logger, "_service_handlers_installed", False):
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    logger._service_handlers_installed = True
    return logger


__all__ = ["setup_service_logger"]
