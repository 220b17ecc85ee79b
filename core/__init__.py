#!/usr/bin/env python3
"""
Core Module for the notification client

Shared configuration and logging used by the notification service package.

COMPONENTS:
    - config/: Dataclass configuration loaded from the environment
    - logger.py: Service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("notification_service")
"""

__version__ = "1.0.0"
