"""
Notification Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_notification_service
    service = create_notification_service()
"""
from typing import Optional

from core.config import NotificationConfig, get_settings
from core.logger import setup_service_logger
from .notification_service import NotificationService
from .protocols import GraphQLExecutorProtocol

SERVICE_LOGGER_NAME = "microservices.notification_service"


def create_notification_service(
    config: Optional[NotificationConfig] = None,
    executor: Optional[GraphQLExecutorProtocol] = None,
) -> NotificationService:
    """
    Create NotificationService with real dependencies.

    This function imports the real GraphQL client (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        config: NotificationConfig, defaults to the global settings
        executor: Pre-built executor, e.g. a shared GraphQLClient

    Returns:
        Configured NotificationService instance
    """
    # Import real client here (not at module level)
    from .clients import GraphQLClient

    config = config or get_settings()
    setup_service_logger(SERVICE_LOGGER_NAME, config=config.logging)

    if executor is None:
        executor = GraphQLClient.from_config(config.graphql)

    return NotificationService(executor=executor, config=config)
