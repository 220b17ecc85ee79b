#!/usr/bin/env python3
"""
Integration Test Configuration

Runs against a live GraphQL data service. Every test here is skipped unless
DATA_URL points at one (HASURA_GRAPHQL_ADMIN_SECRET is sent when set).
"""

import os
import sys
from typing import AsyncGenerator

import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from core.config import GraphQLConfig, NotificationConfig
from microservices.notification_service.clients import GraphQLClient
from microservices.notification_service.notification_service import NotificationService
from microservices.notification_service.operations import GraphQLOperation, OperationKind


DELETE_TEST_NOTIFICATIONS = GraphQLOperation(
    kind=OperationKind.MUTATION,
    name="DeleteTestNotifications",
    document="""
mutation DeleteTestNotifications($where: notification_bool_exp!) {
  delete_notification(where: $where) {
    affected_rows
  }
}
""",
)


@pytest.fixture(scope="session")
def graphql_config() -> GraphQLConfig:
    return GraphQLConfig.from_env()


@pytest_asyncio.fixture
async def graphql_client(graphql_config) -> AsyncGenerator[GraphQLClient, None]:
    client = GraphQLClient.from_config(graphql_config)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def notification_service(graphql_client, graphql_config) -> AsyncGenerator[NotificationService, None]:
    """Report-mode service; notifications tagged with topic 'test' are deleted afterwards"""
    config = NotificationConfig(graphql=graphql_config)
    service = NotificationService(executor=graphql_client, config=config, dispatch_mode="report")
    yield service

    await graphql_client.execute(
        DELETE_TEST_NOTIFICATIONS,
        {"where": {"topics": {"_contains": ["test"]}}},
    )
