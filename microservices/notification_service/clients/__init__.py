"""
Clients module for notification_service

HTTP clients for the GraphQL data service
"""

from .graphql_client import GraphQLClient

__all__ = [
    "GraphQLClient",
]
