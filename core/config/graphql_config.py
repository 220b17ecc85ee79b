#!/usr/bin/env python3
"""GraphQL backend configuration

Endpoint and credentials of the Hasura-style data service that stores
notifications and notification templates.
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Optional


def _bool(val: str) -> bool:
    return val.lower() == "true"


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class GraphQLConfig:
    """GraphQL data service endpoint"""

    url: str = "http://localhost:8080/v1/graphql"
    admin_secret: Optional[str] = None
    timeout: float = 30.0

    # Retries happen in the transport only, never in the dispatch core
    retry_enabled: bool = False
    max_retries: int = 3

    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> 'GraphQLConfig':
        """Load GraphQL configuration from environment variables"""
        headers = {}
        role = os.getenv("HASURA_GRAPHQL_ROLE")
        if role:
            headers["X-Hasura-Role"] = role

        return cls(
            url=os.getenv("DATA_URL") or os.getenv("GRAPHQL_URL", "http://localhost:8080/v1/graphql"),
            admin_secret=os.getenv("HASURA_GRAPHQL_ADMIN_SECRET"),
            timeout=_float(os.getenv("GRAPHQL_TIMEOUT", "30"), 30.0),
            retry_enabled=_bool(os.getenv("GRAPHQL_RETRY_ENABLED", "false")),
            max_retries=_int(os.getenv("GRAPHQL_MAX_RETRIES", "3"), 3),
            headers=headers,
        )
