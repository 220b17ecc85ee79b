#!/usr/bin/env python3
"""Notification client main configuration

Combines all sub-configs.
"""
import os
from dataclasses import dataclass, field

from .dispatch_config import DispatchConfig
from .graphql_config import GraphQLConfig
from .logging_config import LoggingConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class NotificationConfig:
    """Main configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    graphql: GraphQLConfig = field(default_factory=GraphQLConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)

    @classmethod
    def from_env(cls) -> 'NotificationConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            logging=LoggingConfig.from_env(),
            graphql=GraphQLConfig.from_env(),
            dispatch=DispatchConfig.from_env(),
        )
