#!/usr/bin/env python3
"""Modular configuration system for the notification client

Configuration hierarchy:
- graphql_config: GraphQL data service endpoint and credentials
- dispatch_config: Dispatch contract and composition defaults
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .graphql_config import GraphQLConfig
from .dispatch_config import DispatchConfig
from .notification_config import NotificationConfig

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
settings = NotificationConfig.from_env()

def get_settings() -> NotificationConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> NotificationConfig:
    """Reload settings from environment"""
    global settings
    settings = NotificationConfig.from_env()
    return settings

__all__ = [
    # Main config
    'NotificationConfig',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'GraphQLConfig',
    'DispatchConfig',
]
