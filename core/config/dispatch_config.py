#!/usr/bin/env python3
"""Notification dispatch configuration

Selects which batch-insert contract the backend speaks and the defaults the
composer applies to outgoing notifications.
"""
import os
from dataclasses import dataclass


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class DispatchConfig:
    """Dispatch settings"""

    # "report": SendNotifications action with a per-item report
    # "flat":   insert_notification returning created ids
    dispatch_mode: str = "report"
    default_visible: bool = True
    client_name: str = "default"

    @classmethod
    def from_env(cls) -> 'DispatchConfig':
        """Load dispatch configuration from environment variables"""
        return cls(
            dispatch_mode=os.getenv("NOTIFICATION_DISPATCH_MODE", "report").lower(),
            default_visible=_bool(os.getenv("NOTIFICATION_DEFAULT_VISIBLE", "true")),
            client_name=os.getenv("NOTIFICATION_CLIENT_NAME", "default"),
        )
