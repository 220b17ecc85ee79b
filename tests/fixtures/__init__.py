"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - notification_fixtures.py: Notification and template factories
"""

# Common utilities
from .common import (
    make_notification_id,
    make_subject_id,
    make_user_id,
    make_timestamp,
)

# Notification fixtures
from .notification_fixtures import (
    make_template,
    make_template_record,
    make_notification_request,
)

__all__ = [
    "make_notification_id",
    "make_subject_id",
    "make_user_id",
    "make_timestamp",
    "make_template",
    "make_template_record",
    "make_notification_request",
]
