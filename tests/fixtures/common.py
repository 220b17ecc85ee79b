"""
Common/Shared Fixtures

Base factories and generators used across multiple test layers.
"""
import uuid
from datetime import datetime, timezone


def make_user_id() -> str:
    """Generate a unique user ID"""
    return f"usr_test_{uuid.uuid4().hex[:12]}"


def make_notification_id() -> str:
    """Generate a unique notification ID"""
    return str(uuid.uuid4())


def make_subject_id() -> str:
    """Generate a unique subject ID"""
    return f"subj_test_{uuid.uuid4().hex[:12]}"


def make_timestamp() -> str:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc).isoformat()
