"""
Notification Fixtures

Factories for notification requests, templates and raw template rows.
"""
import json
from typing import Any, Dict, Optional

from microservices.notification_service.models import (
    NotificationMetadata,
    NotificationRequest,
    NotificationTemplate,
)


def make_template(
    template_id: str = "welcome",
    headings: Optional[Dict[str, str]] = None,
    contents: Optional[Dict[str, str]] = None,
    **overrides: Any,
) -> NotificationTemplate:
    """Create a NotificationTemplate with English and Vietnamese text"""
    return NotificationTemplate(
        id=template_id,
        headings=headings if headings is not None else {"en": "Hi {{.Name}}", "vi": "Chào {{.Name}}"},
        contents=contents if contents is not None else {"en": "Welcome {{.Name}}", "vi": "Xin chào {{.Name}}"},
        **overrides,
    )


def make_template_record(template: NotificationTemplate, encode_json: bool = False) -> Dict[str, Any]:
    """Raw notification_template row as the backend returns it"""
    row = template.model_dump(mode="json")
    if encode_json:
        for key in ("headings", "contents", "metadata"):
            row[key] = json.dumps(row[key])
    return row


def make_notification_request(**overrides: Any) -> NotificationRequest:
    """Create a NotificationRequest with inline content"""
    data = {
        "client_name": "default",
        "headings": {"en": "Test headings", "vi": "Test headings"},
        "contents": {"en": "Test contents", "vi": "Test contents"},
        "topics": ["test"],
        "metadata": NotificationMetadata(
            image_url="https://en.wikipedia.org/static/images/project-logos/enwiki.png"
        ),
    }
    data.update(overrides)
    return NotificationRequest(**data)
