"""
Notification Service Data Models

Notification requests, templates and dispatch results exchanged with the
GraphQL data service.
"""

import json
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ====================
# Enums
# ====================

class DispatchMode(str, Enum):
    """Batch-insert contract spoken by the backend"""
    FLAT = "flat"        # insert_notification, returns created ids
    REPORT = "report"    # send_notifications action, returns a per-item report


# ====================
# Core data models
# ====================

class NotificationMetadata(BaseModel):
    """Platform-specific decorations attached to a notification"""
    case_id: Optional[str] = None
    session_id: Optional[str] = None
    color: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    subtitles: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("subtitles", mode="before")
    @classmethod
    def null_subtitles(cls, value: Any) -> Any:
        # rows written by older clients store "subtitles": null
        return {} if value is None else value


class NotificationRequest(BaseModel):
    """One notification to send"""
    model_config = ConfigDict(populate_by_name=True)

    # Routing
    app_id: Optional[str] = Field(None, serialization_alias="api_id", description="Application ID (stored as api_id)")
    client_name: Optional[str] = Field(None, description="Routing label, see to_client_name")

    # Content
    template_id: Optional[str] = Field(None, description="Template to render into headings/contents")
    headings: Dict[str, str] = Field(default_factory=dict, description="Locale -> heading")
    contents: Dict[str, str] = Field(default_factory=dict, description="Locale -> body")

    # Targeting
    broadcast: bool = False
    topics: List[str] = Field(default_factory=list)
    user_ids: List[str] = Field(default_factory=list)

    # Correlation for cancellation
    subject_type: Optional[str] = None
    subject_id: Optional[str] = None

    # Scheduling and flags, defaulted by the composer
    send_after: Optional[datetime] = None
    visible: Optional[bool] = None
    save: bool = False

    data: Dict[str, str] = Field(default_factory=dict)
    metadata: Optional[NotificationMetadata] = None

    @property
    def has_content(self) -> bool:
        return bool(self.headings) or bool(self.contents)


class NotificationTemplate(BaseModel):
    """Reusable per-locale message body"""
    id: str = Field(..., description="Template ID")
    headings: Dict[str, str] = Field(default_factory=dict)
    contents: Dict[str, str] = Field(default_factory=dict)
    metadata: NotificationMetadata = Field(default_factory=NotificationMetadata)


def _decode_json(value: Any) -> Any:
    """Stored JSON columns may arrive encoded as strings"""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        if not value.strip():
            return None
        return json.loads(value)
    return value


class NotificationTemplateRecord(BaseModel):
    """Raw notification_template row as returned by the backend"""
    id: str
    headings: Optional[Dict[str, str]] = None
    contents: Optional[Dict[str, str]] = None
    metadata: Optional[NotificationMetadata] = None

    @field_validator("headings", "contents", "metadata", mode="before")
    @classmethod
    def decode_json_columns(cls, value: Any) -> Any:
        return _decode_json(value)

    def to_template(self) -> NotificationTemplate:
        return NotificationTemplate(
            id=self.id,
            headings=self.headings or {},
            contents=self.contents or {},
            metadata=self.metadata or NotificationMetadata(),
        )


# ====================
# Dispatch results
# ====================

class FlatDispatchResult(BaseModel):
    """Identifiers of the created notification rows"""
    mode: Literal["flat"] = "flat"
    ids: List[str] = Field(default_factory=list)


class DispatchItemResult(BaseModel):
    """Backend outcome for one submitted notification"""
    success: bool = False
    is_rate_limit: bool = False
    client_name: Optional[str] = None
    request_id: Optional[str] = None
    message_id: Optional[str] = None
    error: Optional[Any] = None

    @field_validator("request_id", "message_id", mode="before")
    @classmethod
    def stringify_ids(cls, value: Any) -> Any:
        return None if value is None else str(value)


class DispatchReport(BaseModel):
    """Per-item report of a batch submission"""
    mode: Literal["report"] = "report"
    responses: List[DispatchItemResult] = Field(default_factory=list)
    success_count: int = 0
    failure_count: int = 0

    @model_validator(mode="before")
    @classmethod
    def fill_missing_counts(cls, data: Any) -> Any:
        """Null counts are derived from the per-item responses"""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        responses = data.get("responses") or []
        succeeded = len([
            r for r in responses
            if (r.get("success") if isinstance(r, dict) else getattr(r, "success", False))
        ])
        data["responses"] = responses
        if data.get("success_count") is None:
            data["success_count"] = succeeded
        if data.get("failure_count") is None:
            data["failure_count"] = len(responses) - succeeded
        return data

    @property
    def failed(self) -> List[DispatchItemResult]:
        return [r for r in self.responses if not r.success]


DispatchResult = Annotated[
    Union[FlatDispatchResult, DispatchReport],
    Field(discriminator="mode"),
]
