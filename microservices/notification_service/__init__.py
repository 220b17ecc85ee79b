"""
Notification Service Package

Composes notifications from templates, dispatches them in batches to the
GraphQL data service and cancels pending ones.
"""

from .models import *
from .protocols import (
    NotificationServiceError,
    NotificationValidationError,
    NotificationNotFoundError,
    TemplateNotFoundError,
    TemplateDecodeError,
    TemplateRenderError,
    TransportError,
    EmptyResultError,
    GraphQLExecutorProtocol,
)
from .filters import Filter, FilterPredicate, PredicateOperator, subject_filter
from .helpers import to_client_name
from .unique_keys import UniqueKeySet
from .template_renderer import render_template
from .template_resolver import TemplateResolver
from .composer import NotificationComposer
from .notification_service import NotificationService

__version__ = "1.0.0"
__all__ = [
    "NotificationService",
    "NotificationComposer",
    "TemplateResolver",
    "UniqueKeySet",
    "Filter",
    "FilterPredicate",
    "PredicateOperator",
    "subject_filter",
    "render_template",
    "to_client_name",
    "NotificationServiceError",
    "NotificationValidationError",
    "NotificationNotFoundError",
    "TemplateNotFoundError",
    "TemplateDecodeError",
    "TemplateRenderError",
    "TransportError",
    "EmptyResultError",
    "GraphQLExecutorProtocol",
]
