"""
Notification Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .operations import GraphQLOperation


class NotificationServiceError(Exception):
    """Base exception for notification service errors"""

    def __init__(self, message: str, operation: Optional[str] = None, **context: Any):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class NotificationValidationError(NotificationServiceError):
    """Notification data validation error"""
    pass


class NotificationNotFoundError(NotificationServiceError):
    """Notification resource not found"""
    pass


class TemplateNotFoundError(NotificationValidationError, NotificationNotFoundError):
    """Template referenced by a request is missing from the backend"""

    def __init__(self, template_id: str, operation: Optional[str] = None):
        super().__init__(
            f"notification template not found: {template_id}",
            operation=operation,
            template_id=template_id,
        )
        self.template_id = template_id


class TemplateDecodeError(NotificationValidationError):
    """Stored template record could not be decoded"""
    pass


class TemplateRenderError(NotificationServiceError):
    """Template text is malformed or references an unknown variable"""
    pass


class TransportError(NotificationServiceError):
    """GraphQL executor failed (network, HTTP status or GraphQL errors)"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[Any] = None,
    ):
        super().__init__(message, operation=operation, status_code=status_code, errors=errors)
        self.status_code = status_code
        self.errors = errors


class EmptyResultError(NotificationServiceError):
    """Backend accepted a non-empty insert but created no rows"""
    pass


@runtime_checkable
class GraphQLExecutorProtocol(Protocol):
    """
    Interface for the GraphQL execution collaborator.

    Implementations run one named operation and return the response `data`
    object, raising TransportError on any failure.
    """

    async def execute(
        self,
        operation: GraphQLOperation,
        variables: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Execute a query or mutation"""
        ...

    async def close(self) -> None:
        """Close the executor"""
        ...
