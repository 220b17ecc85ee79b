"""
Notification Service Business Logic Layer

Composes notification batches, submits them in a single batch-insert
operation and cancels pending notifications in bulk.

Uses dependency injection for testability:
- The GraphQL executor is injected, not created at import time
- Settings are read from core.config only when not provided
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from .composer import NotificationComposer
from .filters import Filter, ensure_pending, subject_filter
from .models import (
    DispatchMode,
    DispatchReport,
    DispatchResult,
    FlatDispatchResult,
    NotificationRequest,
    NotificationTemplate,
)
from .operations import CANCEL_NOTIFICATIONS, CREATE_NOTIFICATIONS, SEND_NOTIFICATIONS
from .protocols import (
    EmptyResultError,
    GraphQLExecutorProtocol,
    NotificationServiceError,
    NotificationValidationError,
    TransportError,
)
from .template_resolver import TemplateResolver

# Type checking imports (not executed at runtime)
if TYPE_CHECKING:
    from core.config import NotificationConfig


logger = logging.getLogger(__name__)


class NotificationService:
    """Notification dispatch and cancellation"""

    def __init__(
        self,
        executor: Optional[GraphQLExecutorProtocol] = None,
        config: Optional["NotificationConfig"] = None,
        dispatch_mode: Optional[Union[DispatchMode, str]] = None,
        default_visible: Optional[bool] = None,
    ):
        """
        Initialize notification service.

        Args:
            executor: GraphQL executor (for DI/testing); built from config if omitted
            config: NotificationConfig, defaults to core.config settings
            dispatch_mode: Overrides config.dispatch.dispatch_mode
            default_visible: Overrides config.dispatch.default_visible
        """
        if config is None:
            from core.config import get_settings
            config = get_settings()
        self.config = config

        # Support dependency injection - lazy import the real client only if not provided
        if executor is not None:
            self.executor = executor
        else:
            from .clients import GraphQLClient
            self.executor = GraphQLClient.from_config(config.graphql)

        self.mode = DispatchMode(dispatch_mode or config.dispatch.dispatch_mode)
        if default_visible is None:
            default_visible = config.dispatch.default_visible

        self.templates = TemplateResolver(self.executor)
        self.composer = NotificationComposer(
            self.templates,
            mode=self.mode,
            default_visible=default_visible,
            default_client_name=config.dispatch.client_name,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ====================
    # Templates
    # ====================

    async def get_templates(self, *template_ids: str) -> Dict[str, NotificationTemplate]:
        """Fetch templates by id; unknown ids are absent from the result"""
        return await self.templates.fetch_by_ids(template_ids)

    async def upsert_templates(self, templates: List[NotificationTemplate]) -> List[NotificationTemplate]:
        """Create templates or update headings/contents of existing ones"""
        return await self.templates.upsert(templates)

    # ====================
    # Dispatch
    # ====================

    def _empty_result(self) -> DispatchResult:
        if self.mode == DispatchMode.FLAT:
            return FlatDispatchResult()
        return DispatchReport()

    async def send(
        self,
        requests: Sequence[NotificationRequest],
        variables: Optional[Any] = None,
    ) -> DispatchResult:
        """
        Compose and submit notifications as one batch.

        Args:
            requests: Notifications to send
            variables: Variable bag for templated requests

        Returns:
            FlatDispatchResult in flat mode, DispatchReport in report mode.
            Items the backend rejected or rate-limited stay in the report.

        Raises:
            TemplateNotFoundError, TemplateRenderError, TemplateDecodeError:
                composition failed, nothing was submitted
            TransportError: executor failure
            EmptyResultError: flat mode, backend created no rows
        """
        if not requests:
            return self._empty_result()

        try:
            batch = await self.composer.compose(requests, variables)
            if not batch:
                logger.debug(f"All {len(requests)} notifications dropped during composition")
                return self._empty_result()

            objects = self.composer.to_insert_objects(batch)
            if self.mode == DispatchMode.FLAT:
                return await self._create_notifications(objects)
            return await self._send_notifications(objects)

        except NotificationServiceError as e:
            logger.error(f"Failed to send {len(requests)} notifications: {e}")
            raise

    async def _create_notifications(self, objects: List[Dict[str, Any]]) -> FlatDispatchResult:
        data = await self.executor.execute(CREATE_NOTIFICATIONS, {"objects": objects})

        returning = (data.get("insert_notification") or {}).get("returning") or []
        if not returning:
            raise EmptyResultError(
                "insert zero notification",
                operation=CREATE_NOTIFICATIONS.name,
                submitted=len(objects),
            )

        ids = [str(row["id"]) for row in returning]
        logger.info(f"Created {len(ids)} notifications")
        return FlatDispatchResult(ids=ids)

    async def _send_notifications(self, objects: List[Dict[str, Any]]) -> DispatchReport:
        data = await self.executor.execute(SEND_NOTIFICATIONS, {"objects": objects})

        payload = data.get("send_notifications")
        if payload is None:
            raise TransportError(
                "response has no send_notifications field",
                operation=SEND_NOTIFICATIONS.name,
            )
        try:
            report = DispatchReport.model_validate(payload)
        except ValidationError as e:
            raise TransportError(
                f"malformed dispatch report: {e}",
                operation=SEND_NOTIFICATIONS.name,
            ) from e

        logger.info(
            f"Sent {len(objects)} notifications: "
            f"{report.success_count} succeeded, {report.failure_count} failed"
        )
        return report

    # ====================
    # Cancellation
    # ====================

    async def cancel_by_subject(self, subject_type: Optional[str], subject_id: str) -> int:
        """Cancel pending notifications of a subject; subject_type may be empty"""
        if not subject_id:
            raise NotificationValidationError(
                "subject_id is required", operation=CANCEL_NOTIFICATIONS.name
            )
        return await self.cancel(subject_filter(subject_type, subject_id))

    async def cancel(self, predicate: Union[Filter, Mapping]) -> int:
        """
        Close and hide every pending notification matching a predicate.

        The predicate is always narrowed to rows whose send_after is still
        in the future; already dispatched notifications are never touched.

        Returns:
            Number of affected rows reported by the backend
        """
        if isinstance(predicate, Filter):
            where = predicate.copy()
        elif isinstance(predicate, Mapping):
            where = Filter.from_mapping(predicate)
        else:
            raise NotificationValidationError(
                f"unsupported predicate type {type(predicate).__name__}",
                operation=CANCEL_NOTIFICATIONS.name,
            )

        if not len(where):
            raise NotificationValidationError(
                "refusing to cancel with an empty predicate",
                operation=CANCEL_NOTIFICATIONS.name,
            )

        variables = {
            "where": ensure_pending(where).to_where(),
            "setValues": {"closed": True, "visible": False},
        }

        try:
            data = await self.executor.execute(CANCEL_NOTIFICATIONS, variables)
        except NotificationServiceError as e:
            logger.error(f"Failed to cancel notifications {variables['where']}: {e}")
            raise

        affected = int((data.get("update_notification") or {}).get("affected_rows") or 0)
        logger.info(f"Cancelled {affected} notifications")
        return affected

    async def close(self):
        """Release the executor"""
        await self.executor.close()


__all__ = ["NotificationService"]
