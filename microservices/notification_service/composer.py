"""
Notification Composer

Turns caller requests into a store-ready batch:

1. template ids are collected once and fetched in a single query
2. referenced templates are rendered and replace inline headings/contents
3. send_after, visible and client_name are defaulted
4. flat mode only: requests left without content or recipients are dropped

Composition never dispatches anything and never mutates caller requests.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from .models import DispatchMode, NotificationRequest, NotificationTemplate
from .template_resolver import TemplateResolver
from .unique_keys import UniqueKeySet

logger = logging.getLogger(__name__)


_OMIT_WHEN_EMPTY = ("headings", "contents", "topics", "user_ids", "data")


def to_insert_object(request: NotificationRequest, mode: DispatchMode) -> Dict[str, Any]:
    """Serialize a composed request for the batch-insert operation"""
    payload = request.model_dump(mode="json", by_alias=True, exclude_none=True)
    for key in _OMIT_WHEN_EMPTY:
        if not payload.get(key):
            payload.pop(key, None)

    if mode == DispatchMode.FLAT:
        # notification table has no save column; recipients go to the users relation
        payload.pop("save", None)
        if request.user_ids:
            payload["users"] = {"data": [{"user_id": user_id} for user_id in request.user_ids]}

    return payload


class NotificationComposer:
    """Normalizes notification requests before dispatch"""

    def __init__(
        self,
        resolver: TemplateResolver,
        mode: DispatchMode = DispatchMode.REPORT,
        default_visible: bool = True,
        default_client_name: Optional[str] = None,
    ):
        self.resolver = resolver
        self.mode = DispatchMode(mode)
        self.default_visible = default_visible
        self.default_client_name = default_client_name

    async def compose(
        self,
        requests: Sequence[NotificationRequest],
        variables: Optional[Any] = None,
    ) -> List[NotificationRequest]:
        """
        Compose a batch.

        Args:
            requests: Notifications to send
            variables: Variable bag shared by every templated request

        Returns:
            Normalized copies of the requests, in input order

        Raises:
            TemplateNotFoundError: A referenced template does not exist
            TemplateRenderError: A referenced template failed to render
            TemplateDecodeError: A stored template could not be decoded
        """
        template_ids = UniqueKeySet(r.template_id for r in requests if r.template_id)

        rendered: Dict[str, NotificationTemplate] = {}
        if not template_ids.is_empty():
            templates = await self.resolver.fetch_by_ids(template_ids)
            for template_id in template_ids:
                template = self.resolver.require(templates, template_id)
                rendered[template_id] = self.resolver.render(template, variables)

        composed = []
        for request in requests:
            item = request.model_copy(deep=True)

            if item.template_id:
                template = rendered[item.template_id]
                item.headings = dict(template.headings)
                item.contents = dict(template.contents)

            if item.send_after is None:
                item.send_after = datetime.now(timezone.utc)
            elif item.send_after.tzinfo is None:
                item.send_after = item.send_after.replace(tzinfo=timezone.utc)

            if item.visible is None:
                item.visible = self.default_visible

            if not item.client_name and self.default_client_name:
                item.client_name = self.default_client_name

            if self.mode == DispatchMode.FLAT and not item.has_content and not item.user_ids:
                logger.debug(
                    f"Dropping notification without content "
                    f"(subject={item.subject_type}:{item.subject_id}, client={item.client_name})"
                )
                continue

            composed.append(item)

        return composed

    def to_insert_objects(self, requests: Sequence[NotificationRequest]) -> List[Dict[str, Any]]:
        return [to_insert_object(request, self.mode) for request in requests]


__all__ = ["NotificationComposer", "to_insert_object"]
