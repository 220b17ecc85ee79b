"""
Notification Template Resolver

Looks up, renders and upserts notification templates through the GraphQL
executor. Nothing is cached: every call goes to the backend.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .filters import Filter
from .models import NotificationTemplate, NotificationTemplateRecord
from .operations import GET_TEMPLATES_BY_IDS, UPSERT_TEMPLATES
from .protocols import (
    GraphQLExecutorProtocol,
    TemplateDecodeError,
    TemplateNotFoundError,
)
from .template_renderer import render_template
from .unique_keys import UniqueKeySet

logger = logging.getLogger(__name__)


def parse_template_records(records: Iterable[Dict[str, Any]], operation: str) -> List[NotificationTemplate]:
    """Decode raw template rows; one bad row fails the whole batch"""
    templates = []
    for raw in records:
        try:
            templates.append(NotificationTemplateRecord.model_validate(raw).to_template())
        except ValidationError as e:
            template_id = raw.get("id") if isinstance(raw, dict) else None
            logger.error(f"Failed to decode notification template {template_id}: {e}")
            raise TemplateDecodeError(
                f"invalid notification template record {template_id}: {e}",
                operation=operation,
                template_id=template_id,
            ) from e
    return templates


class TemplateResolver:
    """Fetches, renders and saves notification templates"""

    def __init__(self, executor: GraphQLExecutorProtocol):
        self.executor = executor

    async def fetch_by_ids(self, ids: Iterable[str]) -> Dict[str, NotificationTemplate]:
        """
        Fetch templates by id in one query.

        Ids absent from the backend are absent from the result; use
        `require` when a missing id is an error.
        """
        keys = ids if isinstance(ids, UniqueKeySet) else UniqueKeySet(ids)
        if keys.is_empty():
            return {}

        where = Filter().is_in("id", sorted(keys)).to_where()
        data = await self.executor.execute(GET_TEMPLATES_BY_IDS, {"where": where})

        templates = parse_template_records(
            data.get("notification_template") or [],
            operation=GET_TEMPLATES_BY_IDS.name,
        )
        logger.debug(f"Fetched {len(templates)} of {len(keys)} templates: {keys.display()}")
        return {template.id: template for template in templates}

    @staticmethod
    def require(
        templates: Dict[str, NotificationTemplate],
        template_id: str,
    ) -> NotificationTemplate:
        """Pick one template out of a fetch result"""
        template = templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id, operation=GET_TEMPLATES_BY_IDS.name)
        return template

    def render(
        self,
        template: NotificationTemplate,
        variables: Optional[Any] = None,
    ) -> NotificationTemplate:
        """Render headings and contents against variables"""
        return render_template(template, variables)

    async def upsert(self, templates: List[NotificationTemplate]) -> List[NotificationTemplate]:
        """
        Insert templates or update headings/contents of existing ones.

        Metadata of an existing template is never rewritten.
        """
        if not templates:
            return []

        objects = [template.model_dump(mode="json", exclude_none=True) for template in templates]
        data = await self.executor.execute(UPSERT_TEMPLATES, {"objects": objects})

        returning = (data.get("insert_notification_template") or {}).get("returning") or []
        saved = parse_template_records(returning, operation=UPSERT_TEMPLATES.name)
        logger.info(f"Upserted {len(saved)} notification templates")
        return saved


__all__ = ["TemplateResolver", "parse_template_records"]
