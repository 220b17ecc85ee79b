"""
Notification template rendering

Headings and contents are micro-templates with `{{.Field}}` placeholders.
A placeholder names a dotted path resolved against the variable bag: a
mapping, a pydantic model, a dataclass or any object with attributes.
`{{.}}` renders the bag itself.

Rendering is strict: malformed text or a path that does not resolve raises
TemplateRenderError and nothing is returned.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from .models import NotificationTemplate
from .protocols import TemplateRenderError

logger = logging.getLogger(__name__)


_ACTION_PATTERN = re.compile(r"\{\{(-?)(.*?)(-?)\}\}", re.DOTALL)
_FIELD_PATH_PATTERN = re.compile(r"^\.(?:[A-Za-z][A-Za-z0-9_]*(?:\.[A-Za-z][A-Za-z0-9_]*)*)?$")

_MISSING = object()

# Parsed template: literal text and field paths, in order
_Node = Union[str, Tuple[str, ...]]


def _parse(text: str, name: str) -> List[_Node]:
    nodes: List[_Node] = []
    position = 0

    for match in _ACTION_PATTERN.finditer(text):
        literal = text[position:match.start()]
        trim_left, action, trim_right = match.groups()
        if trim_left:
            literal = literal.rstrip()
        if "{{" in literal:
            raise TemplateRenderError(f"{name}: unclosed action", operation="render")
        if literal:
            nodes.append(literal)

        action = action.strip()
        if not _FIELD_PATH_PATTERN.match(action):
            raise TemplateRenderError(
                f"{name}: unsupported action {{{{{action}}}}}",
                operation="render",
                action=action,
            )
        nodes.append(tuple(part for part in action.split(".") if part))

        position = match.end()
        if trim_right:
            while position < len(text) and text[position].isspace():
                position += 1

    tail = text[position:]
    if "{{" in tail:
        raise TemplateRenderError(f"{name}: unclosed action", operation="render")
    if tail:
        nodes.append(tail)
    return nodes


def resolve_field(variables: Any, path: Tuple[str, ...]) -> Any:
    """Walk a dotted field path through mappings and attributes"""
    value = variables
    for part in path:
        if value is None:
            return _MISSING
        if isinstance(value, Mapping):
            value = value.get(part, _MISSING)
        else:
            value = getattr(value, part, _MISSING)
        if value is _MISSING:
            return _MISSING
    return value


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_text(text: str, variables: Any = None, name: str = "template") -> str:
    """Render one template string"""
    output = []
    for node in _parse(text, name):
        if isinstance(node, str):
            output.append(node)
            continue

        if not node and variables is None:
            raise TemplateRenderError(f"{name}: no variables bound for {{{{.}}}}", operation="render")

        value = resolve_field(variables, node)
        if value is _MISSING:
            field_path = "." + ".".join(node)
            raise TemplateRenderError(
                f"{name}: can't evaluate field {field_path}",
                operation="render",
                field=field_path,
            )
        output.append(_format(value))
    return "".join(output)


def _render_section(
    template_id: str,
    section: str,
    values: Dict[str, str],
    variables: Any,
) -> Dict[str, str]:
    return {
        locale: render_text(text, variables, name=f"{template_id}:{section}:{locale}")
        for locale, text in values.items()
    }


def render_template(
    template: NotificationTemplate,
    variables: Optional[Any] = None,
) -> NotificationTemplate:
    """
    Render every heading and content locale of a template.

    Args:
        template: Stored template, left untouched
        variables: Variable bag bound to `{{.Field}}` placeholders

    Returns:
        New template carrying id, rendered headings and rendered contents.
        Metadata is not rendered and not carried over.

    Raises:
        TemplateRenderError: Malformed text or unresolved field
    """
    try:
        headings = _render_section(template.id, "heading", template.headings, variables)
        contents = _render_section(template.id, "content", template.contents, variables)
    except TemplateRenderError as e:
        e.context.setdefault("template_id", template.id)
        logger.error(f"Failed to render template {template.id}: {e.message}")
        raise

    return NotificationTemplate(id=template.id, headings=headings, contents=contents)


__all__ = ["render_template", "render_text", "resolve_field"]
