"""
Notification filter builder

Builds the flat `where` objects understood by the GraphQL data service.
A Filter is an ordered mapping of field -> condition composed from a closed
set of predicates: equal, not-equal, less-than, greater-than, in-set,
exists and not-exists. Several predicates on one field merge into a single
condition object.

Two leaf shapes are accepted from callers (Filter.from_mapping):

    {"subject_id": {"_eq": "abc"}}    operator-object
    {"subject_id": "abc"}             equality shorthand

and rendered (Filter.to_where) in operator-object form.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .protocols import NotificationValidationError

# jsonb column holding the tag-style key/value data of a notification
TAG_FIELD = "data"


class PredicateOperator(str, Enum):
    """Supported comparison operators"""
    EQUAL = "eq"
    NOT_EQUAL = "neq"
    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    IN = "in"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


_OPERATOR_KEYS = {
    PredicateOperator.EQUAL: "_eq",
    PredicateOperator.NOT_EQUAL: "_neq",
    PredicateOperator.LESS_THAN: "_lt",
    PredicateOperator.GREATER_THAN: "_gt",
    PredicateOperator.IN: "_in",
}

_KEY_OPERATORS = {key: op for op, key in _OPERATOR_KEYS.items()}

_TAG_OPERATORS = (
    PredicateOperator.EQUAL,
    PredicateOperator.NOT_EQUAL,
    PredicateOperator.EXISTS,
    PredicateOperator.NOT_EXISTS,
)


def _to_operand(value: Any) -> Any:
    """Make an operand JSON-safe"""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(_to_operand(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_to_operand(v) for v in value]
    return value


@dataclass(frozen=True)
class FilterPredicate:
    """
    One leaf condition.

    `value` is ignored for existence operators. When `tag` is set the
    predicate tests that key of the tag column instead of `field`.
    """
    field: str
    operator: PredicateOperator
    value: Any = None
    tag: Optional[str] = None

    def __post_init__(self):
        if self.tag is not None and self.operator not in _TAG_OPERATORS:
            raise NotificationValidationError(
                f"operator {self.operator.value} is not supported on tag {self.tag}",
                operation="filter",
            )

    def condition(self) -> Dict[str, Any]:
        """Operator-object for this predicate on its own field"""
        if self.operator == PredicateOperator.EXISTS:
            return {"_is_null": False}
        if self.operator == PredicateOperator.NOT_EXISTS:
            return {"_is_null": True}
        return {_OPERATOR_KEYS[self.operator]: _to_operand(self.value)}

    def tag_clause(self) -> Dict[str, Any]:
        """Positive jsonb clause for a tag predicate; negation is applied by Filter"""
        if self.operator in (PredicateOperator.EXISTS, PredicateOperator.NOT_EXISTS):
            return {self.field: {"_has_key": self.tag}}
        return {self.field: {"_contains": {self.tag: _to_operand(self.value)}}}

    @property
    def negated(self) -> bool:
        return self.operator in (PredicateOperator.NOT_EQUAL, PredicateOperator.NOT_EXISTS)


# ====================
# Predicate constructors
# ====================

def equal(field: str, value: Any) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.EQUAL, value)


def not_equal(field: str, value: Any) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.NOT_EQUAL, value)


def less_than(field: str, value: Any) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.LESS_THAN, value)


def greater_than(field: str, value: Any) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.GREATER_THAN, value)


def is_in(field: str, values: Any) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.IN, values)


def exists(field: str) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.EXISTS)


def not_exists(field: str) -> FilterPredicate:
    return FilterPredicate(field, PredicateOperator.NOT_EXISTS)


def tag_equal(key: str, value: Any) -> FilterPredicate:
    return FilterPredicate(TAG_FIELD, PredicateOperator.EQUAL, value, tag=key)


def tag_not_equal(key: str, value: Any) -> FilterPredicate:
    return FilterPredicate(TAG_FIELD, PredicateOperator.NOT_EQUAL, value, tag=key)


def tag_exists(key: str) -> FilterPredicate:
    return FilterPredicate(TAG_FIELD, PredicateOperator.EXISTS, tag=key)


def tag_not_exists(key: str) -> FilterPredicate:
    return FilterPredicate(TAG_FIELD, PredicateOperator.NOT_EXISTS, tag=key)


# ====================
# Filter
# ====================

class Filter:
    """Ordered field -> condition mapping built from predicates"""

    def __init__(self, *predicates: FilterPredicate):
        self._fields: Dict[str, Dict[PredicateOperator, FilterPredicate]] = {}
        self._tags: List[FilterPredicate] = []
        self.add(*predicates)

    def add(self, *predicates: FilterPredicate) -> "Filter":
        """Add predicates; a repeated field/operator pair replaces the earlier one"""
        for predicate in predicates:
            if predicate.tag is not None:
                self._tags.append(predicate)
            else:
                self._fields.setdefault(predicate.field, {})[predicate.operator] = predicate
        return self

    def equal(self, field: str, value: Any) -> "Filter":
        return self.add(equal(field, value))

    def not_equal(self, field: str, value: Any) -> "Filter":
        return self.add(not_equal(field, value))

    def less_than(self, field: str, value: Any) -> "Filter":
        return self.add(less_than(field, value))

    def greater_than(self, field: str, value: Any) -> "Filter":
        return self.add(greater_than(field, value))

    def is_in(self, field: str, values: Any) -> "Filter":
        return self.add(is_in(field, values))

    def exists(self, field: str) -> "Filter":
        return self.add(exists(field))

    def not_exists(self, field: str) -> "Filter":
        return self.add(not_exists(field))

    @property
    def predicates(self) -> List[FilterPredicate]:
        result = [p for ops in self._fields.values() for p in ops.values()]
        return result + list(self._tags)

    def fields(self) -> List[str]:
        return list(self._fields)

    def get(self, field: str, operator: PredicateOperator) -> Optional[FilterPredicate]:
        return self._fields.get(field, {}).get(operator)

    def copy(self) -> "Filter":
        return Filter(*self.predicates)

    def to_where(self) -> Dict[str, Any]:
        """Render the operator-object `where` mapping"""
        where: Dict[str, Any] = {}
        for field, operators in self._fields.items():
            condition: Dict[str, Any] = {}
            for predicate in operators.values():
                condition.update(predicate.condition())
            where[field] = condition

        positive = [p for p in self._tags if not p.negated]
        negative = [p.tag_clause() for p in self._tags if p.negated]

        for field in dict.fromkeys(p.field for p in positive):
            contains = {p.tag: _to_operand(p.value) for p in positive
                        if p.field == field and p.operator == PredicateOperator.EQUAL}
            has_keys = [p.tag for p in positive
                        if p.field == field and p.operator == PredicateOperator.EXISTS]
            condition = where.setdefault(field, {})
            if contains:
                condition["_contains"] = contains
            if len(has_keys) == 1:
                condition["_has_key"] = has_keys[0]
            elif has_keys:
                condition["_has_keys_all"] = has_keys

        if len(negative) == 1:
            where["_not"] = negative[0]
        elif negative:
            # NOT a AND NOT b == NOT (a OR b)
            where["_not"] = {"_or": negative}

        return where

    @classmethod
    def from_mapping(cls, where: Mapping) -> "Filter":
        """
        Parse a caller-supplied `where` mapping.

        Raises:
            NotificationValidationError: Unsupported operator or combinator
        """
        result = cls()
        for field, condition in where.items():
            if field.startswith("_"):
                raise NotificationValidationError(
                    f"logical operator {field} is not supported in a flat filter",
                    operation="filter",
                )
            if isinstance(condition, Mapping) and condition and all(
                isinstance(k, str) and k.startswith("_") for k in condition
            ):
                for key, operand in condition.items():
                    result.add(_parse_operator(field, key, operand))
            else:
                result.add(equal(field, condition))
        return result

    def __len__(self) -> int:
        return len(self._fields) + len(self._tags)

    def __repr__(self) -> str:
        return f"Filter({self.to_where()!r})"


def _parse_operator(field: str, key: str, operand: Any) -> FilterPredicate:
    if key == "_is_null":
        return not_exists(field) if operand else exists(field)
    operator = _KEY_OPERATORS.get(key)
    if operator is None:
        raise NotificationValidationError(
            f"unsupported operator {key} on field {field}",
            operation="filter",
            field=field,
        )
    return FilterPredicate(field, operator, operand)


def subject_filter(
    subject_type: Optional[str],
    subject_id: str,
    now: Optional[datetime] = None,
) -> Filter:
    """
    Match not-yet-sent notifications of a subject.

    The subject_type clause is only added when subject_type is non-empty.
    send_after > now is always present so dispatched rows never match.
    """
    result = Filter().equal("subject_id", subject_id)
    if subject_type:
        result.equal("subject_type", subject_type)
    return result.greater_than("send_after", now or datetime.now(timezone.utc))


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise NotificationValidationError(
                f"invalid send_after bound: {value}", operation="filter"
            ) from e
    if not isinstance(value, datetime):
        raise NotificationValidationError(f"invalid send_after bound: {value!r}", operation="filter")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def ensure_pending(where: Filter, now: Optional[datetime] = None) -> Filter:
    """
    Restrict a filter to notifications whose send_after is still ahead.

    A caller-supplied send_after lower bound is kept only when it is later
    than now.
    """
    now = now or datetime.now(timezone.utc)
    bound = where.get("send_after", PredicateOperator.GREATER_THAN)
    if bound is None or _as_datetime(bound.value) < now:
        where.greater_than("send_after", now)
    return where


__all__ = [
    "TAG_FIELD",
    "PredicateOperator",
    "FilterPredicate",
    "Filter",
    "equal",
    "not_equal",
    "less_than",
    "greater_than",
    "is_in",
    "exists",
    "not_exists",
    "tag_equal",
    "tag_not_equal",
    "tag_exists",
    "tag_not_exists",
    "subject_filter",
    "ensure_pending",
]
