"""Build expression trees from plain data (dicts, lists, YAML).

Supported forms:

    # logical join, folded over any number of items
    {"And": [item, item, ...]}

    # comparison
    {"field": "Title", "operator": "Eq", "type": "text", "value": "Report"}
    {"field": "Modified", "operator": "Geq", "sentinel": "today", "offset_days": -7}
    {"field": "Owner", "operator": "IsNull"}

    # list shorthand: [operator, field, type?, value?]
    ["Eq", "Title", "text", "Report"]
    ["Eq", "AssignedTo", "current_user"]

    # model dump of an existing node (carries "kind")
    {"kind": "operator", "operator_type": "Equal", ...}

Example:
    >>> expr = expression_from_dict({
    ...     "Or": [
    ...         ["Eq", "Status", "choice", "Open"],
    ...         {"field": "AssignedTo", "operator": "Eq", "sentinel": "current_user"},
    ...     ]
    ... })
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from camlbuilder.expression.join import LogicalJoin, expression_adapter, fold
from camlbuilder.expression.operator import Operator
from camlbuilder.expression.value import Value
from camlbuilder.onto import FoldStrategy, LogicalJoinType, OperatorType, ValueType

logger = logging.getLogger(__name__)

LEAF_KEYS = frozenset(
    {"field", "operator", "type", "value", "include_time", "sentinel", "offset_days"}
)


def _value_from_leaf(current: dict[str, Any]) -> Value | None:
    sentinel = current.get("sentinel")
    if sentinel is not None:
        sentinel_type = ValueType(sentinel)
        if sentinel_type == ValueType.CURRENT_USER:
            return Value.current_user()
        if sentinel_type == ValueType.NOW:
            return Value.now(include_time=current.get("include_time"))
        if sentinel_type == ValueType.TODAY:
            return Value.today(offset_days=current.get("offset_days"))
        raise ValueError(f"{sentinel!r} is not a sentinel value type")
    if "type" not in current and "value" not in current:
        return None
    if "type" not in current:
        raise ValueError(f"comparison on {current.get('field')!r} is missing 'type'")
    return Value.of(
        current["type"], current.get("value"), include_time=current.get("include_time")
    )


def _leaf_from_dict(current: dict[str, Any]) -> Operator:
    unknown = set(current) - LEAF_KEYS
    if unknown:
        raise ValueError(f"unknown keys in comparison: {sorted(unknown)}")
    if "operator" not in current:
        raise ValueError(f"comparison on {current.get('field')!r} is missing 'operator'")
    return Operator.create(
        OperatorType(current["operator"]),
        current.get("field"),
        _value_from_leaf(current),
    )


def _leaf_from_list(current: list[Any]) -> Operator:
    if not 2 <= len(current) <= 4:
        raise ValueError(f"expected [operator, field, type?, value?], got {current}")
    # [operator, field, sentinel] needs no payload
    return Operator.create(*current)


def expression_from_dict(
    current: dict[str, Any] | list[Any] | Operator | LogicalJoin,
    strategy: FoldStrategy | str = FoldStrategy.LEFT,
) -> Operator | LogicalJoin:
    """Create an expression from a dictionary or list.

    Args:
        current: Data in one of the forms listed in the module docstring
        strategy: Fold strategy for joins with more than two items

    Raises:
        ValueError: Malformed data, unknown operator/join/value type
    """
    if isinstance(current, (Operator, LogicalJoin)):
        return current
    if isinstance(current, list):
        return _leaf_from_list(current)
    if not isinstance(current, dict):
        raise ValueError(f"expected dict or list, got {type(current)}")
    if "kind" in current:
        return expression_adapter.validate_python(current)
    if len(current) == 1:
        key = next(iter(current))
        if key in LogicalJoinType:
            items = current[key]
            if not isinstance(items, list):
                raise ValueError(f"{key} expects a list of expressions, got {items!r}")
            return fold(
                key,
                [expression_from_dict(item, strategy) for item in items],
                strategy=strategy,
            )
    return _leaf_from_dict(current)


def expression_from_yaml(
    path: str, strategy: FoldStrategy | str = FoldStrategy.LEFT
) -> Operator | LogicalJoin:
    """Load an expression from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    logger.debug(f"loaded expression definition from {path}")
    return expression_from_dict(data, strategy)
