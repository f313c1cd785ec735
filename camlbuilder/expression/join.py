"""Logical joins and folding of N conditions into binary joins.

CAML's ``<And>`` and ``<Or>`` take exactly two children. Callers usually
hold an arbitrary number of conditions, so ``fold`` nests them pairwise
while keeping their left-to-right order:

    fold(And, [a])          -> a
    fold(And, [a, b])       -> And(a, b)
    fold(And, [a, b, c])    -> And(And(a, b), c)

Example:
    >>> expr = and_(
    ...     Operator.equal("Status", ValueType.CHOICE, "Open"),
    ...     Operator.is_not_null("Owner"),
    ...     Operator.greater_than("Modified", Value.today(offset_days=-7)),
    ... )
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Annotated, Iterable, Literal, Union

from pydantic import Field, TypeAdapter

from camlbuilder.base import NodeBaseModel
from camlbuilder.config import RenderConfig
from camlbuilder.expression.operator import Operator
from camlbuilder.onto import FoldStrategy, LogicalJoinType

logger = logging.getLogger(__name__)


class LogicalJoin(NodeBaseModel):
    """Binary ``<And>`` / ``<Or>`` node.

    Attributes:
        kind: Node discriminator, always "join"
        join_type: Connective applied to the two children
        left: First operand, rendered first
        right: Second operand
    """

    kind: Literal["join"] = "join"
    join_type: LogicalJoinType
    left: Expression
    right: Expression

    @property
    def tag(self) -> str:
        return self.join_type.value

    def operands(self) -> list[Operator]:
        """Leaf operators in left-to-right order."""
        leaves: list[Operator] = []
        for child in (self.left, self.right):
            if isinstance(child, LogicalJoin):
                leaves.extend(child.operands())
            else:
                leaves.append(child)
        return leaves

    def depth(self) -> int:
        return 1 + max(
            child.depth() if isinstance(child, LogicalJoin) else 0
            for child in (self.left, self.right)
        )

    def render(self, config: RenderConfig | None = None) -> str:
        from camlbuilder.expression.render import render

        return render(self, config)


Expression = Annotated[Union[Operator, LogicalJoin], Field(discriminator="kind")]

LogicalJoin.model_rebuild()

expression_adapter: TypeAdapter[Operator | LogicalJoin] = TypeAdapter(Expression)


def _join(join_type: LogicalJoinType, left, right) -> LogicalJoin:
    return LogicalJoin(join_type=join_type, left=left, right=right)


def _fold_balanced(join_type: LogicalJoinType, items: list) -> Operator | LogicalJoin:
    if len(items) == 1:
        return items[0]
    middle = len(items) // 2
    return _join(
        join_type,
        _fold_balanced(join_type, items[:middle]),
        _fold_balanced(join_type, items[middle:]),
    )


def fold(
    join_type: LogicalJoinType | str,
    expressions: Iterable[Operator | LogicalJoin],
    strategy: FoldStrategy | str = FoldStrategy.LEFT,
) -> Operator | LogicalJoin:
    """Combine expressions into a single strict binary tree.

    A single expression is returned as is, without a join around it. Two
    expressions become one join. Longer sequences are folded according to
    ``strategy``; every strategy keeps the operands in their original
    left-to-right order and yields the same tree for the same input.

    Args:
        join_type: ``And`` or ``Or``
        expressions: Operators or joins, at least one
        strategy: ``left`` (default) or ``balanced``

    Returns:
        The root expression

    Raises:
        ValueError: Unknown join type or strategy, or no expressions
        TypeError: An item is not an Operator or LogicalJoin
    """
    join_type = LogicalJoinType(join_type)
    strategy = FoldStrategy(strategy)
    items = list(expressions)
    if not items:
        raise ValueError(f"{join_type} requires at least one expression")
    for item in items:
        if not isinstance(item, (Operator, LogicalJoin)):
            raise TypeError(
                f"cannot join {type(item).__name__}, expected Operator or LogicalJoin"
            )
    logger.debug(f"folding {len(items)} expression(s) with {join_type} ({strategy})")
    if strategy == FoldStrategy.BALANCED:
        return _fold_balanced(join_type, items)
    return reduce(lambda left, right: _join(join_type, left, right), items)


def and_(
    *expressions: Operator | LogicalJoin,
    strategy: FoldStrategy | str = FoldStrategy.LEFT,
) -> Operator | LogicalJoin:
    """``fold(And, expressions)``."""
    return fold(LogicalJoinType.AND, expressions, strategy=strategy)


def or_(
    *expressions: Operator | LogicalJoin,
    strategy: FoldStrategy | str = FoldStrategy.LEFT,
) -> Operator | LogicalJoin:
    """``fold(Or, expressions)``."""
    return fold(LogicalJoinType.OR, expressions, strategy=strategy)
