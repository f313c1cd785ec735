"""Query envelope: ``<Where>``, ``<GroupBy>`` and ``<OrderBy>`` around an expression.

Example:
    >>> query = Query.from_dict({
    ...     "where": {"And": [["Eq", "Status", "choice", "Open"], ["IsNotNull", "Owner"]]},
    ...     "order_by": [{"name": "Modified", "ascending": False}],
    ... })
    >>> query.render(wrap=True)
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import Field, ValidationInfo, field_validator

from camlbuilder.base import NodeBaseModel
from camlbuilder.config import RenderConfig
from camlbuilder.expression.join import Expression, LogicalJoin, fold
from camlbuilder.expression.loader import expression_from_dict
from camlbuilder.expression.operator import Operator
from camlbuilder.expression.render import CamlRenderer
from camlbuilder.onto import FoldStrategy, LogicalJoinType


def _fold_context(
    context: dict[str, Any] | None, config: RenderConfig | None
) -> dict[str, Any] | None:
    if config is None:
        return context
    return {**(context or {}), "fold_strategy": config.fold_strategy}


class OrderByField(NodeBaseModel):
    """Sort key of a query."""

    name: str = Field(min_length=1)
    ascending: bool = True


class Query(NodeBaseModel):
    """CAML query body.

    Attributes:
        where: Root filter expression, or None for no filter
        group_by: Field names to group on
        collapse: Collapse grouped rows
        order_by: Sort keys, applied in order
    """

    where: Expression | None = None
    group_by: tuple[str, ...] = ()
    collapse: bool = False
    order_by: tuple[OrderByField, ...] = ()

    @field_validator("where", mode="before")
    @classmethod
    def _load_where(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, list) or (isinstance(v, dict) and "kind" not in v):
            strategy = (info.context or {}).get("fold_strategy", FoldStrategy.LEFT)
            return expression_from_dict(v, strategy)
        return v

    @field_validator("order_by", mode="before")
    @classmethod
    def _load_order_by(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(
                OrderByField(name=item) if isinstance(item, str) else item for item in v
            )
        return v

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        context: dict[str, Any] | None = None,
        config: RenderConfig | None = None,
    ) -> Query:
        """Load a query; joins in ``where`` are folded per ``config.fold_strategy``."""
        return super().from_dict(data, context=_fold_context(context, config))

    @classmethod
    def from_yaml(
        cls,
        path: str,
        context: dict[str, Any] | None = None,
        config: RenderConfig | None = None,
    ) -> Query:
        """Load a query from a YAML file, folding joins as ``from_dict`` does."""
        return super().from_yaml(path, context=_fold_context(context, config))

    @classmethod
    def where_all(
        cls,
        *expressions: Operator | LogicalJoin,
        join_type: LogicalJoinType | str = LogicalJoinType.AND,
        config: RenderConfig | None = None,
        **kwargs: Any,
    ) -> Query:
        """Query whose filter joins all ``expressions`` with ``join_type``."""
        strategy = config.fold_strategy if config is not None else FoldStrategy.LEFT
        return cls(where=fold(join_type, expressions, strategy=strategy), **kwargs)

    def ordered_by(self, names: Iterable[str], ascending: bool = True) -> Query:
        """Copy of this query with extra sort keys appended."""
        extra = tuple(OrderByField(name=name, ascending=ascending) for name in names)
        return self.model_copy(update={"order_by": self.order_by + extra})

    def render(self, config: RenderConfig | None = None, wrap: bool = False) -> str:
        """Render the query; ``wrap`` adds the enclosing ``<Query>`` element."""
        return CamlRenderer(config).render_query(self, wrap=wrap)
