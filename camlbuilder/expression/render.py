"""CAML text rendering of expression trees.

The renderer is a pure function of the tree: it walks nodes depth first,
left child before right child, and concatenates each node's wrapper markup
around its children. No whitespace is inserted.

Example:
    >>> render(Operator.equal("Title", ValueType.TEXT, "Report"))
    '<Eq><FieldRef Name="Title"/><Value Type="Text">Report</Value></Eq>'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from xml.sax.saxutils import escape

from camlbuilder.config import DEFAULT_RENDER_CONFIG, RenderConfig
from camlbuilder.expression.join import LogicalJoin
from camlbuilder.expression.operator import Operator
from camlbuilder.expression.value import Value
from camlbuilder.onto import ValueType

if TYPE_CHECKING:
    from camlbuilder.query import Query

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


class CamlRenderer:
    """Renders Value, Operator, LogicalJoin and Query nodes to CAML text."""

    def __init__(self, config: RenderConfig | None = None):
        self.config = config if config is not None else DEFAULT_RENDER_CONFIG

    def render(self, node: Any) -> str:
        from camlbuilder.query import Query

        if isinstance(node, LogicalJoin):
            return self.render_join(node)
        if isinstance(node, Operator):
            return self.render_operator(node)
        if isinstance(node, Value):
            return self.render_value(node)
        if isinstance(node, Query):
            return self.render_query(node)
        raise TypeError(f"cannot render {type(node).__name__} as CAML")

    def _text(self, text: str) -> str:
        return escape(text) if self.config.escape_values else text

    def _attribute(self, text: str) -> str:
        if self.config.escape_values:
            return escape(text, _ATTRIBUTE_ENTITIES)
        return text

    def render_field_ref(
        self, name: str, lookup_id: bool = False, ascending: bool = True
    ) -> str:
        attributes = f' Name="{self._attribute(name)}"'
        if lookup_id:
            attributes += ' LookupId="TRUE"'
        if not ascending:
            attributes += ' Ascending="FALSE"'
        return f"<FieldRef{attributes}/>"

    def render_value(self, value: Value) -> str:
        attributes = f' Type="{value.value_type.type_attribute}"'
        if value.include_time:
            attributes += ' IncludeTimeValue="TRUE"'
        if value.value_type == ValueType.CURRENT_USER:
            inner = "<UserID/>"
        elif value.value_type == ValueType.NOW:
            inner = "<Now/>"
        elif value.value_type == ValueType.TODAY:
            if value.offset_days:
                inner = f'<Today OffsetDays="{value.offset_days}"/>'
            else:
                inner = "<Today/>"
        else:
            inner = self._text(value.caml_text())
        return f"<Value{attributes}>{inner}</Value>"

    def render_operator(self, operator: Operator) -> str:
        value = operator.value
        lookup_id = value is not None and value.compares_lookup_id
        parts = [self.render_field_ref(operator.field_name, lookup_id=lookup_id)]
        if value is not None:
            parts.append(self.render_value(value))
        return f"<{operator.tag}>{''.join(parts)}</{operator.tag}>"

    def render_join(self, join: LogicalJoin) -> str:
        left = self.render(join.left)
        right = self.render(join.right)
        return f"<{join.tag}>{left}{right}</{join.tag}>"

    def render_query(self, query: Query, wrap: bool = False) -> str:
        parts = []
        if query.where is not None:
            parts.append(f"<Where>{self.render(query.where)}</Where>")
        if query.group_by:
            collapse = ' Collapse="TRUE"' if query.collapse else ""
            fields = "".join(self.render_field_ref(name) for name in query.group_by)
            parts.append(f"<GroupBy{collapse}>{fields}</GroupBy>")
        if query.order_by:
            fields = "".join(
                self.render_field_ref(item.name, ascending=item.ascending)
                for item in query.order_by
            )
            parts.append(f"<OrderBy>{fields}</OrderBy>")
        body = "".join(parts)
        return f"<Query>{body}</Query>" if wrap else body


def render(node: Any, config: RenderConfig | None = None) -> str:
    """Render any expression node (or a Query) to CAML text."""
    return CamlRenderer(config).render(node)
