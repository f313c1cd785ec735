"""camlbuilder: programmatic construction of CAML query markup.

camlbuilder builds filter predicates (field comparisons combined with And/Or)
as an immutable expression tree and renders them to the CAML XML dialect.
CAML joins are strictly binary; any number of conditions is folded into
nested pairs while keeping their order.

Key Features:
    - Typed values with per-kind formatting (dates, lookups, choices, users)
    - Sentinels resolved by the server (current user, now, today)
    - All CAML comparison operators, unary and binary
    - Deterministic folding of N conditions into binary joins
    - Expressions and queries loadable from dicts and YAML

Example:
    >>> from camlbuilder import Operator, ValueType, and_, render
    >>> expr = and_(
    ...     Operator.equal("Title", ValueType.TEXT, "Report"),
    ...     Operator.is_not_null("Owner"),
    ... )
    >>> render(expr)
    '<And><Eq><FieldRef Name="Title"/><Value Type="Text">Report</Value></Eq><IsNotNull><FieldRef Name="Owner"/></IsNotNull></And>'
"""

# --- Kinds -----------------------------------------------------------------
from .onto import FoldStrategy, LogicalJoinType, OperatorType, ValueType

# --- Configuration ---------------------------------------------------------
from .config import RenderConfig

# --- Expressions -----------------------------------------------------------
from .expression import (
    CamlRenderer,
    Expression,
    LogicalJoin,
    Operator,
    Value,
    and_,
    expression_from_dict,
    expression_from_yaml,
    fold,
    or_,
    render,
)

# --- Query -----------------------------------------------------------------
from .query import OrderByField, Query

__all__ = [
    "CamlRenderer",
    "Expression",
    "FoldStrategy",
    "LogicalJoin",
    "LogicalJoinType",
    "Operator",
    "OperatorType",
    "OrderByField",
    "Query",
    "RenderConfig",
    "Value",
    "ValueType",
    "and_",
    "expression_from_dict",
    "expression_from_yaml",
    "fold",
    "or_",
    "render",
]
