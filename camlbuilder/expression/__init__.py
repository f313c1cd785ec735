"""Expression model: values, operators, logical joins and their rendering."""

from camlbuilder.expression.join import Expression, LogicalJoin, and_, fold, or_
from camlbuilder.expression.loader import expression_from_dict, expression_from_yaml
from camlbuilder.expression.operator import Operator
from camlbuilder.expression.render import CamlRenderer, render
from camlbuilder.expression.value import Value

__all__ = [
    "CamlRenderer",
    "Expression",
    "LogicalJoin",
    "Operator",
    "Value",
    "and_",
    "expression_from_dict",
    "expression_from_yaml",
    "fold",
    "or_",
    "render",
]
