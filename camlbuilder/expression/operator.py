"""Field comparison operators.

An Operator compares one list field against a Value (``Eq``, ``Gt``,
``Contains``, ...) or tests it on its own (``IsNull``, ``IsNotNull``).
Operators are built through the named factories, each complex one taking
either a ready ``Value`` or a ``(value_type, payload)`` pair.

Example:
    >>> Operator.equal("Title", ValueType.TEXT, "Report")
    >>> Operator.lower_than("Due", Value.today())
    >>> Operator.is_null("Owner")
"""

from __future__ import annotations

from typing import Any, Literal, Self

from pydantic import Field, model_validator

from camlbuilder.base import NodeBaseModel
from camlbuilder.config import RenderConfig
from camlbuilder.expression.value import Value
from camlbuilder.onto import OperatorType, ValueType


class Operator(NodeBaseModel):
    """Single comparison on a named field.

    Attributes:
        kind: Node discriminator, always "operator"
        operator_type: Comparison performed
        field_name: Internal name of the compared field
        value: Operand; None exactly when the operator is unary
    """

    kind: Literal["operator"] = "operator"
    operator_type: OperatorType
    field_name: str = Field(min_length=1)
    value: Value | None = None

    @model_validator(mode="after")
    def _check_operand(self) -> Self:
        if self.operator_type.is_unary:
            if self.value is not None:
                raise ValueError(
                    f"{self.operator_type} is unary and takes no value"
                    f" (field {self.field_name!r})"
                )
        elif self.value is None:
            raise ValueError(
                f"{self.operator_type} requires a value (field {self.field_name!r})"
            )
        return self

    @property
    def tag(self) -> str:
        return self.operator_type.tag

    @classmethod
    def create(
        cls,
        operator_type: OperatorType | str,
        field_name: str,
        value: Value | ValueType | str | None = None,
        payload: Any = None,
        include_time: bool | None = None,
    ) -> Operator:
        """Build an operator of any kind.

        Args:
            operator_type: Operator kind, or its CAML tag (``"Geq"``)
            field_name: Internal name of the field
            value: A built ``Value``, or the value type of ``payload``
            payload: Raw datum, only when ``value`` is a value type
            include_time: Time-of-day flag for date payloads

        Raises:
            ValueError: Unknown operator kind, or operand inconsistent with it
        """
        operator_type = OperatorType(operator_type)
        if isinstance(value, Value) or value is None:
            if payload is not None or include_time is not None:
                raise ValueError(
                    "payload and include_time are only accepted together with a value type"
                )
            operand = value
        else:
            operand = Value.of(value, payload, include_time=include_time)
        return cls(operator_type=operator_type, field_name=field_name, value=operand)

    @classmethod
    def is_null(cls, field_name: str) -> Operator:
        return cls.create(OperatorType.IS_NULL, field_name)

    @classmethod
    def is_not_null(cls, field_name: str) -> Operator:
        return cls.create(OperatorType.IS_NOT_NULL, field_name)

    @classmethod
    def equal(cls, field_name, value, payload=None, include_time=None) -> Operator:
        return cls.create(OperatorType.EQUAL, field_name, value, payload, include_time)

    @classmethod
    def not_equal(cls, field_name, value, payload=None, include_time=None) -> Operator:
        return cls.create(
            OperatorType.NOT_EQUAL, field_name, value, payload, include_time
        )

    @classmethod
    def greater_than(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.GREATER_THAN, field_name, value, payload, include_time
        )

    @classmethod
    def greater_than_or_equal_to(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.GREATER_THAN_OR_EQUAL_TO,
            field_name,
            value,
            payload,
            include_time,
        )

    @classmethod
    def lower_than(cls, field_name, value, payload=None, include_time=None) -> Operator:
        return cls.create(
            OperatorType.LOWER_THAN, field_name, value, payload, include_time
        )

    @classmethod
    def lower_than_or_equal_to(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.LOWER_THAN_OR_EQUAL_TO,
            field_name,
            value,
            payload,
            include_time,
        )

    @classmethod
    def begins_with(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.BEGINS_WITH, field_name, value, payload, include_time
        )

    @classmethod
    def contains(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.CONTAINS, field_name, value, payload, include_time
        )

    @classmethod
    def date_ranges_overlap(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        """``DateRangesOverlap`` on a recurring event field.

        Typically used with ``Value.now()`` or ``Value.today()``.
        """
        return cls.create(
            OperatorType.DATE_RANGES_OVERLAP, field_name, value, payload, include_time
        )

    @classmethod
    def includes(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.INCLUDES, field_name, value, payload, include_time
        )

    @classmethod
    def not_includes(
        cls, field_name, value, payload=None, include_time=None
    ) -> Operator:
        return cls.create(
            OperatorType.NOT_INCLUDES, field_name, value, payload, include_time
        )

    def render(self, config: RenderConfig | None = None) -> str:
        from camlbuilder.expression.render import render

        return render(self, config)
