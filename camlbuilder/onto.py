"""Core enumerations for CAML query construction.

This module provides the closed sets of kinds the expression model is built
from, together with the read-only lookup tables that map each kind onto the
fixed CAML vocabulary.

Key Components:
    - BaseEnum: Base class for string-based enumerations with flexible membership testing
    - ValueType: Literal and sentinel kinds a Value can carry
    - OperatorType: Comparison and unary test kinds
    - LogicalJoinType: Binary connectives (And, Or)
    - FoldStrategy: How N expressions are nested into binary joins

Example:
    >>> "Eq" in OperatorType  # True, dialect tags are accepted
    >>> OperatorType("geq") is OperatorType.GREATER_THAN_OR_EQUAL_TO  # True
    >>> "Xor" in LogicalJoinType  # False
"""

from enum import EnumMeta
from types import MappingProxyType

import yaml
from strenum import StrEnum


def _normalize_key(value: str) -> str:
    return value.replace("_", "").replace("-", "").casefold()


class MetaEnum(EnumMeta):
    """Metaclass for flexible enumeration membership testing.

    This metaclass allows checking if a value is a valid member of an enum
    using the `in` operator, even if the value hasn't been instantiated as
    an enum member.
    """

    def __contains__(self, member: object) -> bool:
        """Check if an item is a valid member of the enum.

        Args:
            member: Value to check for membership

        Returns:
            bool: True if the item is a valid enum member, False otherwise
        """
        if isinstance(member, self):
            return True
        try:
            self(member)
            return True
        except ValueError:
            return False


class BaseEnum(StrEnum, metaclass=MetaEnum):
    """Base class for string-based enumerations.

    Lookup ignores case, underscores and dashes, and accepts member names as
    well as values, so ``ValueType("MultiChoice")`` and
    ``ValueType("multi_choice")`` both resolve.
    """

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            return None
        key = _normalize_key(value)
        for member in cls:
            if key in (_normalize_key(member.value), _normalize_key(member.name)):
                return member
        return None

    def __str__(self) -> str:
        """Return the enum value as string for proper serialization."""
        return self.value

    def __repr__(self) -> str:
        """Return the enum value as string for proper serialization."""
        return self.value


def _base_enum_representer(dumper, data):
    """Serialize BaseEnum members as their plain string value."""
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data.value))


yaml.add_multi_representer(BaseEnum, _base_enum_representer)
yaml.add_multi_representer(BaseEnum, _base_enum_representer, Dumper=yaml.SafeDumper)


class ValueType(BaseEnum):
    """Kinds of values a CAML comparison can carry.

    Literal kinds need a payload; sentinel kinds (CURRENT_USER, NOW, TODAY)
    are resolved by the server at query time and never carry one.
    """

    TEXT = "text"
    NOTE = "note"
    INTEGER = "integer"
    NUMBER = "number"
    CURRENCY = "currency"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    LOOKUP = "lookup"
    LOOKUP_ID = "lookup_id"
    USER = "user"
    USER_ID = "user_id"
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"
    GUID = "guid"
    URL = "url"
    COUNTER = "counter"
    CONTENT_TYPE_ID = "content_type_id"
    COMPUTED = "computed"
    FILE = "file"
    MOD_STAT = "mod_stat"

    CURRENT_USER = "current_user"
    NOW = "now"
    TODAY = "today"

    @property
    def is_sentinel(self) -> bool:
        return self in SENTINEL_VALUE_TYPES

    @property
    def is_temporal(self) -> bool:
        return self in TEMPORAL_VALUE_TYPES

    @property
    def type_attribute(self) -> str:
        """Value of the ``Type`` attribute on the rendered ``<Value>`` element."""
        return VALUE_TYPE_ATTRIBUTES[self]


SENTINEL_VALUE_TYPES = frozenset(
    {ValueType.CURRENT_USER, ValueType.NOW, ValueType.TODAY}
)

TEMPORAL_VALUE_TYPES = frozenset(
    {ValueType.DATE, ValueType.DATETIME, ValueType.NOW, ValueType.TODAY}
)

# kinds whose FieldRef compares the lookup id rather than the display value
LOOKUP_ID_VALUE_TYPES = frozenset({ValueType.LOOKUP_ID, ValueType.USER_ID})

VALUE_TYPE_ATTRIBUTES = MappingProxyType(
    {
        ValueType.TEXT: "Text",
        ValueType.NOTE: "Note",
        ValueType.INTEGER: "Integer",
        ValueType.NUMBER: "Number",
        ValueType.CURRENCY: "Currency",
        ValueType.BOOLEAN: "Boolean",
        ValueType.DATE: "DateTime",
        ValueType.DATETIME: "DateTime",
        ValueType.LOOKUP: "Lookup",
        ValueType.LOOKUP_ID: "Lookup",
        ValueType.USER: "User",
        ValueType.USER_ID: "Integer",
        ValueType.CHOICE: "Choice",
        ValueType.MULTI_CHOICE: "MultiChoice",
        ValueType.GUID: "Guid",
        ValueType.URL: "URL",
        ValueType.COUNTER: "Counter",
        ValueType.CONTENT_TYPE_ID: "ContentTypeId",
        ValueType.COMPUTED: "Computed",
        ValueType.FILE: "File",
        ValueType.MOD_STAT: "ModStat",
        ValueType.CURRENT_USER: "Integer",
        ValueType.NOW: "DateTime",
        ValueType.TODAY: "DateTime",
    }
)


class OperatorType(BaseEnum):
    """Comparison operators available in a CAML ``<Where>`` clause.

    Attributes:
        EQUAL: Field equals value (``Eq``)
        NOT_EQUAL: Field differs from value (``Neq``)
        GREATER_THAN: ``Gt``
        GREATER_THAN_OR_EQUAL_TO: ``Geq``
        LOWER_THAN: ``Lt``
        LOWER_THAN_OR_EQUAL_TO: ``Leq``
        BEGINS_WITH: Text prefix match
        CONTAINS: Text substring match
        IS_NULL: Field is empty (unary)
        IS_NOT_NULL: Field is set (unary)
        DATE_RANGES_OVERLAP: Recurring event overlaps a date
        INCLUDES: Multi-value field includes value
        NOT_INCLUDES: Multi-value field does not include value
    """

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL_TO = "GreaterThanOrEqualTo"
    LOWER_THAN = "LowerThan"
    LOWER_THAN_OR_EQUAL_TO = "LowerThanOrEqualTo"
    BEGINS_WITH = "BeginsWith"
    CONTAINS = "Contains"
    IS_NULL = "IsNull"
    IS_NOT_NULL = "IsNotNull"
    DATE_RANGES_OVERLAP = "DateRangesOverlap"
    INCLUDES = "Includes"
    NOT_INCLUDES = "NotIncludes"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = _normalize_key(value)
            for tag, member in TAG_OPERATORS.items():
                if _normalize_key(tag) == key:
                    return member
        return super()._missing_(value)

    @property
    def is_unary(self) -> bool:
        return self in UNARY_OPERATOR_TYPES

    @property
    def tag(self) -> str:
        """CAML element name of the operator."""
        return OPERATOR_TAGS[self]


UNARY_OPERATOR_TYPES = frozenset({OperatorType.IS_NULL, OperatorType.IS_NOT_NULL})

OPERATOR_TAGS = MappingProxyType(
    {
        OperatorType.EQUAL: "Eq",
        OperatorType.NOT_EQUAL: "Neq",
        OperatorType.GREATER_THAN: "Gt",
        OperatorType.GREATER_THAN_OR_EQUAL_TO: "Geq",
        OperatorType.LOWER_THAN: "Lt",
        OperatorType.LOWER_THAN_OR_EQUAL_TO: "Leq",
        OperatorType.IS_NULL: "IsNull",
        OperatorType.IS_NOT_NULL: "IsNotNull",
        OperatorType.BEGINS_WITH: "BeginsWith",
        OperatorType.CONTAINS: "Contains",
        OperatorType.DATE_RANGES_OVERLAP: "DateRangesOverlap",
        OperatorType.INCLUDES: "Includes",
        OperatorType.NOT_INCLUDES: "NotIncludes",
    }
)

TAG_OPERATORS = MappingProxyType({tag: op for op, tag in OPERATOR_TAGS.items()})


class LogicalJoinType(BaseEnum):
    """Logical connectives of the dialect, both strictly binary.

    Attributes:
        AND: Both operands hold
        OR: At least one operand holds
    """

    AND = "And"
    OR = "Or"


class FoldStrategy(BaseEnum):
    """Nesting shape used when more than two expressions are joined.

    Attributes:
        LEFT: ``Join(Join(e1, e2), e3)``, left-associative
        BALANCED: Split at the midpoint, depth grows logarithmically
    """

    LEFT = "left"
    BALANCED = "balanced"
