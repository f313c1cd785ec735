"""Typed values compared against list fields.

A Value is either a literal (text, numbers, dates, lookups, choices, ...)
or a sentinel the server resolves at query time (current user, now, today).
This module owns the per-kind text formatting of literals; wrapping the text
into a ``<Value>`` element and escaping it is done by the renderer.

Example:
    >>> Value.of(ValueType.INTEGER, 42).caml_text()
    '42'
    >>> Value.of("datetime", datetime(2024, 3, 1, 9, 30), include_time=False).caml_text()
    '2024-03-01'
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Self

from pydantic import model_validator

from camlbuilder.base import NodeBaseModel
from camlbuilder.config import RenderConfig
from camlbuilder.onto import LOOKUP_ID_VALUE_TYPES, ValueType

logger = logging.getLogger(__name__)

CAML_DATE_FORMAT = "%Y-%m-%d"
CAML_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
MULTI_VALUE_SEPARATOR = ";#"


def format_caml_date(value: date | datetime | str, include_time: bool) -> str:
    """Format a date in the ISO 8601 form CAML expects.

    With the time of day, timezone-aware datetimes are converted to UTC and
    naive ones are taken as already being in UTC. Without it, the calendar
    date is used as given. Strings are assumed to be preformatted.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if include_time and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
    elif include_time:
        value = datetime(value.year, value.month, value.day)
    return value.strftime(CAML_DATETIME_FORMAT if include_time else CAML_DATE_FORMAT)


def format_multi_value(items: tuple | list) -> str:
    """Format several choices as ``;#a;#b;#``."""
    inner = MULTI_VALUE_SEPARATOR.join(str(item) for item in items)
    return f"{MULTI_VALUE_SEPARATOR}{inner}{MULTI_VALUE_SEPARATOR}"


class Value(NodeBaseModel):
    """Typed literal or sentinel value.

    Attributes:
        value_type: Kind of value, selects the ``Type`` attribute and formatting
        payload: The datum; always None for sentinel kinds
        include_time: For date kinds, whether the time of day is compared
        offset_days: For TODAY only, shift relative to the current date
    """

    value_type: ValueType
    payload: Any = None
    include_time: bool | None = None
    offset_days: int | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> Self:
        if self.value_type.is_sentinel:
            if self.payload is not None:
                logger.debug(
                    f"payload {self.payload!r} ignored for sentinel {self.value_type}"
                )
                object.__setattr__(self, "payload", None)
        elif self.payload is None:
            raise ValueError(f"value of type {self.value_type} requires a payload")
        elif self.value_type in (ValueType.DATE, ValueType.DATETIME):
            if not isinstance(self.payload, (date, str)):
                raise ValueError(
                    f"{self.value_type} payload must be a date, datetime or string,"
                    f" got {type(self.payload).__name__}"
                )
        if self.include_time is not None and not self.value_type.is_temporal:
            logger.warning(
                f"include_time ignored for non-date value type {self.value_type}"
            )
            object.__setattr__(self, "include_time", None)
        if self.offset_days is not None and self.value_type != ValueType.TODAY:
            raise ValueError(
                f"offset_days applies to {ValueType.TODAY} only, got {self.value_type}"
            )
        if isinstance(self.payload, list):
            object.__setattr__(self, "payload", tuple(self.payload))
        return self

    @classmethod
    def of(
        cls,
        value_type: ValueType | str,
        payload: Any,
        include_time: bool | None = None,
    ) -> Value:
        """Build a value of ``value_type`` holding ``payload``."""
        return cls(
            value_type=ValueType(value_type),
            payload=payload,
            include_time=include_time,
        )

    @classmethod
    def current_user(cls) -> Value:
        """Sentinel for the user running the query (``<UserID/>``)."""
        return cls(value_type=ValueType.CURRENT_USER)

    @classmethod
    def now(cls, include_time: bool | None = None) -> Value:
        """Sentinel for the current date and time (``<Now/>``)."""
        return cls(value_type=ValueType.NOW, include_time=include_time)

    @classmethod
    def today(cls, offset_days: int | None = None) -> Value:
        """Sentinel for the current date, optionally shifted (``<Today/>``)."""
        return cls(value_type=ValueType.TODAY, offset_days=offset_days)

    @property
    def compares_lookup_id(self) -> bool:
        return self.value_type in LOOKUP_ID_VALUE_TYPES

    @property
    def includes_time(self) -> bool:
        """Whether the time of day takes part in the comparison."""
        if self.include_time is not None:
            return self.include_time
        return self.value_type == ValueType.DATETIME

    def caml_text(self) -> str | None:
        """Textual form of the payload, unescaped; None for sentinels."""
        if self.value_type.is_sentinel:
            return None
        payload = self.payload
        if self.value_type in (ValueType.DATE, ValueType.DATETIME):
            return format_caml_date(payload, self.includes_time)
        if isinstance(payload, bool):
            return "1" if payload else "0"
        if isinstance(payload, (int, float, Decimal)):
            return str(payload)
        if isinstance(payload, tuple):
            return format_multi_value(payload)
        return str(payload)

    def render(self, config: RenderConfig | None = None) -> str:
        from camlbuilder.expression.render import render

        return render(self, config)
