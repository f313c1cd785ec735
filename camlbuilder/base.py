"""Base models for camlbuilder with YAML support."""

from __future__ import annotations

from typing import Any, Self

import yaml
from pydantic import BaseModel, ConfigDict


class ConfigBaseModel(BaseModel):
    """Base model for all camlbuilder configuration classes.

    Provides YAML serialization/deserialization and standard configuration
    for all Pydantic models in the system. ``context`` is handed to the
    pydantic validators of the model and its nested fields.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
    )

    @classmethod
    def from_yaml(cls, path: str, context: dict[str, Any] | None = None) -> Self:
        """Load a single instance from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data, context=context)

    @classmethod
    def from_dict(
        cls, data: dict[str, Any] | list[Any], context: dict[str, Any] | None = None
    ) -> Self:
        """Load from a dictionary (or list for root model)."""
        return cls.model_validate(data, context=context)

    def to_yaml_str(self, **kwargs: Any) -> str:
        """Convert instance to a YAML string readable by ``from_yaml``."""
        return yaml.safe_dump(
            self.model_dump(by_alias=True, exclude_none=True),
            default_flow_style=False,
            sort_keys=False,
            **kwargs,
        )


class NodeBaseModel(ConfigBaseModel):
    """Base model for expression tree nodes.

    Nodes are frozen: once built by a factory they are never mutated, so a
    tree can be rendered from several threads without synchronization.
    """

    model_config = ConfigDict(frozen=True)
