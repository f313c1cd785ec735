"""Rendering options.

Example:
    >>> config = RenderConfig.from_yaml("render.yaml")
    >>> render(expr, config)
"""

from __future__ import annotations

import logging

from pydantic import ConfigDict, model_validator

from camlbuilder.base import ConfigBaseModel
from camlbuilder.onto import FoldStrategy

logger = logging.getLogger(__name__)


class RenderConfig(ConfigBaseModel):
    """Options applied when an expression tree is turned into CAML text.

    Attributes:
        escape_values: XML-escape literal text and attribute values. When
            disabled payloads are concatenated verbatim.
        fold_strategy: Nesting shape used by loaders and queries that join
            more than two expressions.
    """

    model_config = ConfigDict(frozen=True)

    escape_values: bool = True
    fold_strategy: FoldStrategy = FoldStrategy.LEFT

    @model_validator(mode="after")
    def _warn_unescaped(self) -> RenderConfig:
        if not self.escape_values:
            logger.warning(
                "escape_values is disabled: payloads containing '<' or '&' "
                "will produce malformed CAML"
            )
        return self


DEFAULT_RENDER_CONFIG = RenderConfig()
