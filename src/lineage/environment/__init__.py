"""Render configuration and the error hierarchy.

Re-exports ``Environment`` and all exception types so that
``from lineage.environment import Environment, BlockRenderError`` works.
"""

from lineage.environment.exceptions import (
    BlockLimitError,
    BlockNotFoundError,
    BlockRenderError,
    BlockReturnTypeError,
    ErrorCode,
    TemplateCycleError,
    TemplateError,
    TemplateRuntimeError,
    is_fatal,
)
from lineage.environment.core import Environment

__all__ = [
    "BlockLimitError",
    "BlockNotFoundError",
    "BlockRenderError",
    "BlockReturnTypeError",
    "Environment",
    "ErrorCode",
    "TemplateCycleError",
    "TemplateError",
    "TemplateRuntimeError",
    "is_fatal",
]
