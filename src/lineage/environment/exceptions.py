"""Exceptions for the lineage rendering engine.

Exception Hierarchy:
TemplateError (base)
└── TemplateRuntimeError          # Render-time error with block context
    ├── BlockLimitError           # Call budget exhausted (fatal)
    ├── BlockNotFoundError        # No callable block anywhere in the chain
    ├── BlockReturnTypeError      # Block or cache returned a non-string
    ├── BlockRenderError          # Error annotated with the failing block name
    └── TemplateCycleError        # Parent chain revisits a template (fatal)

Fatal errors, and ``RecursionError`` from block code, bypass every
``on_error`` hook on their way out of a render.
Everything else is offered to ``on_error`` at the block boundary where it
was raised, and is wrapped in a ``BlockRenderError`` once it escapes that
boundary:

    ```
    BlockRenderError: main has thrown: nav has thrown: boom
    ```

"""

from __future__ import annotations

from enum import Enum
from typing import Any

from lineage.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for lineage errors.

    Format: L-{CATEGORY}-{NUMBER}
    Categories: RUN (runtime), TPL (template chain)
    """

    # Runtime errors (L-RUN-xxx)
    BLOCK_LIMIT = "L-RUN-001"
    BLOCK_NOT_FOUND = "L-RUN-002"
    BLOCK_RETURN_TYPE = "L-RUN-003"
    BLOCK_ERROR = "L-RUN-004"

    # Template chain errors (L-TPL-xxx)
    TEMPLATE_CYCLE = "L-TPL-001"

    @property
    def category(self) -> str:
        """Error category ('runtime' or 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all lineage errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
        fatal: Fatal errors are never handed to ``on_error``.
    """

    code: ErrorCode | None = None
    fatal: bool = False

    def format_compact(self) -> str:
        """Format error as a one-line summary prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateRuntimeError(TemplateError):
    """Render-time error with block context.

    ``str()`` of the error is the bare message so that nested block
    annotations compose cleanly; ``format_compact()`` adds the location
    and suggestion for terminal display.

    Attributes:
        message: Error description
        block_name: Block being rendered when the error occurred
        template_name: Name of the template involved, if it has one
        suggestion: Actionable fix suggestion
    """

    code: ErrorCode | None = ErrorCode.BLOCK_ERROR

    def __init__(
        self,
        message: str,
        *,
        block_name: str | None = None,
        template_name: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.block_name = block_name
        self.template_name = template_name
        self.suggestion = suggestion
        super().__init__(message)

    def format_compact(self) -> str:
        """Format runtime error as structured terminal diagnostic."""
        parts = [
            terminal.format_error_header(self.code.value if self.code else None, self.message)
        ]
        if self.block_name or self.template_name:
            loc = self.template_name or "<template>"
            if self.block_name:
                loc += f"::{self.block_name}"
            parts.append(f"  Location: {terminal.location(loc)}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class BlockLimitError(TemplateRuntimeError):
    """More blocks were rendered than the render's call budget allows.

    Usually caused by a block that requests itself without a base case, or
    by a parent chain that loops back on itself.
    """

    code: ErrorCode | None = ErrorCode.BLOCK_LIMIT
    fatal = True

    def __init__(self, limit: int, **kwargs: Any):
        self.limit = limit
        super().__init__(
            f"block count exceeds limit of {limit}",
            suggestion="Check for blocks that render themselves without a base case",
            **kwargs,
        )


class BlockNotFoundError(TemplateRuntimeError):
    """No template in the chain defines the block as a callable."""

    code: ErrorCode | None = ErrorCode.BLOCK_NOT_FOUND

    def __init__(self, block_name: str, **kwargs: Any):
        super().__init__(
            f"block '{block_name}' is not a function",
            block_name=block_name,
            suggestion=f"Define '{block_name}' on the template or one of its parents",
            **kwargs,
        )


class BlockReturnTypeError(TemplateRuntimeError):
    """A block function (or a cache hit) produced something other than ``str``."""

    code: ErrorCode | None = ErrorCode.BLOCK_RETURN_TYPE

    def __init__(self, block_name: str, value: Any, **kwargs: Any):
        self.value = value
        super().__init__(
            f"block '{block_name}' has to return a string, got {type(value).__name__}",
            block_name=block_name,
            **kwargs,
        )


class TemplateCycleError(TemplateRuntimeError):
    """A parent chain visited the same template twice."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_CYCLE
    fatal = True

    def __init__(self, template: Any, **kwargs: Any):
        name = getattr(template, "name", None) or repr(template)
        super().__init__(
            f"template chain revisits {name}",
            template_name=getattr(template, "name", None),
            suggestion="A template must not be its own ancestor",
            **kwargs,
        )


class BlockRenderError(TemplateRuntimeError):
    """An error escaped a block invocation.

    Wraps the error with the name of the block it escaped from. Wrappers nest
    as the error climbs through enclosing blocks, so the message reads
    outermost block first.

    Attributes:
        error: The error that escaped the block (possibly another wrapper)
        original: The innermost error that is not a ``BlockRenderError``
        block_path: Block names from outermost to innermost
    """

    def __init__(self, block_name: str, error: BaseException):
        self.error = error
        super().__init__(f"{block_name} has thrown: {error}", block_name=block_name)

    @property
    def original(self) -> BaseException:
        error: BaseException = self
        while isinstance(error, BlockRenderError):
            error = error.error
        return error

    @property
    def block_path(self) -> list[str]:
        path: list[str] = []
        error: BaseException = self
        while isinstance(error, BlockRenderError):
            path.append(error.block_name or "")
            error = error.error
        return path

    @property
    def fatal(self) -> bool:  # type: ignore[override]
        return is_fatal(self.original)

    @property
    def code(self) -> ErrorCode | None:  # type: ignore[override]
        original = self.original
        if isinstance(original, TemplateError):
            return original.code
        return ErrorCode.BLOCK_ERROR

    def format_compact(self) -> str:
        text = super().format_compact()
        blocks = "Blocks: " + " -> ".join(self.block_path)
        return f"{text}\n  {terminal.dim_text(blocks)}"


def is_fatal(error: BaseException) -> bool:
    """True if ``error`` must bypass ``on_error`` hooks."""
    if isinstance(error, RecursionError):
        return True
    return isinstance(error, TemplateError) and error.fatal
