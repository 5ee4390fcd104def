"""Render-scoped state: the block budget and render metadata.

Each top-level render, and each independent ``hooks.render()`` sub-render,
runs inside its own ``RenderContext``. The context is shared by every block,
iterate and parent call spawned from that render, so the block budget caps
total block executions per render rather than per branch.

The active context is published through a ContextVar so hooks and block
code can inspect it without it being threaded through every call:

    ```python
    from lineage.render_context import get_render_context

    def post_call(lang, block_name, *_):
        ctx = get_render_context()
        log.info("%s rendered (%d blocks so far)", block_name, ctx.block_count)
    ```

Block invocations run as tasks, which copy the ContextVar at creation and
therefore see the same ``RenderContext`` object as their caller. A render
started inside another render gets a copy of the outer metadata.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from lineage.environment.exceptions import BlockLimitError

DEFAULT_MAX_BLOCK_COUNT = 1000


@dataclass
class RenderContext:
    """Per-render state isolated from template variables.

    Attributes:
        entrypoint: Block the render started at
        lang: Language tag of the render
        template_name: Name of the entry template, if it has one
        block_count: Block-render attempts so far
        max_block_count: Ceiling for ``block_count``
        depth: Nesting depth of independent sub-renders (0 = top level)
    """

    entrypoint: str = "main"
    lang: str = ""
    template_name: str | None = None

    block_count: int = 0
    max_block_count: int = DEFAULT_MAX_BLOCK_COUNT

    depth: int = 0

    # Framework metadata (request info, user, ...)
    _meta: dict[str, object] = field(default_factory=dict)

    def get_meta(self, key: str, default: object = None) -> object:
        """Get framework-specific metadata."""
        return self._meta.get(key, default)

    def set_meta(self, key: str, value: object) -> None:
        """Set framework-specific metadata."""
        self._meta[key] = value

    @property
    def meta(self) -> dict[str, object]:
        """A copy of the metadata, as handed to nested sub-renders."""
        return dict(self._meta)

    def count_block(self, block_name: str) -> None:
        """Record one block-render attempt.

        Raises:
            BlockLimitError: If the count now exceeds ``max_block_count``
        """
        self.block_count += 1
        if self.block_count > self.max_block_count:
            raise BlockLimitError(
                self.max_block_count,
                block_name=block_name,
                template_name=self.template_name,
            )

    @property
    def remaining(self) -> int:
        return max(0, self.max_block_count - self.block_count)


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "lineage_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in a render)."""
    return _render_context.get()


def get_render_context_required() -> RenderContext:
    """Get current render context, raise if not in a render.

    Raises:
        RuntimeError: If not in a render context
    """
    ctx = _render_context.get()
    if ctx is None:
        raise RuntimeError("Not in a render context")
    return ctx


@asynccontextmanager
async def async_render_context(
    entrypoint: str = "main",
    lang: str = "",
    template_name: str | None = None,
    max_block_count: int = DEFAULT_MAX_BLOCK_COUNT,
    parent_meta: dict[str, object] | None = None,
) -> AsyncIterator[RenderContext]:
    """Async context manager for render-scoped state.

    Creates a fresh RenderContext (with a fresh block budget) and makes it
    current for the duration of the ``async with`` block. The previous
    context is restored on exit, so nested independent renders do not leak
    into their enclosing render.

    Args:
        entrypoint: Block the render starts at
        lang: Language tag of the render
        template_name: Entry template name for error messages
        max_block_count: Block budget for this render
        parent_meta: Metadata to inherit (copied, not shared)
    """
    outer = _render_context.get()
    ctx = RenderContext(
        entrypoint=entrypoint,
        lang=lang,
        template_name=template_name,
        max_block_count=max_block_count,
        depth=outer.depth + 1 if outer is not None else 0,
        _meta=parent_meta.copy() if parent_meta else {},
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
