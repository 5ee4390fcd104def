"""Environment — render configuration shared across renders.

An ``Environment`` holds the settings every render started from it uses:
the block budget, the default entry block and language, environment-wide
default hooks, and whether parent chains are checked for cycles.

Example:
    >>> env = Environment(max_block_count=200, hooks={"trans": my_trans})
    >>> html = await env.render(page, {"title": "Home"}, lang="en")
    >>> html = env.render_sync(page, {"title": "Home"}, lang="en")

Environments are immutable after construction and safe to share between
concurrent renders; all mutable render state lives on the per-render
``RenderContext``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lineage.render_context import (
    DEFAULT_MAX_BLOCK_COUNT,
    async_render_context,
    get_render_context,
)
from lineage.renderer import Renderer
from lineage.utils.aio import run_sync

if TYPE_CHECKING:
    from lineage._types import VarsSource
    from lineage.template.core import Template

logger = logging.getLogger(__name__)


class Environment:
    """Render configuration.

    Args:
        max_block_count: Block-render attempts allowed per render
        entrypoint: Block a render starts at when none is given
        lang: Language tag used when none is given ("" = no translation)
        hooks: Default hooks; hooks passed to ``render()`` take precedence
        detect_cycles: Raise ``TemplateCycleError`` when a parent chain
            revisits a template, instead of relying on the block budget

    Raises:
        ValueError: If ``max_block_count`` is smaller than 1
    """

    __slots__ = ("_detect_cycles", "_entrypoint", "_hooks", "_lang", "_max_block_count")

    def __init__(
        self,
        *,
        max_block_count: int = DEFAULT_MAX_BLOCK_COUNT,
        entrypoint: str = "main",
        lang: str = "",
        hooks: Mapping[str, Any] | None = None,
        detect_cycles: bool = False,
    ) -> None:
        if max_block_count < 1:
            raise ValueError(f"max_block_count must be at least 1, got {max_block_count}")
        self._max_block_count = max_block_count
        self._entrypoint = entrypoint
        self._lang = lang
        self._hooks = MappingProxyType(dict(hooks or {}))
        self._detect_cycles = detect_cycles

    @property
    def max_block_count(self) -> int:
        return self._max_block_count

    @property
    def entrypoint(self) -> str:
        return self._entrypoint

    @property
    def lang(self) -> str:
        return self._lang

    @property
    def hooks(self) -> Mapping[str, Any]:
        return self._hooks

    @property
    def detect_cycles(self) -> bool:
        return self._detect_cycles

    async def render(
        self,
        template: Template,
        variables: VarsSource = None,
        lang: str | None = None,
        hooks: Mapping[str, Any] | None = None,
        entrypoint: str | None = None,
    ) -> str:
        """Render ``template`` starting at ``entrypoint``.

        Args:
            template: Entry template of the inheritance chain
            variables: Mapping or resolver ``(name) -> value | None``
            lang: Language tag passed through to blocks and hooks
            hooks: Hook name → function; ``block``, ``iterate`` and
                ``render`` are supplied by the engine and replace any
                caller values
            entrypoint: First block to render

        Returns:
            The rendered string

        Raises:
            BlockRenderError: If an error escapes the entry block
        """
        lang = self._lang if lang is None else lang
        entrypoint = entrypoint or self._entrypoint
        merged = {**self._hooks, **hooks} if hooks else dict(self._hooks)
        outer = get_render_context()

        async with async_render_context(
            entrypoint=entrypoint,
            lang=lang,
            template_name=template.name,
            max_block_count=self._max_block_count,
            parent_meta=outer.meta if outer is not None else None,
        ) as ctx:
            renderer = Renderer(self, template, variables, lang, merged, ctx)
            rendered = await renderer.run(entrypoint)
            logger.debug(
                f"Rendered {entrypoint!r} of {template!r}: {ctx.block_count} blocks, "
                f"{len(rendered)} chars"
            )
            return rendered

    def render_sync(
        self,
        template: Template,
        variables: VarsSource = None,
        lang: str | None = None,
        hooks: Mapping[str, Any] | None = None,
        entrypoint: str | None = None,
    ) -> str:
        """Synchronous ``render()`` for callers without an event loop.

        Raises:
            RuntimeError: If called from inside a running event loop
        """
        return run_sync(self.render(template, variables, lang, hooks, entrypoint))

    def __repr__(self) -> str:
        return (
            f"Environment(max_block_count={self._max_block_count}, "
            f"entrypoint={self._entrypoint!r}, lang={self._lang!r}, "
            f"detect_cycles={self._detect_cycles})"
        )
