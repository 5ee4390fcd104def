"""The render engine: one ``Renderer`` per render.

A ``Renderer`` owns the render's variables, language, hook set and
``RenderContext`` (block budget). ``render_block`` runs the per-block state
machine:

1. count the attempt against the block budget (fatal when exceeded)
2. resolve the block along the chain (``""`` past the root)
3. build the variable lookup and local context
4. ``pre_call``
5. ``get_cache`` — a non-``None`` result skips steps 6–8
6. ``pre_render``
7. run the block function (must produce ``str``)
8. ``post_render``, ``set_cache``
9. ``post_call``

Errors from steps 4–9 are offered to ``on_error``; its value replaces the
rendered output. Whatever escapes an invocation is re-raised as
``BlockRenderError`` naming the block.

"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from lineage._types import HookArgs, VarsScope
from lineage.environment.exceptions import (
    BlockNotFoundError,
    BlockRenderError,
    BlockReturnTypeError,
    is_fatal,
)
from lineage.hooks import (
    GET_CACHE,
    ON_ERROR,
    POST_CALL,
    POST_RENDER,
    PRE_CALL,
    PRE_RENDER,
    SET_CACHE,
    TRANS,
    HookSet,
    dispatch,
)
from lineage.template.chain import resolve_block
from lineage.template.local_context import LocalContext, LocalScope
from lineage.template.sources import EMPTY, Source
from lineage.utils.aio import resolve
from lineage.variables import VariableLookup

if TYPE_CHECKING:
    from lineage._types import VarsSource
    from lineage.environment.core import Environment
    from lineage.render_context import RenderContext
    from lineage.template.core import Template

logger = logging.getLogger(__name__)


class _Inherit:
    """Marker for "use the enclosing render's variables"."""

    def __repr__(self) -> str:
        return "INHERIT"


INHERIT: Any = _Inherit()


def _reraise(error: BaseException, *_: Any) -> Any:
    raise error


class Renderer:
    """State of a single render and the engine continuations bound to it.

    Attributes:
        environment: Configuration the render runs under
        origin: Entry template; ``block`` and ``iterate`` resolve from here
        variables: The render's variables as given by the caller
        lang: Language tag
        hooks: Immutable hook set, including ``block``/``iterate``/``render``
        context: Render-scoped state holding the block budget
    """

    def __init__(
        self,
        environment: Environment,
        template: Template,
        variables: VarsSource,
        lang: str,
        hooks: Mapping[str, Any] | None,
        context: RenderContext,
    ) -> None:
        self.environment = environment
        self.origin = template
        self.variables = variables
        self.lang = lang
        self.context = context
        self._globals = Source.of(variables)
        self._detect_cycles = environment.detect_cycles
        self.hooks = HookSet(
            hooks,
            block=self.block,
            iterate=self.iterate,
            render=self.render,
        )

    async def run(self, entrypoint: str) -> str:
        """Render ``entrypoint`` with the render variables as its local scope."""
        logger.debug(f"Rendering {entrypoint!r} of {self.origin!r} (lang={self.lang!r})")
        return await self.render_block(
            entrypoint,
            self.origin,
            LocalScope(self._globals),
            use_globals=False,
        )

    # -- continuations exposed on the hook set -------------------------------

    async def block(self, block_name: str, local_vars: VarsSource = None) -> str:
        """Render ``block_name`` from the entry template with fresh local variables."""
        return await self.render_block(block_name, self.origin, LocalScope.of(local_vars))

    async def iterate(self, block_name: str, data: Iterable[Any], separator: str = "") -> str:
        """Render ``block_name`` once per item of ``data``, joined by ``separator``."""
        return await self.iterate_block(block_name, data, separator)

    async def render(
        self,
        template: Template,
        variables: VarsSource = INHERIT,
        lang: str | None = None,
        hooks: Mapping[str, Any] | None = None,
        entrypoint: str | None = None,
    ) -> str:
        """Start an independent render with its own hooks and block budget.

        Variables and language default to this render's; hooks do not carry
        over.
        """
        return await self.environment.render(
            template,
            self.variables if variables is INHERIT else variables,
            self.lang if lang is None else lang,
            dict(hooks or {}),
            entrypoint,
        )

    # -- engine ----------------------------------------------------------------

    async def iterate_block(
        self,
        block_name: str,
        data: Iterable[Any],
        separator: str = "",
        *,
        use_globals: bool = True,
    ) -> str:
        """Render all items concurrently; join results in input order."""
        scopes = [LocalScope.item(item, index) for index, item in enumerate(data)]
        rendered = await asyncio.gather(
            *(
                self.render_block(block_name, self.origin, scope, use_globals=use_globals)
                for scope in scopes
            )
        )
        return separator.join(rendered)

    async def translate(
        self,
        item: Any,
        category: str | None,
        args: HookArgs,
        template: Template,
    ) -> Any:
        return await dispatch(
            TRANS,
            (item, category, *args),
            self.hooks,
            template,
            item,
            detect_cycles=self._detect_cycles,
        )

    async def render_block(
        self,
        block_name: str,
        starting_template: Template | None,
        scope: LocalScope,
        *,
        use_globals: bool = True,
    ) -> str:
        """Render ``block_name``, resolving from ``starting_template`` upward.

        Raises:
            BlockRenderError: If an error escapes the invocation
        """
        try:
            # A task per invocation keeps the stack flat however deep blocks nest.
            return await asyncio.create_task(
                self._render_block(block_name, starting_template, scope, use_globals)
            )
        except Exception as e:
            raise BlockRenderError(block_name, e) from e

    async def _render_block(
        self,
        block_name: str,
        starting_template: Template | None,
        scope: LocalScope,
        use_globals: bool,
    ) -> str:
        self.context.count_block(block_name)

        if starting_template is None:
            return ""

        block_fn, current_template = resolve_block(
            block_name, starting_template, detect_cycles=self._detect_cycles
        )
        if current_template is None or not callable(block_fn):
            raise BlockNotFoundError(
                block_name,
                template_name=getattr(current_template or starting_template, "name", None),
            )

        local = LocalContext(self, block_name, scope, starting_template, current_template)
        lookup = VariableLookup(
            scope.vars,
            self._globals if use_globals else EMPTY,
            starting_template,
            VarsScope(
                block_name,
                self.lang,
                local,
                self.hooks,
                starting_template,
                current_template,
            ),
            detect_cycles=self._detect_cycles,
        )
        args = HookArgs(self.lang, block_name, current_template, lookup, local, self.hooks)
        local.bind_args(args)

        try:
            await self._hook(PRE_CALL, args, starting_template)

            rendered = await self._hook(GET_CACHE, args, starting_template)
            if rendered is None:
                await self._hook(PRE_RENDER, args, starting_template)

                rendered = await resolve(block_fn(lookup, local, self.hooks))
                if not isinstance(rendered, str):
                    raise BlockReturnTypeError(block_name, rendered)

                await self._hook(POST_RENDER, args, starting_template)
                await self._hook(SET_CACHE, (rendered, *args), starting_template)
            else:
                logger.debug(f"Cache hit for block {block_name!r}")
                if not isinstance(rendered, str):
                    raise BlockReturnTypeError(block_name, rendered)

            await self._hook(POST_CALL, args, starting_template)
        except Exception as e:
            if is_fatal(e):
                raise
            rendered = await dispatch(
                ON_ERROR,
                (e, *args),
                self.hooks,
                starting_template,
                _reraise,
                detect_cycles=self._detect_cycles,
            )
            logger.debug(f"on_error handled {type(e).__name__} in block {block_name!r}")
            rendered = str(rendered)

        return rendered

    async def _hook(self, name: str, args: tuple[Any, ...], template: Template) -> Any:
        return await dispatch(name, args, self.hooks, template, detect_cycles=self._detect_cycles)

    def __repr__(self) -> str:
        return f"<Renderer {self.origin!r} lang={self.lang!r} blocks={self.context.block_count}>"
