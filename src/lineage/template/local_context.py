"""Per-invocation local context handed to block functions as ``local``.

``LocalScope`` is the immutable value threaded between invocations: the
local variables and the iteration index. ``LocalContext`` is the view one
block invocation gets on top of it, with continuations bound to that
invocation:

- ``local.parent()`` renders the same block from the defining template's
  parent, keeping this scope
- ``local.block(name)`` renders another block, reusing this scope unless
  new local variables are given; render variables are not visible
- ``local.iterate(name, data)`` renders ``name`` once per item with only the
  item's variables visible (plus template defaults)
- ``local.trans(item, category)`` asks the ``trans`` hooks for a translation

Example:
    ```python
    async def nav_item(vars, local, hooks):
        label = await local.trans(vars("label"), "nav")
        return f'<li data-index="{local.index}">{label}</li>'
    ```

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lineage.template.sources import EMPTY, Source

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lineage._types import HookArgs, VarsSource
    from lineage.renderer import Renderer
    from lineage.template.core import Template


@dataclass(frozen=True, slots=True)
class LocalScope:
    """Local variables and iteration index of an invocation."""

    vars: Source = EMPTY
    index: int | None = None

    @classmethod
    def of(cls, variables: VarsSource | Source, index: int | None = None) -> LocalScope:
        return cls(Source.of(variables), index)

    @classmethod
    def item(cls, value: Any, index: int) -> LocalScope:
        """Scope of one iteration item; scalar items only carry the index."""
        if isinstance(value, (Source, Mapping)) or callable(value):
            return cls(Source.of(value), index)
        return cls(EMPTY, index)


class LocalContext:
    """The ``local`` argument of a block function.

    Attributes:
        block_name: Block being rendered
        scope: The threaded ``LocalScope``
        lang: Language tag of the render
        starting_template: Template the request started resolution from
        current_template: Template that defined the block
    """

    __slots__ = (
        "_args",
        "_renderer",
        "block_name",
        "current_template",
        "lang",
        "scope",
        "starting_template",
    )

    def __init__(
        self,
        renderer: Renderer,
        block_name: str,
        scope: LocalScope,
        starting_template: Template,
        current_template: Template,
    ) -> None:
        self._renderer = renderer
        self._args: HookArgs | None = None
        self.block_name = block_name
        self.scope = scope
        self.lang = renderer.lang
        self.starting_template = starting_template
        self.current_template = current_template

    @property
    def vars(self) -> Source:
        """Lookup over the local scope only (``local.vars(name)``)."""
        return self.scope.vars

    @property
    def index(self) -> int | None:
        return self.scope.index

    def bind_args(self, args: HookArgs) -> None:
        """Attach the hook arguments of this invocation (used by ``trans``)."""
        self._args = args

    async def parent(self) -> str:
        """Render this block as defined further up the chain.

        Returns an empty string once the root has been passed.
        """
        return await self._renderer.render_block(
            self.block_name,
            self.current_template.parent,
            self.scope,
        )

    async def block(self, block_name: str, local_vars: VarsSource = None) -> str:
        scope = LocalScope.of(local_vars) if local_vars is not None else self.scope
        return await self._renderer.render_block(
            block_name,
            self._renderer.origin,
            scope,
            use_globals=False,
        )

    async def iterate(self, block_name: str, data: Iterable[Any], separator: str = "") -> str:
        return await self._renderer.iterate_block(
            block_name,
            data,
            separator,
            use_globals=False,
        )

    async def trans(self, item: Any, category: str | None = None) -> Any:
        """Translate ``item``; the item itself when no ``trans`` hook answers."""
        if self._args is None:
            raise RuntimeError(f"local context of {self.block_name!r} is not bound to an invocation")
        return await self._renderer.translate(item, category, self._args, self.starting_template)

    def __repr__(self) -> str:
        return f"<LocalContext {self.block_name!r} index={self.index}>"
