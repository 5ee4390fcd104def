"""Layered variable lookup for a single block invocation.

Resolution order, first non-``None`` value wins:

1. local scope (variables attached to the invocation)
2. global scope (the render's variables, unless the invocation opted out)
3. the starting template's ``vars``, then its parent's, up to the root

The chain walked in step 3 starts at the template the request originated
from, not at the template that defined the block.

Example:
    >>> lookup = VariableLookup(Source.of({"a": 1}), Source.of({"a": 2, "b": 2}), None)
    >>> lookup("a"), lookup("b"), lookup("c")
    (1, 2, None)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lineage.template.chain import walk_chain
from lineage.template.sources import Source

if TYPE_CHECKING:
    from lineage._types import VarsScope
    from lineage.template.core import Template


class VariableLookup:
    """Callable ``name -> value | None`` handed to blocks as ``vars``."""

    __slots__ = ("_detect_cycles", "_globals", "_local", "_scope", "_template")

    def __init__(
        self,
        local: Source,
        global_vars: Source,
        template: Template | None,
        scope: VarsScope | None = None,
        *,
        detect_cycles: bool = False,
    ) -> None:
        self._local = local
        self._globals = global_vars
        self._template = template
        self._scope = scope
        self._detect_cycles = detect_cycles

    def __call__(self, name: str) -> Any:
        value = self._local.lookup(name)
        if value is None:
            value = self._globals.lookup(name)
        if value is None:
            value = walk_chain(
                self._template,
                lambda tpl: tpl.get_var(name, self._scope),
                detect_cycles=self._detect_cycles,
            )
        return value

    def get(self, name: str, default: Any = None) -> Any:
        value = self(name)
        return default if value is None else value

    def __repr__(self) -> str:
        return f"<VariableLookup local={self._local!r} template={self._template!r}>"
