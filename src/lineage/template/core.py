"""Template node — one link in an inheritance chain.

A ``Template`` holds named blocks (render functions), optional variable
defaults and optional lifecycle hooks, plus a reference to its parent.
Nothing is parsed: blocks are plain Python callables.

Example:
    >>> base = Template(
    ...     name="base",
    ...     block={
    ...         "main": lambda vars, local, hooks: hooks.block("content"),
    ...         "content": lambda vars, local, hooks: "default content",
    ...     },
    ...     vars={"title": "Untitled"},
    ... )
    >>> page = Template(
    ...     name="page",
    ...     parent=base,
    ...     block={"content": lambda vars, local, hooks: f"<h1>{vars('title')}</h1>"},
    ... )

Rendering ``page`` starts at ``main`` (found on ``base``) and resolves
``content`` from ``page`` first. Templates are never mutated by the engine
and may be shared between renders.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from lineage.template.sources import Source

if TYPE_CHECKING:
    from lineage._types import BlockFunction, VarsScope


@dataclass(slots=True, eq=False)
class Template:
    """A node in a template inheritance chain.

    Attributes:
        block: Mapping of block name → block function, or a resolver
            ``(name) -> block | None``
        parent: Parent template, ``None`` for the root
        vars: Optional mapping of variable defaults, or a resolver
            ``(name, scope) -> value | None``. The resolver gets exactly two
            arguments: the context arrives as one ``VarsScope`` named tuple
            (``block_name``, ``lang``, ``local``, ``hooks``,
            ``starting_template``, ``current_template``), not as separate
            positional arguments. Unpack it with
            ``block_name, lang, *_ = scope`` or read its fields by name.
        fnc: Optional mapping of hook name → hook function
        name: Optional label for error messages and logs
    """

    block: Mapping[str, BlockFunction] | Callable[[str], BlockFunction | None]
    parent: Template | None = None
    vars: Mapping[str, Any] | Callable[..., Any] | None = None
    fnc: Mapping[str, Any] | None = None
    name: str | None = None

    _blocks: Source = field(init=False, repr=False)
    _vars: Source = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._blocks = Source.of(self.block)
        self._vars = Source.of(self.vars)

    def get_block(self, name: str) -> Any:
        """Return whatever this template defines for ``name`` (``None`` if nothing)."""
        return self._blocks.lookup(name)

    def get_var(self, name: str, scope: VarsScope) -> Any:
        return self._vars.lookup(name, scope)

    def get_hook(self, name: str) -> Callable[..., Any] | None:
        """Return the callable hook ``name`` from ``fnc``, ignoring non-callables."""
        if not self.fnc:
            return None
        hook = self.fnc.get(name)
        return hook if callable(hook) else None

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        parent = (self.parent.name or "...") if self.parent is not None else None
        return f"<Template {label} parent={parent}>"
