"""Shared type definitions for lineage."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, TypeAlias

if TYPE_CHECKING:
    from lineage.hooks import HookSet
    from lineage.template.core import Template
    from lineage.template.local_context import LocalContext
    from lineage.variables import VariableLookup


# Anything accepted where names are looked up: a static mapping, a resolver
# callable, or None for "always None".
VarsSource: TypeAlias = Mapping[str, Any] | Callable[..., Any] | None

MaybeAwaitable: TypeAlias = str | Awaitable[str]


class BlockFunction(Protocol):
    """Signature of a block: ``(vars, local, hooks) -> str``, sync or async."""

    def __call__(
        self,
        vars: VariableLookup,
        local: LocalContext,
        hooks: HookSet,
        /,
    ) -> MaybeAwaitable: ...


class VarsScope(NamedTuple):
    """Context passed to template ``vars`` resolvers alongside the name."""

    block_name: str
    lang: str
    local: LocalContext
    hooks: HookSet
    starting_template: Template
    current_template: Template


class HookArgs(NamedTuple):
    """Trailing arguments every lifecycle hook receives, in call order."""

    lang: str
    block_name: str
    current_template: Template
    vars: VariableLookup
    local: LocalContext
    hooks: HookSet
