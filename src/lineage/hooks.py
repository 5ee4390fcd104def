"""Lifecycle hooks: the per-render hook set and the hook dispatcher.

Hook precedence for a given name:

1. the render's ``HookSet`` (hooks passed to ``render()``)
2. ``fnc`` hooks on the template chain, nearest template first
3. the caller-supplied fallback

A hook that returns ``None`` means "not handled" and the next candidate is
tried. Hooks may be plain functions or coroutines.

Lifecycle hooks receive the trailing context arguments
``(lang, block_name, current_template, vars, local, hooks)``:

    ```python
    def get_cache(lang, block_name, *_):
        return cache.get((lang, block_name))

    def set_cache(rendered, lang, block_name, *_):
        cache[(lang, block_name)] = rendered
    ```

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lineage.template.chain import iter_chain
from lineage.utils.aio import resolve

if TYPE_CHECKING:
    from lineage.template.core import Template

TRANS = "trans"
ON_ERROR = "on_error"
GET_CACHE = "get_cache"
SET_CACHE = "set_cache"
PRE_RENDER = "pre_render"
POST_RENDER = "post_render"
PRE_CALL = "pre_call"
POST_CALL = "post_call"

# Names the engine always supplies itself; caller values are replaced.
ENGINE_HOOKS: frozenset[str] = frozenset({"block", "iterate", "render"})


class HookSet(Mapping[str, Any]):
    """Immutable per-render mapping of hook name → function.

    Built once at render entry from the caller's hooks plus the engine's
    ``block``/``iterate``/``render`` continuations. The caller's mapping is
    copied, never modified. Hooks are reachable both as items and as
    attributes, so block code can write ``hooks.block("nav")``.

    Example:
        >>> hooks = HookSet({"greet": lambda: "hi"}, block=print)
        >>> hooks.greet()
        'hi'
        >>> hooks["block"] is print
        True

    """

    __slots__ = ("_hooks",)

    def __init__(self, hooks: Mapping[str, Any] | None = None, **engine: Any) -> None:
        merged = dict(hooks or {})
        merged.update(engine)
        self._hooks = MappingProxyType(merged)

    def __getitem__(self, name: str) -> Any:
        return self._hooks[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._hooks[name]
        except KeyError:
            raise AttributeError(f"no hook named {name!r}") from None

    def user_hooks(self) -> dict[str, Any]:
        """The hooks without the engine continuations."""
        return {k: v for k, v in self._hooks.items() if k not in ENGINE_HOOKS}

    def __repr__(self) -> str:
        return f"HookSet({sorted(self._hooks)})"


async def call_hook(hook: Any, args: tuple[Any, ...]) -> Any:
    """Invoke ``hook`` with ``args`` if callable; ``None`` otherwise."""
    if not callable(hook):
        return None
    return await resolve(hook(*args))


async def dispatch(
    name: str,
    args: tuple[Any, ...],
    hooks: Mapping[str, Any],
    template: Template | None,
    fallback: Callable[..., Any] | Any = None,
    *,
    detect_cycles: bool = False,
) -> Any:
    """Call the hook ``name`` with the highest precedence that handles it.

    Args:
        name: Hook name
        args: Positional arguments for the hook
        hooks: The render's hook set
        template: Where to start looking for ``fnc`` hooks on the chain
        fallback: Called with ``args`` if callable, else returned as is,
            when no hook returns a value

    Returns:
        The first non-``None`` hook result, or the fallback's value
    """
    result = await call_hook(hooks.get(name), args)
    if result is not None:
        return result

    for tpl in iter_chain(template, detect_cycles=detect_cycles):
        result = await call_hook(tpl.get_hook(name), args)
        if result is not None:
            return result

    if callable(fallback):
        return await resolve(fallback(*args))
    return fallback
