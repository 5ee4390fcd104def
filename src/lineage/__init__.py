"""lineage — block-based template inheritance rendering engine.

Templates are chains of nodes linked by ``parent``. Each node defines named
blocks (plain Python callables), optional variable defaults and optional
lifecycle hooks. Rendering resolves blocks nearest-first along the chain,
runs them with layered variables, and assembles the output string.

Quickstart:
    >>> from lineage import Template, render_sync
    >>> base = Template(
    ...     block={
    ...         "main": lambda vars, local, hooks: hooks.block("greeting"),
    ...         "greeting": lambda vars, local, hooks: f"Hello, {vars('name')}!",
    ...     },
    ... )
    >>> render_sync(base, {"name": "World"})
    'Hello, World!'

Inheritance:
    >>> page = Template(
    ...     parent=base,
    ...     block={"greeting": lambda vars, local, hooks: f"Hi, {vars('name')}."},
    ... )
    >>> render_sync(page, {"name": "World"})
    'Hi, World.'

Architecture:
render() → Environment → Renderer (per render) → render_block state machine
           ↳ RenderContext (block budget, ContextVar)
           ↳ resolve_block / VariableLookup / dispatch (hooks)

Block functions receive ``(vars, local, hooks)``:

- ``vars(name)``: local → render variables → template ``vars`` chain
- ``local``: index, lang, ``parent()``, ``block()``, ``iterate()``, ``trans()``
- ``hooks``: the render's hooks plus ``block()``, ``iterate()``, ``render()``

Lifecycle hooks: ``pre_call``, ``get_cache``, ``pre_render``,
``post_render``, ``set_cache``, ``post_call``, ``on_error``, ``trans``.

"""

from collections.abc import Mapping
from typing import Any

from lineage.environment import (
    BlockLimitError,
    BlockNotFoundError,
    BlockRenderError,
    BlockReturnTypeError,
    Environment,
    ErrorCode,
    TemplateCycleError,
    TemplateError,
    TemplateRuntimeError,
)
from lineage.hooks import HookSet
from lineage.render_context import (
    RenderContext,
    get_render_context,
    get_render_context_required,
)
from lineage.template import LocalContext, LocalScope, Source, Template
from lineage.variables import VariableLookup

__version__ = "0.1.0"

_default_env = Environment()


async def render(
    template: Template,
    variables: Any = None,
    lang: str = "",
    hooks: Mapping[str, Any] | None = None,
    entrypoint: str = "main",
) -> str:
    """Render ``template`` with the default environment.

    See ``Environment.render`` for the arguments.
    """
    return await _default_env.render(template, variables, lang, hooks, entrypoint)


def render_sync(
    template: Template,
    variables: Any = None,
    lang: str = "",
    hooks: Mapping[str, Any] | None = None,
    entrypoint: str = "main",
) -> str:
    """Synchronous ``render()`` for code without a running event loop."""
    return _default_env.render_sync(template, variables, lang, hooks, entrypoint)


__all__ = [
    "BlockLimitError",
    "BlockNotFoundError",
    "BlockRenderError",
    "BlockReturnTypeError",
    "Environment",
    "ErrorCode",
    "HookSet",
    "LocalContext",
    "LocalScope",
    "RenderContext",
    "Source",
    "Template",
    "TemplateCycleError",
    "TemplateError",
    "TemplateRuntimeError",
    "VariableLookup",
    "__version__",
    "get_render_context",
    "get_render_context_required",
    "render",
    "render_sync",
]
