"""Inheritance chain traversal and block resolution.

The chain is walked root-ward from a starting template via ``parent``.
Resolution is first-hit: once a template defines a block, its ancestors are
not consulted for that lookup.

Cycle detection is opt-in. Without it a looping chain is only stopped by the
render's block budget (or never, for a walk that finds nothing).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from lineage.template.core import Template

logger = logging.getLogger(__name__)

T = TypeVar("T")


def iter_chain(template: Template | None, *, detect_cycles: bool = False) -> Iterator[Template]:
    """Yield ``template`` and each of its ancestors, nearest first.

    Raises:
        TemplateCycleError: With ``detect_cycles``, when a template repeats
    """
    seen: set[int] | None = set() if detect_cycles else None
    while template is not None:
        if seen is not None:
            if id(template) in seen:
                from lineage.environment.exceptions import TemplateCycleError

                raise TemplateCycleError(template)
            seen.add(id(template))
        yield template
        template = template.parent


def walk_chain(
    template: Template | None,
    callback: Callable[[Template], T | None],
    *,
    detect_cycles: bool = False,
) -> T | None:
    """Apply ``callback`` up the chain; return the first non-``None`` result."""
    for node in iter_chain(template, detect_cycles=detect_cycles):
        result = callback(node)
        if result is not None:
            return result
    return None


def resolve_block(
    block_name: str,
    template: Template | None,
    *,
    detect_cycles: bool = False,
) -> tuple[Any, Template] | tuple[None, None]:
    """Find the first template from ``template`` upward that defines ``block_name``.

    Returns:
        ``(block, defining_template)``, or ``(None, None)`` if no template
        defines it. ``block`` is whatever the template defined; callers check
        that it is callable.
    """
    found = walk_chain(
        template,
        lambda tpl: _defined_block(tpl, block_name),
        detect_cycles=detect_cycles,
    )
    if found is None:
        logger.debug(f"Block {block_name!r} not defined in chain of {template!r}")
        return None, None
    return found


def _defined_block(template: Template, block_name: str) -> tuple[Any, Template] | None:
    block = template.get_block(block_name)
    return (block, template) if block is not None else None
