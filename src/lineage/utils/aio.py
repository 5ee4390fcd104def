"""Helpers for code that accepts both sync and async callables."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a render coroutine to completion from synchronous code.

    Raises:
        RuntimeError: If called while an event loop is already running in
            this thread (use the async API there instead)
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    coro.close()
    raise RuntimeError("render_sync() cannot be called from a running event loop; await render()")
