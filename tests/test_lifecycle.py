"""Lifecycle hook ordering and cache semantics."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from lineage import Template, render

from .helpers import CallLog


def _cache_hooks(log: CallLog, store: dict[tuple[str, str], str]) -> dict[str, Any]:
    async def get_cache(lang: str, block_name: str, *_: Any) -> str | None:
        log.calls.append("get_cache")
        await asyncio.sleep(0)
        return store.get((lang, block_name))

    def set_cache(rendered: str, lang: str, block_name: str, *_: Any) -> None:
        log.calls.append("set_cache")
        store[(lang, block_name)] = rendered

    async def pre_render(*_: Any) -> None:
        log.calls.append("pre_render")
        await asyncio.sleep(0)

    async def pre_call(*_: Any) -> None:
        log.calls.append("pre_call")
        await asyncio.sleep(0)

    return {
        "get_cache": get_cache,
        "set_cache": set_cache,
        "pre_render": pre_render,
        "post_render": log.hook("post_render"),
        "pre_call": pre_call,
        "post_call": log.hook("post_call"),
    }


def _slow_main(log: CallLog):
    async def main(vars: Any, local: Any, hooks: Any) -> str:
        log.calls.append("render")
        await asyncio.sleep(0)
        return "main"

    return main


class TestLifecycleOrder:
    @pytest.mark.asyncio
    async def test_cache_miss_runs_every_step_in_order(self) -> None:
        log = CallLog()
        tpl = Template(block={"main": _slow_main(log)})
        assert await render(tpl, {}, "en", _cache_hooks(log, {})) == "main"
        assert log.calls == [
            "pre_call",
            "get_cache",
            "pre_render",
            "render",
            "post_render",
            "set_cache",
            "post_call",
        ]

    @pytest.mark.asyncio
    async def test_cache_hit_skips_render_steps(self) -> None:
        log = CallLog()
        store: dict[tuple[str, str], str] = {}
        tpl = Template(block={"main": _slow_main(log)})
        hooks = _cache_hooks(log, store)

        assert await render(tpl, {}, "en", hooks) == "main"
        log.calls.clear()
        assert await render(tpl, {}, "en", hooks) == "main"
        assert log.calls == ["pre_call", "get_cache", "post_call"]

    @pytest.mark.asyncio
    async def test_cached_value_is_returned_verbatim(self) -> None:
        log = CallLog()
        tpl = Template(block={"main": _slow_main(log)})
        hooks = {"get_cache": lambda *_: "from cache"}
        assert await render(tpl, hooks=hooks) == "from cache"
        assert "render" not in log

    @pytest.mark.asyncio
    async def test_cache_is_per_block_and_lang(self) -> None:
        log = CallLog()
        store: dict[tuple[str, str], str] = {("de", "main"): "cached-de"}
        tpl = Template(block={"main": _slow_main(log)})
        hooks = _cache_hooks(log, store)
        assert await render(tpl, {}, "en", hooks) == "main"
        assert await render(tpl, {}, "de", hooks) == "cached-de"
        assert store[("en", "main")] == "main"

    @pytest.mark.asyncio
    async def test_hooks_from_template_chain(self) -> None:
        log = CallLog()
        store: dict[tuple[str, str], str] = {}
        hooks = _cache_hooks(log, store)
        parent = Template(
            block={},
            fnc={
                "set_cache": hooks["set_cache"],
                "pre_render": hooks["pre_render"],
                "pre_call": hooks["pre_call"],
                "get_cache": None,
                "post_render": None,
            },
        )
        tpl = Template(
            parent=parent,
            block={"main": _slow_main(log)},
            fnc={
                "get_cache": hooks["get_cache"],
                "post_render": hooks["post_render"],
                "post_call": None,
            },
        )
        call_hooks = {"post_call": hooks["post_call"]}

        assert await render(tpl, {}, "en", call_hooks) == "main"
        assert log.calls == [
            "pre_call",
            "get_cache",
            "pre_render",
            "render",
            "post_render",
            "set_cache",
            "post_call",
        ]
        log.calls.clear()
        assert await render(tpl, {}, "en", call_hooks) == "main"
        assert log.calls == ["pre_call", "get_cache", "post_call"]

    @pytest.mark.asyncio
    async def test_hooks_run_for_every_nested_block(self) -> None:
        blocks: list[str] = []

        def pre_call(lang: str, block_name: str, *_: Any) -> None:
            blocks.append(block_name)

        async def main(vars: Any, local: Any, hooks: Any) -> str:
            return await hooks.block("a") + await hooks.iterate("b", [{}, {}])

        tpl = Template(
            block={
                "main": main,
                "a": lambda vars, local, hooks: "a",
                "b": lambda vars, local, hooks: "b",
            }
        )
        assert await render(tpl, hooks={"pre_call": pre_call}) == "abb"
        assert blocks == ["main", "a", "b", "b"]

    @pytest.mark.asyncio
    async def test_set_cache_receives_rendered_string(self) -> None:
        received: list[tuple[str, str]] = []

        def set_cache(rendered: str, lang: str, block_name: str, *_: Any) -> None:
            received.append((block_name, rendered))

        tpl = Template(
            block={
                "main": lambda vars, local, hooks: hooks.block("inner"),
                "inner": lambda vars, local, hooks: "INNER",
            }
        )
        await render(tpl, hooks={"set_cache": set_cache})
        assert received == [("inner", "INNER"), ("main", "INNER")]
