"""Tests for Environment configuration and render isolation."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, settings

from lineage import Environment, Template

from .helpers import text
from .strategies import iteration_items, separators


class TestEnvironmentConfig:
    def test_defaults(self, env: Environment) -> None:
        assert env.max_block_count == 1000
        assert env.entrypoint == "main"
        assert env.lang == ""
        assert dict(env.hooks) == {}
        assert env.detect_cycles is False

    def test_hooks_are_copied_and_read_only(self) -> None:
        defaults = {"trans": lambda *a: "t"}
        env = Environment(hooks=defaults)
        defaults["extra"] = "x"
        assert "extra" not in env.hooks
        with pytest.raises(TypeError):
            env.hooks["other"] = "y"  # type: ignore[index]

    def test_repr(self) -> None:
        assert "max_block_count=5" in repr(Environment(max_block_count=5))

    @pytest.mark.asyncio
    async def test_default_lang_and_entrypoint(self) -> None:
        env = Environment(lang="fi", entrypoint="page")
        tpl = Template(block={"page": lambda vars, local, hooks: local.lang})
        assert await env.render(tpl) == "fi"
        assert await env.render(tpl, lang="sv") == "sv"

    @pytest.mark.asyncio
    async def test_environment_hooks_sit_under_call_hooks(self) -> None:
        env = Environment(hooks={"greet": lambda: "env", "other": lambda: "env-other"})
        tpl = Template(
            block={"main": lambda vars, local, hooks: f"{hooks.greet()}/{hooks.other()}"}
        )
        assert await env.render(tpl) == "env/env-other"
        assert await env.render(tpl, hooks={"greet": lambda: "call"}) == "call/env-other"

    @pytest.mark.asyncio
    async def test_caller_hooks_are_not_mutated(self, env: Environment) -> None:
        hooks: dict[str, Any] = {"block": "mine"}
        tpl = Template(block={"main": lambda vars, local, hooks: hooks.block("x"), "x": text("x")})
        assert await env.render(tpl, hooks=hooks) == "x"
        assert hooks == {"block": "mine"}

    @pytest.mark.asyncio
    async def test_shared_template_across_concurrent_renders(self, env: Environment) -> None:
        import asyncio

        tpl = Template(block={"main": lambda vars, local, hooks: str(vars("n"))})
        results = await asyncio.gather(*(env.render(tpl, {"n": n}) for n in range(10)))
        assert results == [str(n) for n in range(10)]


class TestSubRenderIsolation:
    @pytest.mark.asyncio
    async def test_on_error_and_cache_do_not_leak(self, env: Environment) -> None:
        cache_calls: list[str] = []

        def get_cache(lang: str, block_name: str, *_: Any) -> None:
            cache_calls.append(block_name)

        def failing(vars: Any, local: Any, hooks: Any) -> str:
            raise ValueError("inner failure")

        inner = Template(block={"main": failing}, name="inner")

        async def main(vars: Any, local: Any, hooks: Any) -> str:
            return await hooks.render(inner)

        outer = Template(block={"main": main}, name="outer")
        hooks = {"get_cache": get_cache, "on_error": lambda e, lang, block_name, *_: f"[{e}]"}

        result = await env.render(outer, hooks=hooks)
        # the sub-render has no on_error of its own, so its failure reaches
        # the outer block, which handles it at its own boundary
        assert result == "[main has thrown: inner failure]"
        assert cache_calls == ["main"]

    @pytest.mark.asyncio
    async def test_hooks_passed_explicitly_apply(self, env: Environment) -> None:
        inner = Template(block={"main": lambda vars, local, hooks: hooks.tag()})

        async def main(vars: Any, local: Any, hooks: Any) -> str:
            return await hooks.render(inner, hooks=hooks.user_hooks())

        outer = Template(block={"main": main})
        assert await env.render(outer, hooks={"tag": lambda: "passed"}) == "passed"


class TestIterateProperties:
    @given(items=iteration_items, separator=separators)
    @settings(max_examples=50, deadline=None)
    def test_index_order_matches_input(self, items: list[dict[str, int]], separator: str) -> None:
        env = Environment(max_block_count=len(items) + 1)
        tpl = Template(
            block={
                "main": lambda vars, local, hooks: hooks.iterate("item", items, separator),
                "item": lambda vars, local, hooks: f"{local.index}",
            }
        )
        expected = separator.join(str(i) for i in range(len(items)))
        assert env.render_sync(tpl) == expected
