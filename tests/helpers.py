"""Template builders and call recorders shared by lineage tests."""

from __future__ import annotations

from typing import Any

from lineage import Template


def text(value: str):
    """Block function that always renders ``value``."""

    def block(vars: Any, local: Any, hooks: Any) -> str:
        return value

    return block


def chain(*levels: dict[str, Any]) -> Template:
    """Build a chain from root-most to leaf-most ``Template`` keyword dicts.

    Returns the leaf (the template a render starts from).
    """
    parent = None
    for level in levels:
        parent = Template(parent=parent, **level)
    assert parent is not None
    return parent


class CallLog:
    """Records hook and block invocations in order."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def hook(self, name: str, result: Any = None):
        def record(*args: Any) -> Any:
            self.calls.append(name)
            return result

        return record

    def block(self, name: str, value: str):
        def render(vars: Any, local: Any, hooks: Any) -> str:
            self.calls.append(name)
            return value

        return render

    def __contains__(self, name: str) -> bool:
        return name in self.calls
