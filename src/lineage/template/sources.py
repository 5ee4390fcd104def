"""Uniform lookup over "mapping or resolver function" values.

Templates, render calls and local scopes all accept either a static mapping
or a resolver callable wherever names are looked up (``block``, ``vars``,
render variables, iteration items). ``Source`` normalizes both into a tagged
variant with a single ``lookup()`` accessor, so callers never probe types.

Example:
    >>> Source.of({"title": "Home"}).lookup("title")
    'Home'
    >>> Source.of(lambda name: name.upper()).lookup("title")
    'TITLE'
    >>> Source.of(None).lookup("title") is None
    True

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any


class SourceKind(Enum):
    EMPTY = "empty"
    STATIC = "static"
    RESOLVER = "resolver"


class Source:
    """A normalized name → value source.

    Static sources answer ``mapping.get(name)``; resolver sources forward
    ``name`` plus any context arguments to the wrapped callable. Both return
    ``None`` for "not found".
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, kind: SourceKind, value: Any = None) -> None:
        self._kind = kind
        self._value = value

    @classmethod
    def of(cls, value: Source | Mapping[str, Any] | Callable[..., Any] | None) -> Source:
        """Normalize a mapping, callable, ``Source`` or ``None``.

        Raises:
            TypeError: If ``value`` is none of the accepted shapes
        """
        if value is None:
            return EMPTY
        if isinstance(value, Source):
            return value
        if isinstance(value, Mapping):
            return cls(SourceKind.STATIC, value)
        if callable(value):
            return cls(SourceKind.RESOLVER, value)
        raise TypeError(
            f"expected a mapping or a resolver function, got {type(value).__name__}"
        )

    @property
    def kind(self) -> SourceKind:
        return self._kind

    @property
    def value(self) -> Any:
        """The wrapped mapping or callable (``None`` for the empty source)."""
        return self._value

    def lookup(self, name: str, *context: Any) -> Any:
        if self._kind is SourceKind.STATIC:
            return self._value.get(name)
        if self._kind is SourceKind.RESOLVER:
            return self._value(name, *context)
        return None

    def __call__(self, name: str) -> Any:
        return self.lookup(name)

    def __bool__(self) -> bool:
        return self._kind is not SourceKind.EMPTY

    def __repr__(self) -> str:
        return f"Source({self._kind.value}, {self._value!r})"


EMPTY = Source(SourceKind.EMPTY)
