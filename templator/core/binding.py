"""Read-only evaluation environment handed to the template engine."""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Optional

from templator.core.context import ContextSource


class Binding(Mapping):
    """Names visible to a template.

    Resolution order is helpers, then the context source, then the
    engine defaults (``range``, ``dict``, ``namespace`` and friends).
    A source that answers every name (NullContext) comes after the
    defaults so it cannot hide them.
    Nothing from the caller's own scope leaks in, and the binding cannot
    be modified once built.
    """

    def __init__(
        self,
        context: ContextSource,
        helpers: Dict[str, Callable[..., Any]],
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self._context = context
        self._helpers = MappingProxyType(dict(helpers))
        self._defaults = MappingProxyType(dict(defaults or {}))

    @property
    def context(self) -> ContextSource:
        return self._context

    @property
    def helpers(self) -> Mapping:
        return self._helpers

    def __getitem__(self, name: str) -> Any:
        if name in self._helpers:
            return self._helpers[name]
        if not self._context.answers_everything and self._context.responds_to(name):
            return self._context.lookup(name)
        if name in self._defaults:
            return self._defaults[name]
        if self._context.responds_to(name):
            return self._context.lookup(name)
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return (
            name in self._helpers
            or self._context.responds_to(name)
            or name in self._defaults
        )

    def __iter__(self) -> Iterator[str]:
        seen = set()
        for source in (self._helpers, self._context.names(), self._defaults):
            for name in source:
                if name not in seen:
                    seen.add(name)
                    yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Binding(context={self._context!r}, helpers={sorted(self._helpers)})"
