"""Context sources that templates read their data from.

A template never talks to the caller's object directly. It asks a
ContextSource whether a name can be answered and, if so, for its value.
Two sources exist: ObjectContext forwards to a real object or mapping,
NullContext answers every name with None so optional data never breaks a
render.
"""
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterator, Optional


class ContextSource(ABC):
    """Capability interface for anything a template can be rendered against."""

    # True when responds_to() never says no
    answers_everything = False

    @abstractmethod
    def responds_to(self, name: str) -> bool:
        """Return True when the source can answer the given name."""
        pass

    @abstractmethod
    def lookup(self, name: str) -> Optional[Any]:
        """Return the value for name.

        Raises:
            KeyError: The source cannot answer the name
        """
        pass

    def names(self) -> Iterator[str]:
        """Iterate the names the source knows about up front."""
        return iter(())


class ObjectContext(ContextSource):
    """Forwards lookups to a wrapped object or mapping.

    Mappings answer their keys, any other object answers its public
    attributes (methods included, returned bound and uncalled).
    """

    def __init__(self, obj: Any):
        self._obj = obj

    @property
    def obj(self) -> Any:
        return self._obj

    def responds_to(self, name: str) -> bool:
        if name.startswith("_"):
            return False
        if isinstance(self._obj, Mapping):
            return name in self._obj
        return hasattr(self._obj, name)

    def lookup(self, name: str) -> Optional[Any]:
        if not self.responds_to(name):
            raise KeyError(name)
        if isinstance(self._obj, Mapping):
            return self._obj[name]
        return getattr(self._obj, name)

    def names(self) -> Iterator[str]:
        if isinstance(self._obj, Mapping):
            keys = self._obj.keys()
        else:
            keys = dir(self._obj)
        return (k for k in keys if isinstance(k, str) and not k.startswith("_"))

    def __repr__(self) -> str:
        return f"ObjectContext({self._obj!r})"


class NullContext(ContextSource):
    """Stand-in context that answers every query with None."""

    __slots__ = ()

    answers_everything = True

    def responds_to(self, name: str) -> bool:
        return True

    def lookup(self, name: str) -> Optional[Any]:
        return None

    def __getattr__(self, name: str) -> None:
        # Dunder lookups keep their normal protocol so copy/pickle still work
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return None

    def __repr__(self) -> str:
        return "NullContext()"


def wrap_context(obj: Any = None) -> ContextSource:
    """Select the context source for obj.

    Args:
        obj: Data object, mapping, existing ContextSource, or None

    Returns:
        NullContext for None, obj itself if it already is a source,
        otherwise an ObjectContext around obj
    """
    if obj is None:
        return NullContext()
    if isinstance(obj, ContextSource):
        return obj
    return ObjectContext(obj)
