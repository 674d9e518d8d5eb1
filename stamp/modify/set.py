"""An insertion-ordered set that also holds unhashable values."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Any


def _key(item: Any) -> Hashable:
    """Build a hashable identity for item that distinguishes value types."""
    if isinstance(item, dict):
        return ("dict", frozenset((k, _key(v)) for k, v in item.items()))
    if isinstance(item, (list, tuple)):
        return (type(item).__name__, tuple(_key(v) for v in item))
    if isinstance(item, (bytes, bytearray)):
        return ("bytes", bytes(item))
    if isinstance(item, Hashable):
        try:
            hash(item)
        except TypeError:
            pass
        else:
            return (type(item), item)
    return ("repr", type(item), repr(item))


class OrderedSet:
    """A set of arbitrary values that remembers the order they were added."""

    def __init__(self, *args: Any) -> None:
        self._items: dict[Hashable, Any] = {}
        self.add(*args)

    def add(self, *args: Any) -> None:
        """Add items; an equal item already present keeps its position."""
        for item in args:
            self._items[_key(item)] = item

    def __contains__(self, item: Any) -> bool:
        return _key(item) in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def to_list(self) -> list[Any]:
        """Return the items in the order they were added."""
        return list(self._items.values())