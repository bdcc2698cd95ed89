"""Insertion-ordered one-to-many mapping used for vendor buckets and group indexes."""

from collections.abc import Callable, Hashable, Iterator
from typing import Generic, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MultiMap(Generic[K, V]):
    """Maps each key to an ordered list of values without duplicates.

    Keys keep the order they were first seen in, and so do the values of a
    key. Two values are duplicates when `identity(value)` is equal; by default
    the value itself is the identity.
    """

    def __init__(self, identity: Optional[Callable[[V], Hashable]] = None) -> None:
        self._identity = identity or (lambda value: value)
        self._items: dict[K, dict[Hashable, V]] = {}

    def add(self, key: K, value: V) -> bool:
        """Append value under key. Returns False if it was already present."""
        values = self._items.setdefault(key, {})
        identity = self._identity(value)
        if identity in values:
            return False
        values[identity] = value
        return True

    def get(self, key: K) -> list[V]:
        values = self._items.get(key)
        return list(values.values()) if values is not None else []

    def keys(self) -> list[K]:
        return list(self._items)

    def items(self) -> Iterator[tuple[K, list[V]]]:
        for key, values in self._items.items():
            yield key, list(values.values())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
