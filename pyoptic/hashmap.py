"""Implements a purescript-like HashMap type in Python."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, ItemsView, KeysView, TypeVar, Self

from .functor import Functor, map  # pylint: disable=redefined-builtin

K = TypeVar("K")
A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class HashMap[K, A](Functor[A]):
    """
    Represents an immutable HashMap backed by a Python dict.
    Functor maps over values while preserving keys.
    """

    data: dict[K, A]

    def __iter__(self) -> Iterator[K]:
        """Iterates over keys."""
        return iter(self.data)

    def __len__(self) -> int:
        """Returns the number of entries in the HashMap."""
        return len(self.data)

    def __getitem__(self, key: K) -> A:
        """Returns the value associated with the given key."""
        return self.data[key]

    def __contains__(self, key: K) -> bool:
        """Returns True if the key exists in the HashMap."""
        return key in self.data

    def items(self) -> ItemsView[K, A]:
        """Returns a view of the HashMap's items."""
        return self.data.items()

    def keys(self) -> KeysView[K]:
        """Returns a view of the HashMap's keys."""
        return self.data.keys()

    @classmethod
    def make(cls, data: dict[K, A]) -> HashMap[K, A]:
        """Creates a new instance of HashMap with a copy of the dict."""
        return cls(dict(data))

    def set(self: Self, key: K, value: A) -> Self:
        """Returns a new HashMap with the key set to the given value."""
        new_data = dict(self.data)
        new_data[key] = value
        return self.__class__(new_data)

    def delete(self: Self, key: K) -> Self:
        """Returns a new HashMap with the key removed (if present)."""
        if key not in self.data:
            return self
        new_data = dict(self.data)
        del new_data[key]
        return self.__class__(new_data)

    def __rand__(self, other: Callable[[A], B]) -> HashMap[K, B]:
        """Defines the right-hand side of the map operation."""
        return map(other, self)

    def map(self: Self, f: Callable[[A], B]) -> HashMap[K, B]:
        """Maps a function over values while preserving keys."""
        return HashMap({k: f(v) for k, v in self.data.items()})

    def __repr__(self) -> str:
        """String representation of the HashMap."""
        return f"HashMap({self.data})"

    def __eq__(self, other) -> bool:
        """Equality check for HashMap."""
        return isinstance(other, HashMap) and self.data == other.data
