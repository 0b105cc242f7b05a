""" Implementation of Maybe in Python.

Maybe is the optional-value capability consumed by the optics: `some()`
focuses inside a Just, and every partial read reports its result as a Maybe.
"""
from abc import ABCMeta
from enum import Enum, EnumMeta
from dataclasses import dataclass
from typing import Callable, TypeVar

from .functor import Functor, map  # pylint:disable=redefined-builtin

A = TypeVar("A")
B = TypeVar("B")

type Maybe[A] = Just[A] | _Nothing


class NothingMaybeMeta(ABCMeta, EnumMeta):
    pass


class _Nothing(Functor, Enum, metaclass=NothingMaybeMeta):
    NOTHING = "Nothing"

    def __rand__(self, other: Callable[[A], B]) -> "_Nothing":
        return Nothing

    def map(self, f: Callable[[A], B]) -> "_Nothing":
        return Nothing

    def __rshift__(self, m: Callable[[A], "Maybe[B]"]) -> "_Nothing":
        return Nothing

    def _bind(self, m: Callable[[A], "Maybe[B]"]) -> "_Nothing":
        return Nothing

    def __repr__(self):
        """String representation of Nothing."""
        return "Nothing"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other) -> bool:
        """Equality check for Nothing."""
        return isinstance(other, _Nothing)

    def __hash__(self) -> int:
        return hash(self.value)

# singleton instance
Nothing: _Nothing = _Nothing.NOTHING

@dataclass(frozen=True)
class Just[A](Functor[A]):
    a: A

    @classmethod
    def make(cls, value) -> 'Just':
        return Just(value)

    def map(self, f: Callable[[A], B]) -> "Just[B]":
        return self.make(f(self.a))

    def __rand__(self, other: Callable[[A], B]) -> "Just[B]":
        """Defines the right-hand side of the map operation."""
        return map(other, self)

    def __rshift__(self, m: Callable[[A], Maybe[B]]) -> Maybe[B]:
        """Chains computations by passing the value inside Just to function m."""
        return self._bind(m)

    def _bind(self, m: Callable[[A], Maybe[B]]) -> Maybe[B]:
        return m(self.a)

    def __repr__(self):
        """String representation of the Just."""
        return f"Just({self.a!r})"

    def __eq__(self, other) -> bool:
        """Equality check for Just."""
        return isinstance(other, Just) and self.a == other.a

    @classmethod
    def pure(cls, value: A) -> 'Just[A]':
        """Wraps a value in the Just context."""
        return cls(value)


def fromMaybe(default: A, m: Maybe[A]) -> A:  # pylint:disable=invalid-name
    """Extracts the value from a Maybe, or returns a default value."""
    match m:
        case Just(value):
            return value
        case _:
            return default

def is_just(m: object) -> bool:
    """True when m is a Just."""
    return isinstance(m, Just)

def from_optional(value: A | None) -> Maybe[A]:
    """Lifts a None-able value into Maybe."""
    return Nothing if value is None else Just(value)
