"""
Implementation of Either.

`get_or_modify` answers with an Either: Right holds the focus,
Left holds the original whole when there is nothing to focus on.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, TypeVar, Callable

from .functor import Functor, map # pylint:disable=redefined-builtin

L = TypeVar("L")
R = TypeVar("R")
S = TypeVar("S")
T = TypeVar("T")

type Either[L,R] = 'Left[L]' | 'Right[R]'

@dataclass(frozen=True)
class Left[L](Functor):
    """
    Represents a left value in an Either type.
    """
    l: L

    @classmethod
    def make(cls, value) -> Left[L]:
        """Creates a new instance of Left."""
        return cls(value)

    def map(self, f: Callable[[R], S]) -> Left[L]:
        return self

    def __rshift__(self, m: Callable[[R], Either[L, S]]) -> Left[L]:
        return self

    def _bind(self, m: Callable[[R], Either[L, S]]) -> Left[L]:  # pylint: disable=unused-argument
        return self

    def __rand__(self, other: Callable[[R], S]) -> Left[L]:
        return map(other, self)

    def __repr__(self):
        """String representation of the Left."""
        return f"Left({self.l!r})"

    def __eq__(self, other) -> bool:
        """Equality check for Left."""
        return isinstance(other, Left) and self.l == other.l

@dataclass(frozen=True)
class Right[R](Functor[R]):
    """
    Represents a right value in an Either type.
    """
    r: R

    @classmethod
    def make(cls, value) -> Right:
        """Creates a new instance of Right."""
        return cls(value)

    def map(self, f: Callable[[R], S]) -> Right[S]:
        return self.make(f(self.r))

    def __rshift__(self, m: Callable[[R], Either[L, S]]) -> Either[L, S]:
        """
        Chains computations by passing the value inside Right to function m.
        """
        return self._bind(m)

    def _bind(self, m: Callable[[R], Either[L, S]]) -> Either[L, S]:
        return m(self.r)

    @classmethod
    def pure(cls, value: R) -> Either[Any, R]:
        """
        Wraps a value in the Right context.
        """
        _result: Either[Any, R] = Right.make(value)
        return _result

    def __rand__(self, other: Callable[[R], S]) -> Right[S]:
        return map(other, self)

    def __repr__(self):
        """String representation of the Right."""
        return f"Right({self.r!r})"

    def __eq__(self, other) -> bool:
        """Equality check for Right."""
        return isinstance(other, Right) and self.r == other.r


def either(on_left: Callable[[L], T], on_right: Callable[[R], T],
           e: Either[L, R]) -> T:
    """Folds an Either into a single value."""
    match e:
        case Right(r):
            return on_right(r)
        case Left(l):
            return on_left(l)
    raise TypeError(f"Expected Left or Right, got {type(e).__name__}")

def is_right(e: object) -> bool:
    """True when e is a Right."""
    return isinstance(e, Right)
