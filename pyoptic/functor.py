""" Abstract base class for Functor """
from abc import ABC, abstractmethod
from typing import Callable, Self, TypeVar

# pylint:disable=C0105
A = TypeVar('A', covariant=True)
B = TypeVar('B', covariant=True)

class Functor[A](ABC):
    """Base class for Functor instances.

    Containers visited by optics (Maybe, Either, Array, HashMap) are
    functors: a sub-class overrides the map method ensuring that the
    functor laws hold, and `f & container` maps f over it.
    """

    @abstractmethod
    def __rand__(self, other):
        """Defines the right-hand side of the map operation."""
        return map(other, self)


    @abstractmethod
    def map(self: Self, f: Callable[[A], B]) -> "Functor[B]":
        """Applies a function to the value inside the Functor."""

def map(fn, f):  # pylint:disable=W0622
    """Applies the function 'fn' to the value inside the functor
    'f' using its map method."""
    return f.map(fn)
