""" Implements purescript-like Array type in Python."""
from __future__ import annotations
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, TypeVar, Self

from .functor import Functor

B = TypeVar('B')

@dataclass(frozen=True)
class Array[A](Functor[A]):
    """
    Represents an immutable array.
    Optics treat it as a sequence: updates return a new Array whose
    untouched elements are the very same objects.
    """
    a: tuple[A, ...]

    def __iter__(self):
        """Iterates over the elements of the Array."""
        return iter(self.a)

    def __add__(self: "Array[A]", other: "Array[A]") -> "Array[A]":
        """Overloads + operator to concatenate two Arrays."""
        return self.append(other)

    def __len__(self):
        return len(self.a)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Array(self.a[index])
        return self.a[index]

    def append(self: "Array[A]", other: "Array[A]") -> "Array[A]":
        return Array(self.a + other.a)

    def update_at(self: Self, index: int, x: A) -> Self:
        """Returns a new Array with the element at index replaced by x."""
        if not -len(self.a) <= index < len(self.a):
            raise IndexError("Array index out of range")
        index %= len(self.a)
        return self.__class__(self.a[:index] + (x,) + self.a[index + 1:])

    @classmethod
    def cons(cls, x: B, ar: "Array[B]") -> "Array[B]":
        """Prepends an element to the Array."""
        return Array((x,) + ar.a)

    @classmethod
    def snoc(cls, ar: Self, x: A) -> Self:
        """Appends an element to the Array."""
        return cls(ar.a + (x,))

    @classmethod
    def make(cls, a: Iterable[A]) -> 'Array[A]':
        """Creates a new instance of Array with the given elements."""
        return cls(tuple(a))

    def __rand__(self, other: Callable[[A], B]) -> 'Array[B]':
        """Defines the right-hand side of the map operation."""
        return self.map(other)

    def map(self, f: Callable[[A], B]) -> 'Array[B]':
        return Array(tuple(map(f, self.a)))

    def __repr__(self):
        """String representation of the Array."""
        return f"[{', '.join(map(repr, self.a))}]"

    def __contains__(self, item: A) -> bool:
        """
        Membership test: allows "item in my_array".
        """
        return item in self.a

    def foldl(self, f: Callable[[B, A], B], acc: B) -> B:
        """
        Left fold over the Array.
        Applies the function f to each element and an accumulator.
        """
        return reduce(f, self.a, acc)

    def filter(self, predicate: Callable[[A], bool]) -> Array[A]:
        """
        Filters the Array based on a predicate function.
        Returns a new Array containing only elements that satisfy the predicate.
        """
        return Array(tuple(filter(predicate, self.a)))

    def __eq__(self, other) -> bool:
        """Equality check for Array."""
        return isinstance(other, Array) and self.a == other.a
