"""
Optic kinds and the composition engine.

Every optic carries the same two functions whatever its kind:

    getter: S -> Either[S, A]      Right(focus), or Left(the whole) if absent
    setter: (A, S) -> Maybe[S]     Just(new whole), or Nothing if there is
                                   no position to write into

Isos and prisms also carry encoder: A -> S, the reverse direction.

The kind lives in the class (Optional, Lens, Prism, Iso) and composing two
optics yields the class named by join() of their kinds.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeVar, cast, overload

from .either import Either, Left, Right
from .errors import OpticError
from .maybe import Just, Maybe, Nothing, fromMaybe

S = TypeVar("S")
A = TypeVar("A")
B = TypeVar("B")


class Kind(Enum):
    """
    Shapes of optic, from most to least capable.
    """
    ISO = "Iso"
    LENS = "Lens"
    PRISM = "Prism"
    OPTIONAL = "Optional"


def join(x: Kind, y: Kind) -> Kind:
    """
    Kind of the composition of an optic of kind x with one of kind y.

    Iso is neutral, equal kinds are kept, and any other pair
    (a lens with a prism, or anything with an optional) is an optional.
    """
    match x, y:
        case Kind.ISO, _:
            return y
        case _, Kind.ISO:
            return x
        case _ if x is y:
            return x
        case _:
            return Kind.OPTIONAL


@dataclass(frozen=True)
class Optional[S, A]:  # pylint: disable=too-many-public-methods
    """
    A focus that may or may not exist within S.
    """
    getter: Callable[[S], Either[S, A]]
    setter: Callable[[A, S], Maybe[S]]

    kind: ClassVar[Kind] = Kind.OPTIONAL

    # --- reading and writing ---

    def get_or_modify(self, s: S) -> Either[S, A]:
        """Right(focus) if present, else Left(s)."""
        return self.getter(s)

    def get_option(self, s: S) -> Maybe[A]:
        """Just(focus) if present, else Nothing."""
        match self.getter(s):
            case Right(a):
                return Just(a)
            case _:
                return Nothing

    def replace_option(self, a: A, s: S) -> Maybe[S]:
        """Writes a at the focus; Nothing if there is no position to write."""
        return self.setter(a, s)

    def replace(self, a: A, s: S) -> S:
        """Writes a at the focus; s itself if there is no position to write."""
        return fromMaybe(s, self.setter(a, s))

    def modify_option(self, f: Callable[[A], A], s: S) -> Maybe[S]:
        """Applies f to the focus; Nothing if the focus is absent."""
        match self.getter(s):
            case Right(a):
                return self.setter(f(a), s)
            case _:
                return Nothing

    def modify(self, f: Callable[[A], A], s: S) -> S:
        """Applies f to the focus; s itself if the focus is absent."""
        return fromMaybe(s, self.modify_option(f, s))

    # --- composition ---

    @overload
    def compose(self: Iso[S, A], that: Iso[A, B]) -> Iso[S, B]: ...
    @overload
    def compose(self: Lens[S, A], that: Lens[A, B]) -> Lens[S, B]: ...
    @overload
    def compose(self: Prism[S, A], that: Prism[A, B]) -> Prism[S, B]: ...
    @overload
    def compose(self, that: Optional[A, B]) -> Optional[S, B]: ...

    def compose(self, that: Optional[A, B]) -> Optional[S, B]:
        """Focuses that within the focus of self."""
        return compose(self, that)

    # Shorthands: each is self.compose(primitive(...)).
    # pylint: disable=import-outside-toplevel

    def at(self, key: Any) -> Optional[S, Any]:
        """Field or slot named key of the focus."""
        from .primitives import at
        return self.compose(at(key))

    def index(self, i: int) -> Optional[S, Any]:
        """Element i of the focused sequence, if in bounds."""
        from .primitives import index
        return self.compose(index(i))

    def key(self, k: Any) -> Optional[S, Any]:
        """Entry k of the focused mapping, if present."""
        from .primitives import key
        return self.compose(key(k))

    def pick(self, *keys: Any) -> Optional[S, dict]:
        """Plain dict of the named fields of the focus."""
        from .primitives import pick
        return self.compose(pick(*keys))

    def omit(self, *keys: Any) -> Optional[S, dict]:
        """Plain dict of all but the named fields of the focus."""
        from .primitives import omit
        return self.compose(omit(*keys))

    def some(self) -> Optional[S, Any]:
        """Value inside a focused Just."""
        from .primitives import some
        return self.compose(some())

    def non_nullable(self) -> Optional[S, Any]:
        """The focus, unless it is None."""
        from .primitives import non_nullable
        return self.compose(non_nullable())

    def filter(self, predicate: Callable[[A], bool]) -> Optional[S, A]:
        """The focus, when it satisfies predicate."""
        from .primitives import filter as filter_
        return self.compose(filter_(predicate))

    def head(self) -> Optional[S, Any]:
        from .primitives import head
        return self.compose(head())

    def tail(self) -> Optional[S, Any]:
        from .primitives import tail
        return self.compose(tail())

    def find_first(self, predicate: Callable[[Any], bool]) -> Optional[S, Any]:
        from .primitives import find_first
        return self.compose(find_first(predicate))

    def cons(self) -> Optional[S, tuple[Any, Any]]:
        from .primitives import cons
        return self.compose(cons())

    def left(self) -> Optional[S, Any]:
        from .primitives import left
        return self.compose(left())

    def right(self) -> Optional[S, Any]:
        from .primitives import right
        return self.compose(right())

    def __repr__(self):
        return f"{self.kind.value}()"


@dataclass(frozen=True, repr=False)
class Lens[S, A](Optional[S, A]):
    """
    A focus that always exists within S.
    """
    kind: ClassVar[Kind] = Kind.LENS

    def get(self, s: S) -> A:
        """Reads the focus."""
        match self.getter(s):
            case Right(a):
                return a
        raise OpticError(f"{self.kind.value} getter found no focus in {s!r}")

    def at(self, key: Any) -> Lens[S, Any]:
        return cast(Lens[S, Any], super().at(key))

    def pick(self, *keys: Any) -> Lens[S, dict]:
        return cast(Lens[S, dict], super().pick(*keys))

    def omit(self, *keys: Any) -> Lens[S, dict]:
        return cast(Lens[S, dict], super().omit(*keys))


@dataclass(frozen=True, repr=False)
class Prism[S, A](Optional[S, A]):
    """
    A focus that may be absent from S, but from which a whole S can
    always be built back.
    """
    encoder: Callable[[A], S]

    kind: ClassVar[Kind] = Kind.PRISM

    def __post_init__(self):
        if not callable(self.encoder):
            raise OpticError(f"{self.kind.value} needs a callable encoder")

    def encode(self, a: A) -> S:
        """Builds a whole from a focus value."""
        return self.encoder(a)

    def some(self) -> Prism[S, Any]:
        return cast(Prism[S, Any], super().some())

    def non_nullable(self) -> Prism[S, Any]:
        return cast(Prism[S, Any], super().non_nullable())

    def filter(self, predicate: Callable[[A], bool]) -> Prism[S, A]:
        return cast(Prism[S, A], super().filter(predicate))

    def cons(self) -> Prism[S, tuple[Any, Any]]:
        return cast(Prism[S, tuple[Any, Any]], super().cons())

    def left(self) -> Prism[S, Any]:
        return cast(Prism[S, Any], super().left())

    def right(self) -> Prism[S, Any]:
        return cast(Prism[S, Any], super().right())


@dataclass(frozen=True, repr=False)
class Iso[S, A](Lens[S, A], Prism[S, A]):
    """
    A total, reversible correspondence between S and A.
    """
    kind: ClassVar[Kind] = Kind.ISO


OPTIC_CLASSES: dict[Kind, type[Optional]] = {
    Kind.ISO: Iso,
    Kind.LENS: Lens,
    Kind.PRISM: Prism,
    Kind.OPTIONAL: Optional,
}


def compose(outer: Optional[S, A], inner: Optional[A, B]) -> Optional[S, B]:
    """
    Composes two optics: inner is applied to the focus of outer.

    A write goes innermost first: the new B is written into the current
    A, then that A is written into S. Only the containers on the path are
    rebuilt. When inner is a prism it can build its whole from B alone,
    so the write does not depend on inner's current focus.
    """
    for optic in (outer, inner):
        if not isinstance(optic, Optional):
            raise OpticError(f"cannot compose with {type(optic).__name__}, "
                             "expected an optic")
    kind = join(outer.kind, inner.kind)

    def getter(s):
        match outer.getter(s):
            case Right(a):
                match inner.getter(a):
                    case Right() as found:
                        return found
        return Left(s)

    if isinstance(inner, Prism):
        inner_encode = inner.encoder
        def setter(b, s):
            return outer.setter(inner_encode(b), s)
    else:
        def setter(b, s):
            match outer.getter(s):
                case Right(a):
                    return inner.setter(b, a) >> (lambda a2: outer.setter(a2, s))
                case _:
                    return Nothing

    if kind in (Kind.ISO, Kind.PRISM):
        outer_prism = cast(Prism[S, A], outer)
        encode = lambda b: outer_prism.encoder(inner_encode(b))
        return OPTIC_CLASSES[kind](getter, lambda b, _: Just(encode(b)), encode)
    return OPTIC_CLASSES[kind](getter, setter)
