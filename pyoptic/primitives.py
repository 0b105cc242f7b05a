"""
Optic primitives, and the constructors they are built from.

    at, pick, omit                   lenses onto fields
    some, non_nullable, filter,      prisms that narrow the focus
    cons, left, right
    index, key, head, tail,          optionals onto positions that may
    find_first                       not exist
"""
# pylint: disable=redefined-builtin
from collections.abc import Callable, Hashable
from functools import reduce
from typing import Any, TypeVar, cast

from .accessor import ContainerKind, SequenceAccessor
from .either import Either, Left, Right
from .errors import OpticError, UnsupportedContainerError
from .maybe import Just, Maybe, Nothing
from .optic import Iso, Lens, Optional, Prism
from .registry import accessor_for, is_namedtuple, rebuild

S = TypeVar("S")
A = TypeVar("A")


def _require_callable(**functions: Any) -> None:
    for name, f in functions.items():
        if not callable(f):
            raise OpticError(f"{name} must be callable, got {type(f).__name__}")

def _require_key(key: Any) -> None:
    if not isinstance(key, Hashable):
        raise OpticError(f"key must be hashable, got {type(key).__name__}")

def _identity(x):
    return x


# --- constructors ---

def iso(get: Callable[[S], A], reverse_get: Callable[[A], S]) -> Iso[S, A]:
    """Iso from a pair of mutually inverse functions."""
    _require_callable(get=get, reverse_get=reverse_get)
    return Iso(lambda s: Right(get(s)),
               lambda a, _: Just(reverse_get(a)),
               reverse_get)

def lens(get: Callable[[S], A], replace: Callable[[A, S], S]) -> Lens[S, A]:
    """Lens from a total getter and a replace(a, s) function."""
    _require_callable(get=get, replace=replace)
    return Lens(lambda s: Right(get(s)),
                lambda a, s: Just(replace(a, s)))

def prism(get_or_modify: Callable[[S], Either[S, A]],
          encode: Callable[[A], S]) -> Prism[S, A]:
    """
    Prism from a partial read and an encoder. The write ignores the
    current whole: it is always encode(a).
    """
    _require_callable(get_or_modify=get_or_modify, encode=encode)
    return Prism(get_or_modify, lambda a, _: Just(encode(a)), encode)

def prism_from_option(get_option: Callable[[S], Maybe[A]],
                      encode: Callable[[A], S]) -> Prism[S, A]:
    """Prism from a Maybe-returning read and an encoder."""
    _require_callable(get_option=get_option)
    def get_or_modify(s):
        match get_option(s):
            case Just(a):
                return Right(a)
            case _:
                return Left(s)
    return prism(get_or_modify, encode)

def optional(get_or_modify: Callable[[S], Either[S, A]],
             replace_option: Callable[[A, S], Maybe[S]]) -> Optional[S, A]:
    """Optional from a partial read and a partial write."""
    _require_callable(get_or_modify=get_or_modify, replace_option=replace_option)
    return Optional(get_or_modify, replace_option)


# --- lenses ---

def id() -> Iso[S, S]:
    """
    The identity optic: get returns the whole, replace returns the new value.
    """
    return iso(_identity, _identity)

def at(key: Any) -> Lens[Any, Any]:
    """
    Field (or slot) named key. Reads go through the container's accessor,
    writes rebuild the container with the registry.
    """
    _require_key(key)
    return lens(lambda s: accessor_for(s).project(s, key),
                lambda a, s: rebuild(s, key, a))

def _write_fields(s: Any, fields: dict) -> Any:
    return reduce(lambda acc, item: rebuild(acc, *item), fields.items(), s)

def pick(*keys: Any) -> Lens[Any, dict]:
    """
    Plain dict holding exactly the named fields. Writing it back sets each
    of those fields on the whole, which keeps its own type.
    """
    if not keys:
        raise OpticError("pick() needs at least one key")
    for k in keys:
        _require_key(k)

    def get(s):
        accessor = accessor_for(s)
        return {k: accessor.project(s, k) for k in keys}
    return lens(get, lambda sub, s: _write_fields(s, {k: sub[k] for k in keys}))

def omit(*keys: Any) -> Lens[Any, dict]:
    """
    Plain dict holding every field except the named ones.
    """
    for k in keys:
        _require_key(k)
    omitted = frozenset(keys)

    def get(s):
        accessor = accessor_for(s)
        return {k: accessor.project(s, k) for k in accessor.keys(s)
                if k not in omitted}
    return lens(get, lambda sub, s: _write_fields(
        s, {k: v for k, v in sub.items() if k not in omitted}))


# --- prisms ---

def some() -> Prism[Maybe[A], A]:
    """
    Value inside a Just. Nothing has no focus, but replace always writes
    Just(a).
    """
    def get_or_modify(s):
        match s:
            case Just(a):
                return Right(a)
            case _:
                return Left(s)
    return prism(get_or_modify, Just)

def non_nullable() -> Prism[A | None, A]:
    """
    The value unless it is None. replace always writes.
    """
    return prism(lambda s: Left(s) if s is None else Right(s), _identity)

def filter(predicate: Callable[[A], bool]) -> Prism[A, A]:
    """
    The value when predicate holds for it. The predicate gates reads and
    modify only: replace writes whatever it is given.
    """
    _require_callable(predicate=predicate)
    return prism(lambda s: Right(s) if predicate(s) else Left(s), _identity)

def left() -> Prism[Either[A, Any], A]:
    """Value inside a Left."""
    def get_or_modify(s):
        match s:
            case Left(l):
                return Right(l)
            case _:
                return Left(s)
    return prism(get_or_modify, Left)

def right() -> Prism[Either[Any, A], A]:
    """Value inside a Right."""
    def get_or_modify(s):
        match s:
            case Right() as found:
                return found
            case _:
                return Left(s)
    return prism(get_or_modify, Right)


# --- sequence and mapping positions ---

_POSITIONS = SequenceAccessor()

def _sequence(s: Any) -> SequenceAccessor:
    # named tuples are tagged instances, but still addressable by position
    if is_namedtuple(type(s)):
        return _POSITIONS
    accessor = accessor_for(s)
    if accessor.kind is not ContainerKind.SEQUENCE:
        raise UnsupportedContainerError(s, "expected a sequence")
    return cast(SequenceAccessor, accessor)

def _slot(locate: Callable[[Any], Maybe[Any]],
          resolve: Callable[[Any], Any] = accessor_for) -> Optional[Any, Any]:
    """
    Optional onto the slot chosen by locate(whole). Writing where locate
    finds nothing is a no-op.
    """
    def get_or_modify(s):
        match locate(s):
            case Just(k):
                return Right(resolve(s).project(s, k))
            case _:
                return Left(s)
    return optional(get_or_modify,
                    lambda a, s: (lambda k: rebuild(s, k, a)) & locate(s))

def index(i: int) -> Optional[Any, Any]:
    """
    Element i of a sequence. Out of range (negative included) there is no
    focus and replace returns the sequence unchanged.
    """
    if not isinstance(i, int) or isinstance(i, bool):
        raise OpticError(f"index must be an int, got {type(i).__name__}")
    return _slot(lambda s: Just(i) if _sequence(s).contains(s, i) else Nothing,
                 _sequence)

def key(k: Any) -> Optional[Any, Any]:
    """
    Entry k of a mapping, when present. A missing key is never added.
    """
    _require_key(k)
    def locate(s):
        accessor = accessor_for(s)
        if accessor.kind is not ContainerKind.RECORD:
            raise UnsupportedContainerError(s, "expected a mapping")
        return Just(k) if accessor.contains(s, k) else Nothing
    return _slot(locate)

def head() -> Optional[Any, Any]:
    """First element of a non-empty sequence."""
    return index(0)

def tail() -> Optional[Any, Any]:
    """
    Everything after the first element, as a sequence of the same type.
    replace keeps the first element and splices the new items after it.
    """
    def get_or_modify(s):
        seq = _sequence(s)
        if not len(s):
            return Left(s)
        return Right(seq.with_items(s, list(s)[1:]))

    def replace_option(items, s):
        seq = _sequence(s)
        if not len(s):
            return Nothing
        return Just(seq.with_items(s, [s[0], *items]))
    return optional(get_or_modify, replace_option)

def find_first(predicate: Callable[[Any], bool]) -> Optional[Any, Any]:
    """
    First element satisfying predicate. replace rewrites that slot only;
    with no match it is a no-op.
    """
    _require_callable(predicate=predicate)
    def locate(s):
        _sequence(s)
        return next((Just(i) for i, x in enumerate(s) if predicate(x)), Nothing)
    return _slot(locate, _sequence)

def cons() -> Prism[Any, tuple[Any, Any]]:
    """
    Splits a non-empty sequence into (first, rest). Encoding puts first
    in front of rest, in rest's sequence type.
    """
    def get_or_modify(s):
        seq = _sequence(s)
        if not len(s):
            return Left(s)
        return Right((s[0], seq.with_items(s, list(s)[1:])))

    def encode(pair):
        first, rest = pair
        return _sequence(rest).with_items(rest, [first, *rest])
    return prism(get_or_modify, encode)
