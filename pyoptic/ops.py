"""
Terminal operations: apply an optic to a whole value.

All of them are curried, so they can be given their arguments one at a
time (replace(optic)(a)(s)) or all at once (replace(optic, a, s)).
None of them mutates its arguments.
"""
from typing import Any, Callable, TypeVar

from .curry import curry_n
from .either import Either
from .errors import OpticError
from .maybe import Maybe
from .optic import Lens, Optional, Prism

S = TypeVar("S")
A = TypeVar("A")


@curry_n
def _get(optic: Lens[S, A], s: S) -> A:
    return optic.get(s)

def get(optic: Lens[S, A], *args: Any) -> Any:
    """
    Reads the focus of a total optic (a Lens or an Iso).
    Any other optic is rejected as soon as it is supplied.
    """
    if not isinstance(optic, Lens):
        raise OpticError(f"get needs a Lens or an Iso, got {_kind_name(optic)}")
    return _get(optic, *args)

@curry_n
def get_option(optic: Optional[S, A], s: S) -> Maybe[A]:
    """Just(focus) if present, else Nothing."""
    return optic.get_option(s)

@curry_n
def get_or_modify(optic: Optional[S, A], s: S) -> Either[S, A]:
    """Right(focus) if present, else Left(s)."""
    return optic.get_or_modify(s)

decode = get_or_modify

@curry_n
def replace(optic: Optional[S, A], a: A, s: S) -> S:
    """
    Writes a at the focus and rebuilds the ancestors.
    Returns s itself when the optic has no position to write into.
    """
    return optic.replace(a, s)

@curry_n
def replace_option(optic: Optional[S, A], a: A, s: S) -> Maybe[S]:
    """Like replace, but Nothing when there is no position to write into."""
    return optic.replace_option(a, s)

@curry_n
def modify(optic: Optional[S, A], f: Callable[[A], A], s: S) -> S:
    """Applies f to the focus. Returns s itself when the focus is absent."""
    return optic.modify(f, s)

@curry_n
def modify_option(optic: Optional[S, A], f: Callable[[A], A], s: S) -> Maybe[S]:
    """Like modify, but Nothing when the focus is absent."""
    return optic.modify_option(f, s)

@curry_n
def _encode(optic: Prism[S, A], a: A) -> S:
    return optic.encode(a)

def encode(optic: Prism[S, A], *args: Any) -> Any:
    """Builds a whole from a focus value through a Prism or an Iso."""
    if not isinstance(optic, Prism):
        raise OpticError(f"encode needs a Prism or an Iso, got {_kind_name(optic)}")
    return _encode(optic, *args)


def _kind_name(optic: object) -> str:
    if isinstance(optic, Optional):
        return optic.kind.value
    return type(optic).__name__
