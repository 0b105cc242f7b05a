""" imports for pyoptic """
# pylint: disable=redefined-builtin
from .accessor import Accessor, ContainerKind, MappingAccessor, \
    SequenceAccessor, InstanceAccessor, PlainObjectAccessor
from .array import Array
from .curry import curry_n
from .either import Either, Left, Right, either, is_right
from .errors import OpticError, UnsupportedContainerError
from .functor import Functor, map
from .hashmap import HashMap
from .maybe import Maybe, Just, Nothing, fromMaybe, is_just, from_optional
from .optic import Kind, join, Optional, Lens, Prism, Iso, compose
from .ops import get, get_option, get_or_modify, decode, replace, \
    replace_option, modify, modify_option, encode
from .primitives import iso, lens, prism, prism_from_option, optional, \
    id, at, pick, omit, some, non_nullable, filter, left, right, \
    index, key, head, tail, find_first, cons
from .registry import Registry, default_registry, immerable, register, \
    register_accessor, accessor_for, rebuild, configure
from .settings import Settings, Fallback, default_settings, configure_logger
