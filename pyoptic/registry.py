"""
Instance preservation registry.

Maps container types to the Accessor that reads and rebuilds them. A type
is resolved once, on first sight, and the answer is cached; lookups after
that are a single dict access.

Resolution order:
  1. types registered explicitly (searched along the MRO)
  2. classes marked @immerable
  3. pydantic models
  4. dataclasses
  5. named tuples
  6. mappings (dict, immutabledict, HashMap, ...)
  7. sequences other than str and bytes (tuple, list, Array, ...)
  8. any other object with a __dict__ or filled __slots__, per the
     fallback policy
"""
import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from .accessor import Accessor, InstanceAccessor, MappingAccessor, \
    PlainObjectAccessor, SequenceAccessor, KeysFn, RebuildFn, \
    copy_rebuild, instance_keys
from .array import Array
from .errors import UnsupportedContainerError
from .hashmap import HashMap
from .settings import Settings, default_settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

IMMERABLE = "__immerable__"

_LEAVES = (str, bytes, bytearray, memoryview)


def immerable(cls: T) -> T:
    """
    Class decorator declaring that instances of cls may be rebuilt by
    shallow copy, keeping their class and methods. The constructor is not
    re-run on rebuild.
    """
    setattr(cls, IMMERABLE, True)
    return cls


def _dataclass_rebuild(obj, key, value):
    # replace() refuses fields the constructor does not take
    for f in dataclasses.fields(obj):
        if f.name == key and not f.init:
            return copy_rebuild(obj, key, value)
    return dataclasses.replace(obj, **{key: value})

def _dataclass_keys(obj) -> tuple:
    return tuple(f.name for f in dataclasses.fields(obj))

def _model_rebuild(obj: BaseModel, key, value):
    return obj.model_copy(update={key: value})

def _model_keys(obj: BaseModel) -> tuple:
    return tuple(type(obj).model_fields)

def _namedtuple_rebuild(obj, key, value):
    if isinstance(key, int):
        key = obj._fields[key]
    return obj._replace(**{key: value})

def _namedtuple_keys(obj) -> tuple:
    return tuple(obj._fields)


def is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields") \
        and hasattr(cls, "_replace")


class Registry:
    """
    Resolves and caches the Accessor for each container type.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings: Settings = settings or default_settings()
        self._explicit: dict[type, Accessor] = {}
        self._cache: dict[type, Accessor] = {}
        self.register_accessor(HashMap, MappingAccessor())
        self.register_accessor(Array, SequenceAccessor())

    def register(self, cls: type, rebuild: RebuildFn,
                 keys: KeysFn = instance_keys) -> None:
        """
        Declares how instances of cls (and its subclasses) are rebuilt.
        rebuild(obj, key, value) must return a new instance of the same
        kind with attribute key set to value and nothing else changed.
        """
        self.register_accessor(cls, InstanceAccessor(rebuild, keys, cls.__name__))

    def register_accessor(self, cls: type, accessor: Accessor) -> None:
        """
        Installs a full Accessor for cls.
        """
        if not isinstance(cls, type):
            raise TypeError(f"register expects a class, got {cls!r}")
        logger.debug("registering %r for %s", accessor, cls.__qualname__)
        self._explicit[cls] = accessor
        self._cache.clear()

    def configure(self, **overrides: Any) -> Settings:
        """
        Replaces some settings and forgets every resolved type.
        """
        unknown = set(overrides) - set(default_settings())
        if unknown:
            raise KeyError(f"unknown settings: {', '.join(sorted(unknown))}")
        self.settings = {**self.settings, **overrides}  # type: ignore[typeddict-item]
        self._cache.clear()
        return self.settings

    def accessor_for(self, value: Any) -> Accessor:
        """
        Returns the Accessor for value's type, resolving it on first use.
        """
        cls = type(value)
        accessor = self._cache.get(cls)
        if accessor is None:
            accessor = self._resolve(cls, value)
            logger.debug("resolved %s to %r", cls.__qualname__, accessor)
            self._cache[cls] = accessor
        return accessor

    def _resolve(self, cls: type, value: Any) -> Accessor:
        for base in cls.__mro__:
            if base in self._explicit:
                return self._explicit[base]
        if getattr(cls, IMMERABLE, False):
            return InstanceAccessor(copy_rebuild, instance_keys, "immerable")
        if issubclass(cls, BaseModel):
            return InstanceAccessor(_model_rebuild, _model_keys, "pydantic")
        if dataclasses.is_dataclass(cls):
            return InstanceAccessor(_dataclass_rebuild, _dataclass_keys, "dataclass")
        if is_namedtuple(cls):
            return InstanceAccessor(_namedtuple_rebuild, _namedtuple_keys, "namedtuple")
        if issubclass(cls, Mapping):
            return MappingAccessor()
        if issubclass(cls, Sequence) and not issubclass(cls, _LEAVES):
            return SequenceAccessor()
        if not isinstance(value, type) \
                and (hasattr(value, "__dict__") or instance_keys(value)):
            return PlainObjectAccessor(self.settings["fallback"])
        raise UnsupportedContainerError(value)

    def rebuild(self, container: Any, key: Any, value: Any) -> Any:
        """
        Returns container with slot key set to value. When the slot already
        holds that very object and share_unchanged is on, container itself
        is returned.
        """
        accessor = self.accessor_for(container)
        if self.settings["share_unchanged"] and accessor.contains(container, key) \
                and accessor.project(container, key) is value:
            return container
        return accessor.rebuild(container, key, value)


default_registry = Registry()


def register(cls: type, rebuild: RebuildFn, keys: KeysFn = instance_keys) -> None:
    """Registers a rebuild strategy for cls on the default registry."""
    default_registry.register(cls, rebuild, keys)

def register_accessor(cls: type, accessor: Accessor) -> None:
    """Registers an Accessor for cls on the default registry."""
    default_registry.register_accessor(cls, accessor)

def accessor_for(value: Any) -> Accessor:
    """Accessor for value from the default registry."""
    return default_registry.accessor_for(value)

def rebuild(container: Any, key: Any, value: Any) -> Any:
    """Rebuilds container through the default registry."""
    return default_registry.rebuild(container, key, value)

def configure(**overrides: Any) -> Settings:
    """Changes the default registry's settings."""
    return default_registry.configure(**overrides)
