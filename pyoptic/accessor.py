"""
The Accessor protocol: the read/rebuild capability every container along
an optic path provides, and its built-in record, sequence and instance
implementations.

A rebuild never touches the original container. It returns a new one in
which every slot other than `key` holds the very same object as before.
"""
import copy
import logging
from collections.abc import Callable, Iterable, MutableMapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from immutabledict import immutabledict

from .array import Array
from .errors import UnsupportedContainerError
from .hashmap import HashMap
from .settings import Fallback

logger = logging.getLogger(__name__)

type RebuildFn = Callable[[Any, Any, Any], Any]
type KeysFn = Callable[[Any], tuple]


class ContainerKind(Enum):
    """
    Closed set of container shapes an accessor can stand for.
    """
    RECORD = "record"
    SEQUENCE = "sequence"
    INSTANCE = "instance"


@runtime_checkable
class Accessor(Protocol):
    """
    Protocol for the containers an optic can walk through.
    """
    kind: ContainerKind

    def project(self, container: Any, key: Any) -> Any:
        """Reads the slot named key."""
        ...

    def rebuild(self, container: Any, key: Any, value: Any) -> Any:
        """Returns a copy of container whose slot key holds value."""
        ...

    def contains(self, container: Any, key: Any) -> bool:
        """True when container has a slot named key."""
        ...

    def keys(self, container: Any) -> tuple:
        """All slot names of container, in order."""
        ...


class MappingAccessor:
    """Keyed records: dict, immutabledict, HashMap and other mappings."""
    kind = ContainerKind.RECORD

    def project(self, container, key):
        return container[key]

    def rebuild(self, container, key, value):
        match container:
            case HashMap():
                return container.set(key, value)
            case immutabledict():
                return type(container)({**container, key: value})
            case MappingProxyType():
                return MappingProxyType({**container, key: value})
            case MutableMapping():
                new = copy.copy(container)
                new[key] = value
                return new
            case _:
                return {**container, key: value}

    def contains(self, container, key) -> bool:
        return key in container

    def keys(self, container) -> tuple:
        return tuple(container.keys())

    def __repr__(self):
        return "MappingAccessor()"


def _position(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class SequenceAccessor:
    """Integer-indexed sequences: tuple, list and Array."""
    kind = ContainerKind.SEQUENCE

    def project(self, container, key):
        return container[key]

    def rebuild(self, container, key, value):
        if not _position(key):
            raise TypeError(f"sequence index must be an int, not {type(key).__name__}")
        size = len(container)
        if not -size <= key < size:
            raise IndexError(f"index {key} out of range for length {size}")
        key %= size
        match container:
            case Array():
                return container.update_at(key, value)
            case list():
                new = copy.copy(container)
                new[key] = value
                return new
            case tuple() if type(container) is tuple:
                return container[:key] + (value,) + container[key + 1:]
            case _:
                items = list(container)
                items[key] = value
                return self.with_items(container, items)

    def with_items(self, container, items: Iterable[Any]):
        """
        Builds a sequence of the same type as container holding items.
        Sequence types without a known constructor come back as tuples.
        """
        match container:
            case Array():
                return Array.make(items)
            case list():
                return type(container)(items)
            case _:
                return tuple(items)

    def contains(self, container, key) -> bool:
        return _position(key) and 0 <= key < len(container)

    def keys(self, container) -> tuple:
        return tuple(range(len(container)))

    def __repr__(self):
        return "SequenceAccessor()"


def instance_keys(obj: Any) -> tuple:
    """Names of the attributes stored on obj, instance dict first then slots."""
    names: list[str] = list(vars(obj)) if hasattr(obj, "__dict__") else []
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for slot in (slots,) if isinstance(slots, str) else slots:
            if slot not in ("__dict__", "__weakref__") and slot not in names \
                    and hasattr(obj, slot):
                names.append(slot)
    return tuple(names)


def copy_rebuild(obj: Any, key: str, value: Any) -> Any:
    """
    Shallow-copies obj without running its constructor and sets one
    attribute on the copy. Frozen classes are written through object.
    """
    new = copy.copy(obj)
    object.__setattr__(new, key, value)
    return new


class InstanceAccessor:
    """
    Tagged instances: read by attribute, rebuilt by a strategy that keeps
    the instance's class (and with it its behaviour).
    """
    kind = ContainerKind.INSTANCE

    def __init__(self, rebuild: RebuildFn, keys: KeysFn = instance_keys,
                 name: str = ""):
        self._rebuild = rebuild
        self._keys = keys
        self.name = name or getattr(rebuild, "__name__", "rebuild")

    def project(self, container, key):
        return getattr(container, key)

    def rebuild(self, container, key, value):
        return self._rebuild(container, key, value)

    def contains(self, container, key) -> bool:
        return isinstance(key, str) and hasattr(container, key)

    def keys(self, container) -> tuple:
        return tuple(self._keys(container))

    def __repr__(self):
        return f"InstanceAccessor({self.name})"


class PlainObjectAccessor(InstanceAccessor):
    """
    Objects that never declared how to rebuild themselves.
    What a rebuild produces is decided by the fallback policy.
    """

    def __init__(self, fallback: Fallback = Fallback.RECORD):
        super().__init__(self._fallback_rebuild, instance_keys, fallback.value)
        self.fallback = fallback

    def _fallback_rebuild(self, obj, key, value):
        match self.fallback:
            case Fallback.RECORD:
                logger.debug("rebuilding %s as a plain record", type(obj).__name__)
                return {**{k: getattr(obj, k) for k in instance_keys(obj)}, key: value}
            case Fallback.COPY:
                return copy_rebuild(obj, key, value)
            case _:
                raise UnsupportedContainerError(
                    obj, "not registered and fallback policy is 'error'")
