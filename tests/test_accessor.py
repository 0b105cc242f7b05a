"""Built-in accessors: record, sequence and plain-object rebuilds."""
import logging
from collections import OrderedDict
from types import MappingProxyType

import pytest
from immutabledict import immutabledict

from pyoptic import Array, ContainerKind, Fallback, HashMap, MappingAccessor, \
    PlainObjectAccessor, SequenceAccessor, UnsupportedContainerError, \
    configure_logger
from pyoptic.accessor import copy_rebuild, instance_keys


class Plain:
    def __init__(self, a, b):
        self.a = a
        self.b = b


class Slotted:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


# --- mappings ---

def test_dict_rebuild_shares_other_values():
    shared = [1, 2]
    d = {"a": 1, "b": shared}
    new = MappingAccessor().rebuild(d, "a", 10)
    assert new == {"a": 10, "b": [1, 2]}
    assert new["b"] is shared
    assert d == {"a": 1, "b": shared}


@pytest.mark.parametrize("container", [
    OrderedDict(a=1, b=2),
    immutabledict(a=1, b=2),
    HashMap.make({"a": 1, "b": 2}),
    MappingProxyType({"a": 1, "b": 2}),
])
def test_mapping_rebuild_keeps_type(container):
    accessor = MappingAccessor()
    new = accessor.rebuild(container, "b", 20)
    assert type(new) is type(container)
    assert new["b"] == 20
    assert container["b"] == 2
    assert accessor.keys(new) == ("a", "b")


def test_mapping_contains_and_project():
    accessor = MappingAccessor()
    assert accessor.kind is ContainerKind.RECORD
    assert accessor.contains({"a": None}, "a")
    assert not accessor.contains({"a": None}, "b")
    assert accessor.project({"a": 5}, "a") == 5


# --- sequences ---

@pytest.mark.parametrize("container", [
    (1, 2, 3),
    [1, 2, 3],
    Array((1, 2, 3)),
])
def test_sequence_rebuild_keeps_type(container):
    new = SequenceAccessor().rebuild(container, 1, 20)
    assert type(new) is type(container)
    assert list(new) == [1, 20, 3]
    assert list(container) == [1, 2, 3]


def test_sequence_rebuild_shares_other_elements():
    first, last = {"k": 1}, {"k": 3}
    new = SequenceAccessor().rebuild((first, {"k": 2}, last), 1, None)
    assert new[0] is first
    assert new[2] is last


def test_sequence_negative_and_out_of_range():
    accessor = SequenceAccessor()
    assert accessor.rebuild((1, 2, 3), -1, 9) == (1, 2, 9)
    with pytest.raises(IndexError):
        accessor.rebuild((1, 2, 3), 3, 9)
    with pytest.raises(TypeError):
        accessor.rebuild((1, 2, 3), "0", 9)


def test_sequence_contains_is_bounds_checked():
    accessor = SequenceAccessor()
    assert accessor.contains([1, 2], 1)
    assert not accessor.contains([1, 2], 2)
    assert not accessor.contains([1, 2], -1)
    assert not accessor.contains([1, 2], True)
    assert accessor.keys("abc") == (0, 1, 2)


def test_with_items_follows_container_type():
    accessor = SequenceAccessor()
    assert accessor.with_items([0], iter([1, 2])) == [1, 2]
    assert accessor.with_items((0,), [1, 2]) == (1, 2)
    assert accessor.with_items(Array(()), [1]) == Array((1,))
    assert accessor.with_items(range(3), [1]) == (1,)


# --- instances ---

def test_instance_keys_covers_dict_and_slots():
    assert instance_keys(Plain(1, 2)) == ("a", "b")
    assert instance_keys(Slotted(1, 2)) == ("x", "y")


def test_copy_rebuild_keeps_class_without_init():
    original = Slotted(1, [2])
    new = copy_rebuild(original, "x", 10)
    assert isinstance(new, Slotted)
    assert (new.x, original.x) == (10, 1)
    assert new.y is original.y


def test_plain_object_record_fallback(caplog):
    caplog.set_level(logging.DEBUG, logger="pyoptic")
    obj = Plain(1, [2])
    new = PlainObjectAccessor(Fallback.RECORD).rebuild(obj, "a", 10)
    assert new == {"a": 10, "b": [2]}
    assert new["b"] is obj.b
    assert "Plain as a plain record" in caplog.text


def test_plain_object_copy_fallback():
    obj = Plain(1, 2)
    new = PlainObjectAccessor(Fallback.COPY).rebuild(obj, "a", 10)
    assert isinstance(new, Plain)
    assert (new.a, new.b, obj.a) == (10, 2, 1)


def test_plain_object_error_fallback():
    with pytest.raises(UnsupportedContainerError):
        PlainObjectAccessor(Fallback.ERROR).rebuild(Plain(1, 2), "a", 10)


def test_configure_logger_adds_one_handler():
    logger = configure_logger(logging.INFO, name="pyoptic.tests.logger")
    configure_logger(logging.DEBUG, name="pyoptic.tests.logger")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
