"""Instance preservation registry: resolution order, caching and settings."""
from dataclasses import dataclass, field
from typing import NamedTuple

import pytest
from pydantic import BaseModel

from pyoptic import Array, ContainerKind, Fallback, HashMap, InstanceAccessor, \
    MappingAccessor, PlainObjectAccessor, Registry, SequenceAccessor, \
    UnsupportedContainerError, immerable


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class Pair(NamedTuple):
    first: object
    second: object


class Profile(BaseModel):
    name: str
    tags: list[str]


class Loose:
    def __init__(self, value):
        self.value = value


class Slots:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


@dataclass(frozen=True)
class Square:
    side: int
    area: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "area", self.side * self.side)


@immerable
@dataclass(frozen=True)
class Audited:
    value: int
    inits: list = None  # type: ignore[assignment]

    def __post_init__(self):
        if self.inits is not None:
            self.inits.append(self.value)


@pytest.fixture
def reg():
    return Registry()


@pytest.mark.parametrize("value, expected", [
    ({"a": 1}, MappingAccessor),
    ((1, 2), SequenceAccessor),
    ([1, 2], SequenceAccessor),
    (Array((1,)), SequenceAccessor),
    (HashMap.make({"a": 1}), MappingAccessor),
    (Loose(1), PlainObjectAccessor),
])
def test_resolves_builtin_containers(reg, value, expected):
    assert isinstance(reg.accessor_for(value), expected)


@pytest.mark.parametrize("value, name", [
    (Point(1, 2), "dataclass"),
    (Pair(1, 2), "namedtuple"),
    (Profile(name="a", tags=[]), "pydantic"),
    (Audited(1), "immerable"),
])
def test_resolves_tagged_instances(reg, value, name):
    accessor = reg.accessor_for(value)
    assert accessor.kind is ContainerKind.INSTANCE
    assert repr(accessor) == f"InstanceAccessor({name})"


@pytest.mark.parametrize("value", ["text", b"bytes", 3, 2.5, None])
def test_leaves_are_not_containers(reg, value):
    with pytest.raises(UnsupportedContainerError):
        reg.accessor_for(value)


def test_resolution_is_cached_per_type(reg):
    first = reg.accessor_for(Point(1, 2))
    assert reg.accessor_for(Point(3, 4)) is first


def test_explicit_registration_wins_and_clears_cache(reg):
    reg.accessor_for(Point(1, 2))
    calls = []

    def rebuild(obj, key, value):
        calls.append(key)
        return Point(**{**{"x": obj.x, "y": obj.y}, key: value})

    reg.register(Point, rebuild)
    assert reg.rebuild(Point(1, 2), "x", 5) == Point(5, 2)
    assert calls == ["x"]
    assert repr(reg.accessor_for(Point(0, 0))) == "InstanceAccessor(Point)"


def test_registration_applies_to_subclasses(reg):
    class Base:
        def __init__(self, v):
            self.v = v

    class Child(Base):
        pass

    reg.register(Base, lambda obj, key, value: type(obj)(value))
    result = reg.rebuild(Child(1), "v", 2)
    assert isinstance(result, Child)
    assert result.v == 2


def test_register_rejects_non_classes(reg):
    with pytest.raises(TypeError):
        reg.register_accessor(Point(1, 2), MappingAccessor())  # type: ignore[arg-type]


def test_dataclass_rebuild_keeps_class(reg):
    result = reg.rebuild(Point(1, 2), "y", 7)
    assert result == Point(1, 7)
    assert isinstance(result, Point)


def test_namedtuple_rebuild_keeps_class(reg):
    second = [2]
    result = reg.rebuild(Pair(1, second), "first", 10)
    assert isinstance(result, Pair)
    assert result.first == 10
    assert result.second is second


def test_pydantic_rebuild_shares_fields(reg):
    profile = Profile(name="a", tags=["x"])
    result = reg.rebuild(profile, "name", "b")
    assert isinstance(result, Profile)
    assert result.name == "b"
    assert result.tags is profile.tags
    assert profile.name == "a"


def test_immerable_takes_priority_and_skips_init(reg):
    seen: list[int] = []
    audited = Audited(1, seen)
    assert seen == [1]
    result = reg.rebuild(audited, "value", 2)
    assert isinstance(result, Audited)
    assert result.value == 2
    assert seen == [1]


def test_share_unchanged_returns_same_container(reg):
    shared = [1]
    d = {"a": shared}
    assert reg.rebuild(d, "a", shared) is d
    reg.configure(share_unchanged=False)
    assert reg.rebuild(d, "a", shared) is not d


def test_configure_fallback_changes_resolution(reg):
    assert isinstance(reg.rebuild(Loose(1), "value", 2), dict)
    reg.configure(fallback=Fallback.COPY)
    assert isinstance(reg.rebuild(Loose(1), "value", 2), Loose)
    reg.configure(fallback=Fallback.ERROR)
    with pytest.raises(UnsupportedContainerError):
        reg.rebuild(Loose(1), "value", 2)


def test_configure_rejects_unknown_settings(reg):
    with pytest.raises(KeyError):
        reg.configure(deep_copy=True)


def test_instance_accessor_contains(reg):
    accessor = reg.accessor_for(Point(1, 2))
    assert isinstance(accessor, InstanceAccessor)
    assert accessor.contains(Point(1, 2), "x")
    assert not accessor.contains(Point(1, 2), "z")
    assert not accessor.contains(Point(1, 2), 0)
    assert accessor.keys(Point(1, 2)) == ("x", "y")


def test_dataclass_field_outside_init_is_copied(reg):
    square = Square(3)
    result = reg.rebuild(square, "area", 10)
    assert isinstance(result, Square)
    assert (result.side, result.area) == (3, 10)
    assert square.area == 9


def test_dataclass_init_field_still_reruns_post_init(reg):
    assert reg.rebuild(Square(3), "side", 4).area == 16


def test_unregistered_slotted_objects_use_the_fallback(reg):
    slots = Slots(1, [2])
    accessor = reg.accessor_for(slots)
    assert isinstance(accessor, PlainObjectAccessor)
    assert accessor.project(slots, "x") == 1
    result = reg.rebuild(slots, "x", 10)
    assert result == {"x": 10, "y": [2]}
    assert result["y"] is slots.y


def test_slotted_objects_copied_under_copy_fallback(reg):
    reg.configure(fallback=Fallback.COPY)
    result = reg.rebuild(Slots(1, 2), "x", 10)
    assert isinstance(result, Slots)
    assert (result.x, result.y) == (10, 2)


def test_namedtuple_rebuild_by_position(reg):
    result = reg.rebuild(Pair(1, 2), 1, 20)
    assert isinstance(result, Pair)
    assert result == Pair(1, 20)
