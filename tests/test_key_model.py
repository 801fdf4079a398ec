"""
Tests for member discovery: fields, accessors and their display names.
"""

import functools
from dataclasses import dataclass, field

import pytest

from objectvisitor import KeyType, VisitorConfig, collect_events
from objectvisitor.core.key import (
    GETTER_PATTERN,
    AccessorInfo,
    EntrySlot,
    FieldInfo,
    default_accessor_name,
    discover_accessors,
    discover_fields,
    field_candidates,
    is_synthesized,
    transient_names,
)


class Account:
    VERSION = 3

    def __init__(self):
        self.owner = "ann"
        self.balance = 10

    @property
    def total(self):
        return self.balance * 2

    @functools.cached_property
    def summary(self):
        return f"{self.owner}:{self.balance}"

    def get_name(self):
        return self.owner

    def isReady(self):
        return True

    def getURL(self):
        return "http://example.org"

    def compute(self):
        return 42

    def get_with_arg(self, x):
        return x

    def get_nothing(self) -> None:
        pass

    def _get_private(self):
        return "hidden"

    def get_class(self):
        return type(self)

    @staticmethod
    def get_static():
        return 1

    @classmethod
    def get_factory(cls):
        return cls


class Slotted:
    __slots__ = ("a", "b", "__hidden")

    def __init__(self):
        self.a = 1
        self.__hidden = 2


class Cached:
    __transient__ = ("cache",)

    def __init__(self):
        self.value = 1
        self.cache = {"x": 1}


@dataclass
class Record:
    name: str = "r"
    scratch: list = field(default_factory=list, metadata={"transient": True})


def names(slots):
    return [slot.key.name for slot in slots]


class TestGetterPattern:

    @pytest.mark.parametrize("name", ["get_x", "getX", "get2", "is_ok", "isOpen"])
    def test_matches(self, name):
        assert GETTER_PATTERN.match(name)

    @pytest.mark.parametrize("name", ["getter", "island", "get", "is", "get_", "compute"])
    def test_rejects(self, name):
        assert not GETTER_PATTERN.match(name)


class TestDefaultAccessorName:

    @pytest.mark.parametrize("name, expected", [
        ("get_name", "name"),
        ("getName", "name"),
        ("isReady", "ready"),
        ("is_ready", "ready"),
        ("getURL", "URL"),
    ])
    def test_method_names(self, name, expected):
        info = AccessorInfo(name, object, 'method')
        assert default_accessor_name(info) == expected

    def test_property_keeps_its_name(self):
        assert default_accessor_name(AccessorInfo("getTotal", object)) == "getTotal"


class TestFieldDiscovery:

    def test_instance_fields_in_definition_order(self):
        slots = discover_fields(Account(), VisitorConfig())
        assert names(slots) == ["owner", "balance"]
        assert all(s.key.origin is KeyType.OBJECT_FIELD for s in slots)

    def test_static_fields_are_opt_in(self):
        slots = discover_fields(Account(), VisitorConfig(static_fields_included=True))
        assert names(slots) == ["owner", "balance", "VERSION"]

    def test_static_candidates_are_flagged(self):
        infos = {info.name: info for info in field_candidates(Account())}
        assert infos["VERSION"].is_static
        assert not infos["owner"].is_static
        assert "total" not in infos
        assert "get_name" not in infos

    def test_synthesized_names_never_accepted(self):
        config = VisitorConfig(static_fields_included=True)
        assert not [n for n in names(discover_fields(Account(), config))
                    if n.startswith("__")]

    def test_initialized_slots_only(self):
        slots = discover_fields(Slotted(), VisitorConfig())
        assert names(slots) == ["a", "_Slotted__hidden"]

    def test_transient_declaration(self):
        assert transient_names(Cached) == {"cache"}
        assert names(discover_fields(Cached(), VisitorConfig())) == ["value"]
        included = VisitorConfig(transient_fields_included=True)
        assert names(discover_fields(Cached(), included)) == ["value", "cache"]

    def test_transient_dataclass_field(self):
        assert transient_names(Record) == {"scratch"}
        assert names(discover_fields(Record(), VisitorConfig())) == ["name"]

    def test_field_inclusion_predicate(self):
        config = VisitorConfig(field_inclusion_predicate=lambda info: info.name != "balance")
        assert names(discover_fields(Account(), config)) == ["owner"]

    def test_predicate_receives_field_info(self):
        seen = []
        config = VisitorConfig(field_inclusion_predicate=lambda info: seen.append(info) or True)
        discover_fields(Account(), config)
        assert seen[0] == FieldInfo("owner", Account, False, False)

    def test_field_name_function(self):
        config = VisitorConfig(field_name_function=lambda info: info.name.upper())
        assert names(discover_fields(Account(), config)) == ["OWNER", "BALANCE"]

    @pytest.mark.parametrize("name, expected", [
        ("__init__", True),
        ("__dict__", True),
        ("_abc_impl", True),
        ("_private", False),
        ("__mangled", False),
        ("plain", False),
    ])
    def test_is_synthesized(self, name, expected):
        assert is_synthesized(name) is expected


class TestAccessorDiscovery:

    def test_accepted_accessors(self):
        slots = discover_accessors(Account(), VisitorConfig())
        assert sorted(names(slots)) == ["URL", "name", "ready", "summary", "total"]
        assert all(s.key.origin is KeyType.OBJECT_ACCESSOR for s in slots)

    def test_accessor_values(self):
        slots = {s.key.name: s for s in discover_accessors(Account(), VisitorConfig())}
        assert slots["total"].read() == 20
        assert slots["name"].read() == "ann"
        assert slots["ready"].read() is True

    def test_accessor_name_function(self):
        config = VisitorConfig(accessor_name_function=lambda info: info.name)
        slots = discover_accessors(Account(), config)
        assert "get_name" in names(slots)

    def test_getters_in_traversal(self):
        events = collect_events(Account(), fields_included=False, getters_included=True)
        keys = [e[1] for e in events if e[0] == "key"]
        assert keys == ["name", "ready", "summary", "total", "URL"]

    def test_fields_and_getters_share_one_ordering(self):
        events = collect_events(Account(), getters_included=True)
        keys = [e[1] for e in events if e[0] == "key"]
        assert keys == ["balance", "name", "owner", "ready", "summary", "total", "URL"]


class TestEntrySlot:

    def test_reads_value(self):
        slot = EntrySlot({1: "a"}, 1, "a")
        assert slot.key.name == 1
        assert slot.key.origin is KeyType.CONTAINER_KEY
        assert slot.read() == "a"
