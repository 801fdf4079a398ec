"""Core abstractions for ObjectVisitor.

This module contains the traversal engine and the building blocks it is
made of: event enums, the key-value model, the cycle guard, the type
adapter registry and the Visitor interface.
"""

from .events import VisitEvent, KeyValueObjectType, KeyType, ScalarKind
from .boxing import box_array, is_primitive_array, scalar_kind_of, unbox
from .key import (
    Key,
    FieldInfo,
    AccessorInfo,
    Slot,
    FieldSlot,
    AccessorSlot,
    EntrySlot,
    discover_fields,
    discover_accessors,
    default_accessor_name,
)
from .guard import TraversalContext, CycleGuard, Decision, SKIP
from .visitor import Visitor
from .registry import TypeAdapterRegistry
from .composers import KeyValueComposer, SequenceComposer, compare_keys
from .traverser import ObjectTraverser
from .collector import EventCollector

__all__ = [
    "VisitEvent",
    "KeyValueObjectType",
    "KeyType",
    "ScalarKind",
    "box_array",
    "is_primitive_array",
    "scalar_kind_of",
    "unbox",
    "Key",
    "FieldInfo",
    "AccessorInfo",
    "Slot",
    "FieldSlot",
    "AccessorSlot",
    "EntrySlot",
    "discover_fields",
    "discover_accessors",
    "default_accessor_name",
    "TraversalContext",
    "CycleGuard",
    "Decision",
    "SKIP",
    "Visitor",
    "TypeAdapterRegistry",
    "KeyValueComposer",
    "SequenceComposer",
    "compare_keys",
    "ObjectTraverser",
    "EventCollector",
]
