"""ObjectVisitor - Recursive Object Graph Traversal Library.

ObjectVisitor walks any Python value depth-first - scalars, mappings,
sets, iterables, primitive arrays and arbitrary objects - and reports
what it finds as a stream of events to a pluggable Visitor. Formatters,
dumpers and collectors are all just Visitors.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from objectvisitor import dumps, collect_events

    print(dumps(my_object))
    events = collect_events(my_object, nulls_included=True)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .core import (
    VisitEvent,
    KeyValueObjectType,
    KeyType,
    ScalarKind,
    Key,
    FieldInfo,
    AccessorInfo,
    Visitor,
    ObjectTraverser,
    TypeAdapterRegistry,
    CycleGuard,
    TraversalContext,
    EventCollector,
)
from .config import VisitorConfig
from .error_policies import (
    ABSENT,
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .errors import ObjectVisitorError, ConfigurationError, MemberAccessError
from .dumpers import Json5Dumper
from .api import visit, collect_events, dump, dumps

__all__ = [
    "__version__",
    # Core
    "VisitEvent",
    "KeyValueObjectType",
    "KeyType",
    "ScalarKind",
    "Key",
    "FieldInfo",
    "AccessorInfo",
    "Visitor",
    "ObjectTraverser",
    "TypeAdapterRegistry",
    "CycleGuard",
    "TraversalContext",
    "EventCollector",
    # Config
    "VisitorConfig",
    # Errors
    "ABSENT",
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "ThresholdPolicy",
    "ObjectVisitorError",
    "ConfigurationError",
    "MemberAccessError",
    # Dumpers
    "Json5Dumper",
    # API
    "visit",
    "collect_events",
    "dump",
    "dumps",
]
