"""Event collection for ObjectVisitor.

The EventCollector is a Visitor that records every callback it receives.
It is what ``collect_events`` returns and what tests assert against.
"""

from typing import Any, Dict, List, Tuple

from .events import KeyType, KeyValueObjectType, VisitEvent
from .visitor import Visitor


class EventCollector(Visitor):
    """Records traversal callbacks as tuples.

    Recorded shapes:
        ("null",)
        (<scalar kind>, value)         e.g. ("int64", 8), ("enum", Color.RED)
        ("key", name, KeyType)
        (<event>, "MAP"|"OBJECT")      for key-value objects
        (<event>, "SEQUENCE")          for sequences

    where <event> is the VisitEvent value ("enter", "before_child", ...).
    Composite values are not stored to keep the record comparable.
    """

    def __init__(self, include_depth: bool = False):
        """Initialize collector.

        Args:
            include_depth: Append the nesting level to every record
        """
        self.include_depth = include_depth
        self.events: List[Tuple[Any, ...]] = []

    def _record(self, *event: Any) -> None:
        if self.include_depth:
            event = event + (self.nesting_level,)
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()

    def summary(self) -> Dict[str, int]:
        """Count recorded callbacks by their first element."""
        counts: Dict[str, int] = {}
        for event in self.events:
            counts[event[0]] = counts.get(event[0], 0) + 1
        return counts

    def visit_null(self) -> None:
        self._record("null")

    def visit_boolean(self, value: bool) -> None:
        self._record("boolean", value)

    def visit_int8(self, value: int) -> None:
        self._record("int8", value)

    def visit_int16(self, value: int) -> None:
        self._record("int16", value)

    def visit_int32(self, value: int) -> None:
        self._record("int32", value)

    def visit_int64(self, value: int) -> None:
        self._record("int64", value)

    def visit_float32(self, value: float) -> None:
        self._record("float32", value)

    def visit_float64(self, value: float) -> None:
        self._record("float64", value)

    def visit_char(self, value: str) -> None:
        self._record("char", value)

    def visit_string(self, value: str) -> None:
        self._record("string", value)

    def visit_enum(self, value) -> None:
        self._record("enum", value)

    def visit_key(self, key: Any, key_type: KeyType, parent: Any) -> None:
        self._record("key", key, key_type)

    def on_key_value_object_event(self, event: VisitEvent,
                                  kind: KeyValueObjectType, obj: Any) -> None:
        self._record(event.value, kind.name)

    def on_sequence_event(self, event: VisitEvent, sequence: Any) -> None:
        self._record(event.value, "SEQUENCE")
