"""Visitor interface for ObjectVisitor.

A Visitor is the consumer side of a traversal: it receives lifecycle
events and scalar visits and builds whatever output it wants from them.
The traversal engine never formats anything itself.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from .events import KeyType, KeyValueObjectType, VisitEvent
from .guard import TraversalContext


class Visitor(ABC):
    """Abstract base class for traversal event consumers.

    Subclasses must implement one ``visit_*`` method per scalar kind.
    Event hooks are no-ops by default, so a visitor only overrides the
    events it cares about.

    Example:
        class Printer(Visitor):
            def visit_string(self, value):
                print(" " * self.nesting_level, value)
            ...
    """

    context: Optional[TraversalContext] = None

    @property
    def nesting_level(self) -> int:
        """Current nesting depth of the bound traversal, 0 at the root."""
        if self.context is None:
            return 0
        return self.context.depth

    @abstractmethod
    def visit_null(self) -> None:
        pass

    @abstractmethod
    def visit_boolean(self, value: bool) -> None:
        pass

    @abstractmethod
    def visit_int8(self, value: int) -> None:
        pass

    @abstractmethod
    def visit_int16(self, value: int) -> None:
        pass

    @abstractmethod
    def visit_int32(self, value: int) -> None:
        pass

    @abstractmethod
    def visit_int64(self, value: int) -> None:
        pass

    @abstractmethod
    def visit_float32(self, value: float) -> None:
        pass

    @abstractmethod
    def visit_float64(self, value: float) -> None:
        pass

    @abstractmethod
    def visit_char(self, value: str) -> None:
        pass

    @abstractmethod
    def visit_string(self, value: str) -> None:
        pass

    def visit_enum(self, value: Enum) -> None:
        """Visit an enum member. Defaults to visiting its name as a string."""
        self.visit_string(value.name)

    def visit_key(self, key: Any, key_type: KeyType, parent: Any) -> None:
        """Visit the key of the child about to be traversed."""
        pass

    def on_key_value_object_event(self, event: VisitEvent,
                                  kind: KeyValueObjectType, obj: Any) -> None:
        """Lifecycle event of a Mapping or an introspected object."""
        pass

    def on_sequence_event(self, event: VisitEvent, sequence: Any) -> None:
        """Lifecycle event of an iterable, set or primitive array."""
        pass
