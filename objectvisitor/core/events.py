"""Event and kind enumerations for ObjectVisitor.

These enums are the vocabulary shared between the traversal engine and
the visitors that consume its events.
"""

from enum import Enum


class VisitEvent(Enum):
    """Lifecycle events emitted around composite values."""
    ENTER = "enter"
    LEAVE = "leave"
    BEFORE_CHILD = "before_child"
    AFTER_CHILD = "after_child"
    BETWEEN_CHILDREN = "between_children"  # Before every child but the first


class KeyValueObjectType(Enum):
    """Which kind of key-value composite is being visited."""
    MAP = "map"         # Mapping instance
    OBJECT = "object"   # Arbitrary object, introspected


class KeyType(Enum):
    """Where a key comes from."""
    OBJECT_FIELD = "field"
    OBJECT_ACCESSOR = "accessor"
    CONTAINER_KEY = "container_key"


class ScalarKind(Enum):
    """Closed set of terminal value kinds.

    Every kind maps to exactly one ``visit_*`` method on the visitor.
    """
    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    CHARACTER = "char"
    STRING = "string"
    ENUM = "enum"

    @property
    def visit_method(self) -> str:
        """Name of the visitor method handling this kind."""
        return f"visit_{self.value}"
