"""Type adapters for ObjectVisitor.

Adapters rewrite opaque values before generic object introspection,
so that e.g. a datetime is visited as its ISO-8601 string.
"""

from .builtin import BUILTIN_ADAPTERS

__all__ = [
    "BUILTIN_ADAPTERS",
]
