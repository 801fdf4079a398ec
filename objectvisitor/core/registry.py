"""Type adapter registry for ObjectVisitor.

A type adapter rewrites a value before it would be introspected as a
generic object, typically into its canonical string or number. The
registry owns a per-instance memoization cache; it is safe for
sequential use only.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

TypeAdapter = Callable[[Any], Any]


class TypeAdapterRegistry:
    """Maps runtime types to rewrite functions.

    Resolution order:
        1. Memoized result for the exact runtime type (may be "no adapter")
        2. Exact-type registration
        3. Linear scan over registrations in insertion order, first
           ``isinstance`` match wins

    The outcome of 2 and 3 is memoized under the exact runtime type.

    Example:
        >>> registry = TypeAdapterRegistry()
        >>> registry.register(Path, str)
        >>> registry.resolve(PurePosixPath('/tmp'))
        <class 'str'>
    """

    def __init__(self):
        self._adapters: Dict[type, TypeAdapter] = {}
        self._cache: Dict[type, Optional[TypeAdapter]] = {}

    def register(self, typ: type, adapter: TypeAdapter) -> 'TypeAdapterRegistry':
        """Register adapter for typ, silently replacing any previous one.

        Args:
            typ: Type whose instances (and subclass instances) are rewritten
            adapter: Function(value) -> replacement value

        Returns:
            Self, to allow chaining

        Raises:
            TypeError: If typ is not a type or adapter is not callable
        """
        if not isinstance(typ, type):
            raise TypeError(f"typ must be a type, got {type(typ).__name__}")
        if not callable(adapter):
            raise TypeError(f"adapter must be callable, got {type(adapter).__name__}")
        self._adapters[typ] = adapter
        # A memoized "no adapter" could now be wrong
        self._cache.clear()
        logger.debug("Registered type adapter for %s", typ.__qualname__)
        return self

    def unregister(self, typ: type) -> None:
        """Remove the adapter registered for exactly typ, if any."""
        if self._adapters.pop(typ, None) is not None:
            self._cache.clear()

    def register_builtin_adapters(self) -> 'TypeAdapterRegistry':
        """Register adapters for common opaque value types.

        Covers date/time values, decimals, UUIDs, paths, compiled regular
        expressions and a few more. See ``objectvisitor.adapters.builtin``.
        """
        from ..adapters.builtin import BUILTIN_ADAPTERS

        for typ, adapter in BUILTIN_ADAPTERS:
            self.register(typ, adapter)
        logger.debug("Registered %d builtin type adapters", len(BUILTIN_ADAPTERS))
        return self

    def resolve(self, value: Any) -> Optional[TypeAdapter]:
        """Find the adapter for value's runtime type.

        Args:
            value: Any non-None value

        Returns:
            Adapter function, or None if no registered type matches
        """
        cls = type(value)
        try:
            return self._cache[cls]
        except KeyError:
            pass

        adapter = self._adapters.get(cls)
        if adapter is None:
            for typ, candidate in self._adapters.items():
                if isinstance(value, typ):
                    adapter = candidate
                    break
        self._cache[cls] = adapter
        return adapter

    def clear_cache(self) -> None:
        """Forget memoized resolutions."""
        self._cache.clear()

    def registered_types(self) -> List[type]:
        """Registered types in registration order."""
        return list(self._adapters)

    def cached_types(self) -> List[type]:
        """Runtime types with a memoized resolution (match or no match)."""
        return list(self._cache)

    def __contains__(self, typ: object) -> bool:
        return typ in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def __iter__(self) -> Iterator[type]:
        return iter(self._adapters)
