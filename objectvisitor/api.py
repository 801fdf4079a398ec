"""High-level API for ObjectVisitor.

This module provides simple, functional interfaces for common traversal
operations. These functions wrap the object-oriented API (ObjectTraverser,
VisitorConfig, TypeAdapterRegistry) for ease of use in simple cases.
"""

import dataclasses
import io
from typing import Any, List, Optional, TextIO, Tuple

from .config import VisitorConfig
from .core.collector import EventCollector
from .core.registry import TypeAdapterRegistry
from .core.traverser import ObjectTraverser
from .core.visitor import Visitor
from .dumpers.json5 import Json5Dumper
from .errors import ConfigurationError

_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(VisitorConfig))


def _build_config(config: Optional[VisitorConfig], options: dict,
                  default: Optional[VisitorConfig] = None) -> VisitorConfig:
    """Copy config (or default) and apply keyword options on top.

    Raises:
        ConfigurationError: If an option name is not a VisitorConfig field
    """
    unknown = sorted(set(options) - _OPTION_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
    base = config if config is not None else (default or VisitorConfig())
    return dataclasses.replace(base, **options)


def _build_registry(registry: Optional[TypeAdapterRegistry],
                    builtin_adapters: bool) -> TypeAdapterRegistry:
    if registry is not None:
        return registry
    registry = TypeAdapterRegistry()
    if builtin_adapters:
        registry.register_builtin_adapters()
    return registry


def visit(
    value: Any,
    visitor: Visitor,
    config: Optional[VisitorConfig] = None,
    registry: Optional[TypeAdapterRegistry] = None,
    builtin_adapters: bool = False,
    **options
) -> Visitor:
    """Traverse value once, sending events to visitor.

    Args:
        value: Any value
        visitor: Consumer of the events
        config: Base configuration (defaults to VisitorConfig())
        registry: Type adapters; when omitted a fresh registry is made
        builtin_adapters: Register builtin adapters in the fresh registry
        **options: VisitorConfig fields overriding config

    Returns:
        The visitor, for chaining

    Example:
        >>> visit(order, MyVisitor(), nulls_included=True)
    """
    traverser = ObjectTraverser(
        visitor,
        _build_config(config, options),
        _build_registry(registry, builtin_adapters),
    )
    traverser.traverse(value)
    return visitor


def collect_events(
    value: Any,
    config: Optional[VisitorConfig] = None,
    registry: Optional[TypeAdapterRegistry] = None,
    include_depth: bool = False,
    builtin_adapters: bool = False,
    **options
) -> List[Tuple[Any, ...]]:
    """Traverse value and return the recorded events.

    See EventCollector for the shape of the records.

    Example:
        >>> collect_events([True, None], nulls_included=True)
        [('enter', 'SEQUENCE'), ('before_child', 'SEQUENCE'), ('boolean', True), ...]
    """
    collector = EventCollector(include_depth=include_depth)
    visit(value, collector, config, registry, builtin_adapters, **options)
    return collector.events


def dump(
    value: Any,
    fp: TextIO,
    config: Optional[VisitorConfig] = None,
    registry: Optional[TypeAdapterRegistry] = None,
    indent: int = 4,
    builtin_adapters: bool = True,
    **options
) -> None:
    """Write value to fp as JSON5 text.

    Unlike visit(), the base configuration defaults to
    VisitorConfig.dump_defaults() and builtin adapters are on.
    """
    traverser = ObjectTraverser(
        Json5Dumper(fp, indent=indent),
        _build_config(config, options, default=VisitorConfig.dump_defaults()),
        _build_registry(registry, builtin_adapters),
    )
    traverser.traverse(value)


def dumps(
    value: Any,
    config: Optional[VisitorConfig] = None,
    registry: Optional[TypeAdapterRegistry] = None,
    indent: int = 4,
    builtin_adapters: bool = True,
    **options
) -> str:
    """Return value as JSON5 text. See dump()."""
    out = io.StringIO()
    dump(value, out, config, registry, indent, builtin_adapters, **options)
    return out.getvalue()
