"""Object traversal engine for ObjectVisitor.

The ObjectTraverser classifies any runtime value and routes it to the
right composer, emitting events to a Visitor. It works on any object
graph; types that should not be introspected are rewritten through the
TypeAdapterRegistry first.
"""

from collections.abc import Iterable, Mapping, Set
from typing import Any, Optional

from ..config import VisitorConfig
from ..errors import ConfigurationError
from .boxing import box_array, is_primitive_array, scalar_kind_of, unbox
from .composers import KeyValueComposer, SequenceComposer
from .guard import CycleGuard, TraversalContext
from .registry import TypeAdapterRegistry
from .visitor import Visitor


class ObjectTraverser:
    """Depth-first traversal of arbitrary object graphs.

    Classification precedence (first match wins):
        None -> scalar kinds -> Mapping -> Set -> primitive array ->
        other Iterable -> type adapter -> introspected object

    Mappings and sets come before the generic Iterable case because they
    are iterable too. Primitive arrays come before it so their elements
    keep their width. Type adapters are only consulted for values that
    would otherwise be introspected.

    An instance holds mutable per-traversal state: reuse it sequentially,
    never from two threads at once.
    """

    def __init__(self,
                 visitor: Visitor,
                 config: Optional[VisitorConfig] = None,
                 registry: Optional[TypeAdapterRegistry] = None):
        """Initialize traverser.

        Args:
            visitor: Consumer of traversal events
            config: Traversal options (defaults to VisitorConfig())
            registry: Type adapters (defaults to an empty registry)

        Raises:
            ConfigurationError: If config is invalid
        """
        self.visitor = visitor
        self.config = config if config is not None else VisitorConfig()
        self._check_config()
        self.registry = registry if registry is not None else TypeAdapterRegistry()
        self.context = TraversalContext()
        self.guard = CycleGuard(self.context, enabled=False)
        self.objects = KeyValueComposer(self)
        self.sequences = SequenceComposer(self)
        visitor.context = self.context

    def _check_config(self) -> None:
        errors = self.config.validate()
        if errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(errors)}"
            )

    @property
    def nesting_level(self) -> int:
        """Current nesting depth, 0 at the root."""
        return self.context.depth

    def traverse(self, value: Any) -> None:
        """Traverse value and everything reachable from it.

        Starts from a fresh TraversalContext. The root itself goes on the
        ancestor stack, so references back to it are detected. When called
        from inside a running traversal on the same instance, value is
        traversed within the current context instead. Both configured error
        policies are reset before a fresh traversal starts.

        Args:
            value: Any value, including None

        Raises:
            ConfigurationError: If the config was made invalid since init
            MemberAccessError: If a member read failure is fatal per policy
            Exception: Anything raised by the visitor, unchanged
        """
        if self.context.active:
            self.dispatch(value)
            return

        self._check_config()
        self.config.field_error_policy.reset()
        self.config.accessor_error_policy.reset()
        self.context = TraversalContext(active=True)
        self.visitor.context = self.context
        self.guard = CycleGuard(
            self.context,
            enabled=self.config.detect_cycles,
            replacement=self.config.already_visited_replacement,
        )
        try:
            decision = self.guard.enter(value)
            try:
                self.dispatch(decision.value)
            finally:
                self.guard.leave()
        finally:
            self.context.active = False

    def dispatch(self, value: Any) -> None:
        """Classify value and hand it to the matching visit or composer."""
        if value is None:
            self.visitor.visit_null()
            return

        kind = scalar_kind_of(value)
        if kind is not None:
            getattr(self.visitor, kind.visit_method)(unbox(value))
        elif isinstance(value, Mapping):
            self.objects.compose_map(value)
        elif isinstance(value, Set):
            self.sequences.compose_set(value)
        elif is_primitive_array(value):
            self.sequences.compose_sequence(box_array(value), source=value)
        elif isinstance(value, Iterable):
            self.sequences.compose_sequence(value)
        else:
            adapter = self.registry.resolve(value)
            if adapter is not None:
                self.dispatch(adapter(value))
            else:
                self.objects.compose_object(value)
