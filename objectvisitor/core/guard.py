"""Cycle detection for ObjectVisitor.

The guard keeps the values on the active root-to-node path and compares
them by identity, never by equality. It prevents infinite recursion; it
does not deduplicate, so two sibling branches may share an object.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass
class TraversalContext:
    """Per-traversal mutable state.

    Created for each top-level traversal and discarded afterwards.
    Not safe to share between concurrent traversals.
    """
    depth: int = 0
    ancestors: List[Any] = field(default_factory=list)
    active: bool = False

    def reset(self) -> None:
        self.depth = 0
        self.ancestors.clear()
        self.active = False


@dataclass(frozen=True)
class Decision:
    """Outcome of CycleGuard.enter()."""
    proceed: bool
    value: Any = None


SKIP = Decision(False)


class CycleGuard:
    """Ancestor-stack cycle guard.

    Every ``enter()`` that returns a proceeding Decision must be matched by
    exactly one ``leave()``, including when traversing the child raises.
    """

    def __init__(self, context: TraversalContext, enabled: bool = True,
                 replacement: Optional[Callable[[Any], Any]] = None):
        """Initialize guard.

        Args:
            context: Traversal context holding the ancestor stack
            enabled: When False, enter() always proceeds and leave() is a no-op
            replacement: Function(already visited value) -> value emitted
                instead; when None, re-entrant values are skipped
        """
        self.context = context
        self.enabled = enabled
        self.replacement = replacement

    def contains(self, obj: Any) -> bool:
        """Check whether obj is on the active path (identity comparison)."""
        return any(ancestor is obj for ancestor in self.context.ancestors)

    def enter(self, child: Any) -> Decision:
        """Decide whether child may be traversed, and push it if so."""
        if not self.enabled:
            return Decision(True, child)
        if self.contains(child):
            if self.replacement is None:
                return SKIP
            child = self.replacement(child)
        self.context.ancestors.append(child)
        return Decision(True, child)

    def leave(self) -> None:
        """Pop the value pushed by the matching enter()."""
        if self.enabled:
            self.context.ancestors.pop()
