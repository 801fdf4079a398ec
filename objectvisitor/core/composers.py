"""Composite composers for ObjectVisitor.

Composers turn one composite value into an ordered, filtered list of
children and drive the visitor's lifecycle events around them:

    ENTER
      BEFORE_CHILD, [key], <child>, AFTER_CHILD
      BETWEEN_CHILDREN, BEFORE_CHILD, [key], <child>, AFTER_CHILD
      ...
    LEAVE

The nesting depth is incremented before ENTER and decremented before
LEAVE, so LEAVE is reported at the depth of the composite itself.
"""

import functools
import logging
from collections.abc import Sequence
from typing import Any, Iterable, List, Optional, TYPE_CHECKING

from ..error_policies import ABSENT
from .events import KeyType, KeyValueObjectType, VisitEvent
from .key import Slot, discover_accessors, discover_fields, entry_slots

if TYPE_CHECKING:
    from .traverser import ObjectTraverser

logger = logging.getLogger(__name__)


def compare_keys(a: Any, b: Any) -> int:
    """Compare two mapping keys.

    Natural ordering is used when the two keys support it; otherwise their
    string forms are compared. Never raises for mixed key types.
    """
    try:
        if a < b:
            return -1
        if b < a:
            return 1
        return 0
    except TypeError:
        sa, sb = str(a), str(b)
        return (sa > sb) - (sa < sb)


MAP_KEY_ORDER = functools.cmp_to_key(compare_keys)


def member_order(slot: Slot) -> str:
    """Case-insensitive display name ordering for object members."""
    return slot.display_name.lower()


def is_ordered_set(value: Any) -> bool:
    """A set that is also a Sequence (e.g. a SortedSet) keeps its own order."""
    return isinstance(value, Sequence)


def sorted_set_view(value: Any) -> Iterable[Any]:
    """Return value in natural order, or unchanged if it cannot be sorted."""
    if is_ordered_set(value):
        return value
    try:
        return sorted(value)
    except TypeError as e:
        logger.debug("Keeping iteration order of unsortable %s: %s",
                     type(value).__name__, e)
        return value


class Composer:
    """Shared plumbing: access to the traverser's visitor, config and guard."""

    def __init__(self, traverser: 'ObjectTraverser'):
        self.traverser = traverser

    @property
    def visitor(self):
        return self.traverser.visitor

    @property
    def config(self):
        return self.traverser.config

    @property
    def context(self):
        return self.traverser.context


class KeyValueComposer(Composer):
    """Composes Mappings and introspected objects."""

    def compose_object(self, obj: Any) -> None:
        """Traverse obj's accepted fields and accessors as one key set."""
        config = self.config
        slots: List[Slot] = []
        if config.fields_included:
            slots.extend(discover_fields(obj, config))
        if config.getters_included:
            slots.extend(discover_accessors(obj, config))
        if config.sort_fields():
            slots.sort(key=member_order)
        self._compose(KeyValueObjectType.OBJECT, obj, slots)

    def compose_map(self, mapping: Any) -> None:
        """Traverse mapping entries, sorted by key if configured."""
        slots = entry_slots(mapping, self.config.sort_map_entries(), MAP_KEY_ORDER)
        self._compose(KeyValueObjectType.MAP, mapping, slots)

    def read(self, slot: Slot) -> Any:
        """Read a slot, delegating failures to the member kind's policy."""
        try:
            return slot.read()
        except RecursionError:
            raise
        except Exception as error:
            if slot.key.origin is KeyType.OBJECT_ACCESSOR:
                policy = self.config.accessor_error_policy
            else:
                policy = self.config.field_error_policy
            return policy.handle(error, slot)

    def _compose(self, kind: KeyValueObjectType, obj: Any, slots: List[Slot]) -> None:
        visitor = self.visitor
        config = self.config
        guard = self.traverser.guard
        context = self.context
        context.depth += 1
        try:
            visitor.on_key_value_object_event(VisitEvent.ENTER, kind, obj)
            first = True
            for slot in slots:
                child = self.read(slot)
                if child is ABSENT or not config.accepts_value(child):
                    continue
                decision = guard.enter(child)
                if not decision.proceed:
                    continue
                try:
                    if not first:
                        visitor.on_key_value_object_event(VisitEvent.BETWEEN_CHILDREN, kind, obj)
                    first = False
                    visitor.on_key_value_object_event(VisitEvent.BEFORE_CHILD, kind, obj)
                    visitor.visit_key(slot.key.name, slot.key.origin, obj)
                    self.traverser.dispatch(decision.value)
                    visitor.on_key_value_object_event(VisitEvent.AFTER_CHILD, kind, obj)
                finally:
                    guard.leave()
        finally:
            context.depth -= 1
        visitor.on_key_value_object_event(VisitEvent.LEAVE, kind, obj)


class SequenceComposer(Composer):
    """Composes iterables, sets and boxed primitive arrays.

    Sequence elements are not pushed on the ancestor stack.
    """

    def compose_set(self, value: Any) -> None:
        """Traverse a set, in natural order when configured and possible."""
        elements = sorted_set_view(value) if self.config.sets_sorted else value
        self.compose_sequence(elements, source=value)

    def compose_sequence(self, elements: Iterable[Any], source: Optional[Any] = None) -> None:
        """Traverse elements in iteration order.

        Args:
            elements: Children to traverse
            source: Value reported with the events, defaults to elements
        """
        if source is None:
            source = elements
        visitor = self.visitor
        config = self.config
        context = self.context
        context.depth += 1
        try:
            visitor.on_sequence_event(VisitEvent.ENTER, source)
            first = True
            for child in elements:
                if not config.accepts_value(child):
                    continue
                if not first:
                    visitor.on_sequence_event(VisitEvent.BETWEEN_CHILDREN, source)
                first = False
                visitor.on_sequence_event(VisitEvent.BEFORE_CHILD, source)
                self.traverser.dispatch(child)
                visitor.on_sequence_event(VisitEvent.AFTER_CHILD, source)
        finally:
            context.depth -= 1
        visitor.on_sequence_event(VisitEvent.LEAVE, source)
