"""Configuration system for ObjectVisitor.

This module defines how users specify what a traversal includes, how it
orders keys, how it handles cycles and how it reacts to member read
failures. Options are read at traversal time; changing them while a
traversal is in flight has undefined effect.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .core.key import AccessorInfo, FieldInfo
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy, FailFastPolicy


@dataclass
class VisitorConfig:
    """Complete configuration for object traversal.

    ``fields_sorted`` and ``map_entries_sorted`` override ``keys_sorted``
    for one kind of key-value object when set; left as None they follow it.
    """

    # Inclusion
    nulls_included: bool = False
    fields_included: bool = True
    getters_included: bool = False
    transient_fields_included: bool = False
    static_fields_included: bool = False
    field_inclusion_predicate: Optional[Callable[[FieldInfo], bool]] = None
    class_inclusion_predicate: Optional[Callable[[type], bool]] = None

    # Ordering
    keys_sorted: bool = True
    fields_sorted: Optional[bool] = None
    map_entries_sorted: Optional[bool] = None
    sets_sorted: bool = True  # Best effort

    # Cycles
    detect_cycles: bool = True
    already_visited_replacement: Optional[Callable[[Any], Any]] = None

    # Display names
    field_name_function: Optional[Callable[[FieldInfo], str]] = None
    accessor_name_function: Optional[Callable[[AccessorInfo], str]] = None

    # Member read failures
    field_error_policy: ErrorPolicy = field(default_factory=FailFastPolicy)
    accessor_error_policy: ErrorPolicy = field(default_factory=ContinueOnErrorsPolicy)

    def sort_fields(self) -> bool:
        """Whether object members are sorted by display name."""
        if self.fields_sorted is None:
            return self.keys_sorted
        return self.fields_sorted

    def sort_map_entries(self) -> bool:
        """Whether mapping entries are sorted by key."""
        if self.map_entries_sorted is None:
            return self.keys_sorted
        return self.map_entries_sorted

    def accepts_value(self, value: Any) -> bool:
        """Check the value-level inclusion filter.

        A rejected value is dropped together with its key.
        """
        if value is None:
            return self.nulls_included
        predicate = self.class_inclusion_predicate
        if predicate is not None and not predicate(type(value)):
            return False
        return True

    # Convenience constructors for common configurations

    @classmethod
    def dump_defaults(cls) -> 'VisitorConfig':
        """Config for human-readable dumps.

        Nulls are kept and back-references print as ``"<skipped>"``.
        """
        return cls(
            nulls_included=True,
            already_visited_replacement=lambda value: "<skipped>",
        )

    @classmethod
    def strict(cls) -> 'VisitorConfig':
        """Config that aborts on any field or accessor read failure."""
        return cls(
            field_error_policy=FailFastPolicy(),
            accessor_error_policy=FailFastPolicy(),
        )

    @classmethod
    def unordered(cls) -> 'VisitorConfig':
        """Config that keeps discovery order everywhere."""
        return cls(keys_sorted=False, sets_sorted=False)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for name in ('field_inclusion_predicate', 'class_inclusion_predicate',
                     'already_visited_replacement', 'field_name_function',
                     'accessor_name_function'):
            value = getattr(self, name)
            if value is not None and not callable(value):
                errors.append(f"{name} must be callable")

        for name in ('field_error_policy', 'accessor_error_policy'):
            if not isinstance(getattr(self, name), ErrorPolicy):
                errors.append(f"{name} must be an ErrorPolicy instance")

        return errors
