"""Key-value model for ObjectVisitor.

A key-value object is a composite with named children: either a Mapping
(one child per entry) or an arbitrary object (one child per accepted
field and, optionally, per accepted accessor). All three sources of named
children are represented as Slots so the composer can treat them the same
way. Member discovery, the Python stand-in for reflection, lives here too.
"""

import dataclasses
import functools
import inspect
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Set, Tuple

from .events import KeyType


# Accessor methods must look like getters: get_x, is_x, getX, isX
GETTER_PATTERN = re.compile(r'^(?:get|is)(?:_(?=[A-Za-z0-9])|(?=[A-Z0-9]))')

# Identity and type introspection accessors never count as data
RESERVED_ACCESSORS = frozenset({'get_class', 'getClass', 'get_type', 'getType'})


@dataclass(frozen=True)
class Key:
    """A named slot inside a key-value object.

    For container keys ``name`` is the mapping key itself and may be any
    hashable value. For fields and accessors it is the display name.
    """
    name: Any
    origin: KeyType
    owner: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class FieldInfo:
    """Describes a structural field, as seen by inclusion predicates."""
    name: str
    owner_type: type
    is_static: bool = False
    is_transient: bool = False


@dataclass(frozen=True)
class AccessorInfo:
    """Describes an accessor: a property or a getter-style method."""
    name: str
    owner_type: type
    kind: str = 'property'  # 'property' or 'method'


class Slot(ABC):
    """One named child of a key-value object."""

    def __init__(self, key: Key):
        self.key = key

    @property
    def display_name(self) -> str:
        """Name used for case-insensitive member ordering."""
        return str(self.key.name)

    @abstractmethod
    def read(self) -> Any:
        """Read the child value. May raise for fields and accessors."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key.name!r})"


class FieldSlot(Slot):
    """Structural field of an object."""

    def __init__(self, owner: Any, info: FieldInfo, display_name: str):
        super().__init__(Key(display_name, KeyType.OBJECT_FIELD, owner))
        self.owner = owner
        self.info = info

    def read(self) -> Any:
        return getattr(self.owner, self.info.name)


class AccessorSlot(Slot):
    """Zero-argument accessor of an object (property or getter method)."""

    def __init__(self, owner: Any, info: AccessorInfo, display_name: str):
        super().__init__(Key(display_name, KeyType.OBJECT_ACCESSOR, owner))
        self.owner = owner
        self.info = info

    def read(self) -> Any:
        value = getattr(self.owner, self.info.name)
        if self.info.kind == 'method':
            return value()
        return value


class EntrySlot(Slot):
    """Entry of a Mapping. Reading it never fails."""

    def __init__(self, owner: Any, key: Any, value: Any):
        super().__init__(Key(key, KeyType.CONTAINER_KEY, owner))
        self._value = value

    def read(self) -> Any:
        return self._value


def is_synthesized(name: str) -> bool:
    """Dunder names belong to the interpreter, not to the object's data."""
    if name.startswith('_abc_'):
        return True  # ABCMeta bookkeeping
    return name.startswith('__') and name.endswith('__')


def _mangle(klass: type, name: str) -> str:
    if name.startswith('__') and not name.endswith('__'):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


def transient_names(cls: type) -> Set[str]:
    """Collect names of transient fields declared on cls and its bases.

    A field is transient when it is listed in a class-level ``__transient__``
    or declared as ``dataclasses.field(metadata={"transient": True})``.
    """
    names: Set[str] = set()
    for klass in reversed(cls.__mro__):
        declared = vars(klass).get('__transient__', ())
        if isinstance(declared, str):
            declared = (declared,)
        names.update(declared)
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            if f.metadata.get('transient'):
                names.add(f.name)
    return names


def _slot_names(obj: Any) -> Iterator[str]:
    """Yield initialised __slots__ entries, base classes first."""
    cls = type(obj)
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__'):
                continue
            name = _mangle(klass, name)
            descriptor = vars(klass).get(name)
            if descriptor is None:
                continue
            try:
                descriptor.__get__(obj, cls)
            except AttributeError:
                continue  # Declared but never assigned
            yield name


def _static_names(cls: type) -> List[str]:
    """Class-level data attributes, resolved like attribute lookup would."""
    resolved = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        resolved.update(vars(klass))
    return [
        name for name, value in resolved.items()
        if not callable(value) and not hasattr(value, '__get__')
    ]


def field_candidates(obj: Any) -> List[FieldInfo]:
    """List every structural field of obj in discovery order, unfiltered."""
    cls = type(obj)
    transients = transient_names(cls)
    seen: Set[str] = set()
    infos: List[FieldInfo] = []

    instance_dict = getattr(obj, '__dict__', None)
    names = list(instance_dict) if isinstance(instance_dict, dict) else []
    names.extend(_slot_names(obj))
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        infos.append(FieldInfo(name, cls, False, name in transients))

    for name in _static_names(cls):
        if name in seen:
            continue
        seen.add(name)
        infos.append(FieldInfo(name, cls, True, name in transients))
    return infos


def is_field_accepted(info: FieldInfo, config) -> bool:
    """Apply the field acceptance rules.

    Rejects synthesized names, transient fields unless included, static
    fields unless included, and fields refused by the user predicate.
    """
    if is_synthesized(info.name):
        return False
    if info.is_transient and not config.transient_fields_included:
        return False
    if info.is_static and not config.static_fields_included:
        return False
    predicate = config.field_inclusion_predicate
    if predicate is not None and not predicate(info):
        return False
    return True


def discover_fields(obj: Any, config) -> List[FieldSlot]:
    """Return the accepted field slots of obj, in discovery order."""
    name_function = config.field_name_function
    slots = []
    for info in field_candidates(obj):
        if not is_field_accepted(info, config):
            continue
        display = name_function(info) if name_function else info.name
        slots.append(FieldSlot(obj, info, display))
    return slots


def _returns_none(func) -> bool:
    try:
        annotation = inspect.signature(func).return_annotation
    except (TypeError, ValueError):
        return False
    return annotation is None or annotation == 'None'


def _takes_no_arguments(func) -> bool:
    """True if func, once bound to an instance, takes no parameters at all."""
    try:
        parameters = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False
    if len(parameters) != 1:
        return False
    return parameters[0].kind in (inspect.Parameter.POSITIONAL_ONLY,
                                  inspect.Parameter.POSITIONAL_OR_KEYWORD)


def accessor_candidates(obj: Any) -> List[Tuple[AccessorInfo, Any]]:
    """List (info, getter function) pairs, most-derived class first.

    Static and class methods are never candidates.
    """
    cls = type(obj)
    seen: Set[str] = set()
    candidates = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, property):
                if attr.fget is not None:
                    candidates.append((AccessorInfo(name, cls, 'property'), attr.fget))
            elif isinstance(attr, functools.cached_property):
                candidates.append((AccessorInfo(name, cls, 'property'), attr.func))
            elif inspect.isfunction(attr):
                candidates.append((AccessorInfo(name, cls, 'method'), attr))
    return candidates


def is_accessor_accepted(info: AccessorInfo, getter) -> bool:
    """Apply the accessor acceptance rules.

    Properties are Python's native getters and only need to be public and
    not declared as returning None. Methods must also follow the getter
    naming convention and take no arguments besides self.
    """
    if info.name.startswith('_') or info.name in RESERVED_ACCESSORS:
        return False
    if info.kind == 'method':
        if not GETTER_PATTERN.match(info.name):
            return False
        if not _takes_no_arguments(getter):
            return False
    return not _returns_none(getter)


def _decapitalize(name: str) -> str:
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name  # URL stays URL
    return name[:1].lower() + name[1:]


def default_accessor_name(info: AccessorInfo) -> str:
    """Bean-style display name: get_total -> total, isReady -> ready."""
    if info.kind != 'method':
        return info.name
    match = GETTER_PATTERN.match(info.name)
    if match is None:
        return info.name
    return _decapitalize(info.name[match.end():])


def discover_accessors(obj: Any, config) -> List[AccessorSlot]:
    """Return the accepted accessor slots of obj, in discovery order."""
    name_function = config.accessor_name_function or default_accessor_name
    slots = []
    for info, getter in accessor_candidates(obj):
        if not is_accessor_accepted(info, getter):
            continue
        slots.append(AccessorSlot(obj, info, name_function(info)))
    return slots


def entry_slots(mapping: Any, sort_keys: bool,
                key_order: Optional[Any] = None) -> List[EntrySlot]:
    """Return one slot per mapping entry, optionally sorted by key.

    Args:
        mapping: The Mapping to enumerate
        sort_keys: Whether to sort entries by key
        key_order: Sort key function used when sort_keys is True
    """
    slots = [EntrySlot(mapping, k, v) for k, v in mapping.items()]
    if sort_keys:
        slots.sort(key=lambda slot: key_order(slot.key.name))
    return slots
