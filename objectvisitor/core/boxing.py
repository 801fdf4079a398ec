"""Scalar classification and primitive array boxing.

Python has a single ``int`` and a single ``float`` type, so explicit
widths are carried by ctypes scalars (``ctypes.c_int16(3)``,
``ctypes.c_float(1.5)``...). Primitive arrays (``array.array``, ``bytes``,
``bytearray``) are boxed into lists of those ctypes scalars so that they
traverse exactly like a list holding the same boxed values.
"""

import ctypes
from array import array
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .events import ScalarKind


def _width_kind(size: int) -> ScalarKind:
    return {
        1: ScalarKind.INT8,
        2: ScalarKind.INT16,
        4: ScalarKind.INT32,
    }.get(size, ScalarKind.INT64)


_SIGNED_TYPES = (ctypes.c_byte, ctypes.c_short, ctypes.c_int,
                 ctypes.c_long, ctypes.c_longlong)
_UNSIGNED_TYPES = (ctypes.c_ubyte, ctypes.c_ushort, ctypes.c_uint,
                   ctypes.c_ulong, ctypes.c_ulonglong)

# Exact ctypes class -> kind. Platform aliases (c_int32 is c_int, ...)
# collapse onto the same class object.
CTYPES_KINDS: Dict[type, ScalarKind] = {
    ctypes.c_bool: ScalarKind.BOOLEAN,
    ctypes.c_char: ScalarKind.CHARACTER,
    ctypes.c_wchar: ScalarKind.CHARACTER,
    ctypes.c_float: ScalarKind.FLOAT32,
    ctypes.c_double: ScalarKind.FLOAT64,
    ctypes.c_longdouble: ScalarKind.FLOAT64,
}
for _ctype in _SIGNED_TYPES:
    CTYPES_KINDS[_ctype] = _width_kind(ctypes.sizeof(_ctype))
for _ctype in _UNSIGNED_TYPES:
    # Unsigned values widen to the next signed kind so no value changes sign.
    CTYPES_KINDS[_ctype] = _width_kind(min(ctypes.sizeof(_ctype) * 2, 8))
del _ctype

_SIGNED_BY_SIZE = {ctypes.sizeof(t): t for t in _SIGNED_TYPES}
_UNSIGNED_BY_SIZE = {ctypes.sizeof(t): t for t in _UNSIGNED_TYPES}


def _typecode_ctype(arr: array) -> Type[Any]:
    """Return the ctypes class used to box elements of ``arr``."""
    code = arr.typecode
    if code in 'bhilq':
        return _SIGNED_BY_SIZE[arr.itemsize]
    if code in 'BHILQ':
        return _UNSIGNED_BY_SIZE[arr.itemsize]
    if code == 'f':
        return ctypes.c_float
    if code == 'd':
        return ctypes.c_double
    if code in 'uw':
        return ctypes.c_wchar
    raise TypeError(f"Unsupported array typecode: {code!r}")


def is_primitive_array(value: Any) -> bool:
    """Check if value is a primitive array that must be boxed."""
    return isinstance(value, (array, bytes, bytearray))


def box_array(value: Any) -> List[Any]:
    """Box a primitive array into an ordered list of ctypes scalars.

    Args:
        value: ``array.array``, ``bytes`` or ``bytearray``

    Returns:
        List of ctypes scalars, one per element, in array order

    Raises:
        TypeError: If value is not a supported primitive array
    """
    if isinstance(value, (bytes, bytearray)):
        value = array('B', value)
    if not isinstance(value, array):
        raise TypeError(f"Not a primitive array: {type(value).__name__}")
    ctype = _typecode_ctype(value)
    return [ctype(item) for item in value]


def _ctypes_kind(value: Any) -> Optional[ScalarKind]:
    for klass in type(value).__mro__:
        kind = CTYPES_KINDS.get(klass)
        if kind is not None:
            return kind
    return None


def scalar_kind_of(value: Any) -> Optional[ScalarKind]:
    """Classify a value into a ScalarKind, or None if it is not a scalar.

    Enum members are checked first so that ``IntEnum`` and ``StrEnum``
    members stay enumerants instead of being reported as int or str.
    ``bool`` is checked before ``int`` since it subclasses it.
    """
    if isinstance(value, Enum):
        return ScalarKind.ENUM
    if isinstance(value, bool):
        return ScalarKind.BOOLEAN
    if isinstance(value, ctypes._SimpleCData):
        return _ctypes_kind(value)
    if isinstance(value, int):
        return ScalarKind.INT64
    if isinstance(value, float):
        return ScalarKind.FLOAT64
    if isinstance(value, str):
        return ScalarKind.STRING
    return None


def unbox(value: Any) -> Any:
    """Return the plain Python value carried by a (possibly boxed) scalar."""
    if isinstance(value, ctypes.c_char):
        return value.value.decode('latin-1')
    if isinstance(value, ctypes._SimpleCData):
        return value.value
    return value
