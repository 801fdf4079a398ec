"""Built-in type adapters.

Opaque standard library value types have no useful structure to
introspect. These adapters rewrite them to their canonical string or
numeric form. Order matters: the registry scans registrations in order,
so ``datetime`` must come before its base class ``date``.
"""

import datetime
import decimal
import fractions
import ipaddress
import pathlib
import re
import string
import uuid
from typing import Any, Callable, List, Tuple


def _iso_format(value: Any) -> str:
    return value.isoformat()


BUILTIN_ADAPTERS: List[Tuple[type, Callable[[Any], Any]]] = [
    (datetime.datetime, _iso_format),
    (datetime.date, _iso_format),
    (datetime.time, _iso_format),
    (datetime.timedelta, datetime.timedelta.total_seconds),
    (decimal.Decimal, str),
    (fractions.Fraction, str),
    (complex, str),
    (uuid.UUID, str),
    (pathlib.PurePath, str),
    (re.Pattern, lambda pattern: pattern.pattern),
    (string.Template, lambda template: template.template),
    (ipaddress.IPv4Address, str),
    (ipaddress.IPv6Address, str),
    (ipaddress.IPv4Network, str),
    (ipaddress.IPv6Network, str),
]
