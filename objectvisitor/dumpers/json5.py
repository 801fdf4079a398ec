"""JSON5-style dumper built on the Visitor interface.

The dumper does no introspection of its own: it rebuilds text purely
from traversal events. Every child is followed by a trailing comma,
which JSON5 allows.
"""

import ctypes
import math
import re
from typing import Any, TextIO

from ..core.events import KeyType, KeyValueObjectType, VisitEvent
from ..core.visitor import Visitor

UNQUOTED_KEY = re.compile(r'[A-Za-z0-9_]+')

_ESCAPES = {i: f'\\u{i:04x}' for i in range(0x20)}
_ESCAPES.update({
    ord('"'): '\\"',
    ord('\\'): '\\\\',
    ord('\t'): '\\t',
    ord('\b'): '\\b',
    ord('\n'): '\\n',
    ord('\r'): '\\r',
    ord('\f'): '\\f',
})


def quote(value: str) -> str:
    """Return value as a double-quoted, escaped JSON5 string literal."""
    return '"' + value.translate(_ESCAPES) + '"'


def format_float(value: float, single: bool = False) -> str:
    """Return value as a JSON5 number literal.

    Non-finite values use the JSON5 spellings ``Infinity``, ``-Infinity``
    and ``NaN``. With ``single``, value is a widened single-precision float
    and gets the shortest text that reads back to the same float32.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if single:
        for precision in range(1, 10):
            text = repr(float(f'{value:.{precision}g}'))
            if ctypes.c_float(float(text)).value == value:
                return text
    return repr(value)


class Json5Dumper(Visitor):
    """Writes visited values as indented JSON5 text.

    Example:
        >>> out = io.StringIO()
        >>> ObjectTraverser(Json5Dumper(out)).traverse({"a": [1, 2]})
        >>> print(out.getvalue())
        {
            a: [
                1,
                2,
            ],
        }
    """

    def __init__(self, writer: TextIO, indent: int = 4):
        """Initialize dumper.

        Args:
            writer: Text stream to write to
            indent: Spaces per nesting level
        """
        self.writer = writer
        self.indent = indent

    def write_indent(self) -> None:
        self.writer.write(' ' * (self.nesting_level * self.indent))

    def visit_null(self) -> None:
        self.writer.write('null')

    def visit_boolean(self, value: bool) -> None:
        self.writer.write('true' if value else 'false')

    def _write_number(self, value: Any) -> None:
        self.writer.write(repr(value))

    visit_int8 = _write_number
    visit_int16 = _write_number
    visit_int32 = _write_number
    visit_int64 = _write_number

    def visit_float32(self, value: float) -> None:
        self.writer.write(format_float(value, single=True))

    def visit_float64(self, value: float) -> None:
        self.writer.write(format_float(value))

    def visit_char(self, value: str) -> None:
        self.visit_string(value)

    def visit_string(self, value: str) -> None:
        self.writer.write(quote(value))

    def visit_key(self, key: Any, key_type: KeyType, parent: Any) -> None:
        name = '' if key is None else str(key)
        if UNQUOTED_KEY.fullmatch(name):
            self.writer.write(name)
        else:
            self.writer.write(quote(name))
        self.writer.write(': ')

    def _on_composite_event(self, event: VisitEvent, opening: str, closing: str) -> None:
        if event is VisitEvent.ENTER:
            self.writer.write(opening + '\n')
        elif event is VisitEvent.LEAVE:
            self.write_indent()
            self.writer.write(closing)
        elif event is VisitEvent.BEFORE_CHILD:
            self.write_indent()
        elif event is VisitEvent.AFTER_CHILD:
            self.writer.write(',\n')

    def on_key_value_object_event(self, event: VisitEvent,
                                  kind: KeyValueObjectType, obj: Any) -> None:
        self._on_composite_event(event, '{', '}')

    def on_sequence_event(self, event: VisitEvent, sequence: Any) -> None:
        self._on_composite_event(event, '[', ']')
