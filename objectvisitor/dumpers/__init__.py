"""Visitors that turn traversal events into text."""

from .json5 import Json5Dumper, format_float, quote

__all__ = [
    "Json5Dumper",
    "format_float",
    "quote",
]
