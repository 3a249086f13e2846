"""Markup parsing layer.

Key Components:
    Cursor: Forward-only scanning primitives over the source string
    Parser: Recursive-descent grammar producing a Node tree
    parse: Parse a complete document into a single root node
"""

from .cursor import Cursor
from .parser import Parser, parse

__all__ = [
    "Cursor",
    "Parser",
    "parse",
]
