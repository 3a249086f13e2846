"""Mini DOM Parser.

A small recursive-descent markup parser that turns a complete document into
an immutable tree of element, text and comment nodes, for use by toy
rendering engines.

Progressive API Disclosure:
- Level 1: parse() returns the root node or raises MarkupParseError
- Level 2: parse_string() and parse_file() return a ParseResult
- Level 3: MarkupParser class with configuration and statistics
"""

__version__ = "0.1.0"
__author__ = "Mini DOM Parser Team"

from .api import MarkupParser, parse, parse_file, parse_string
from .dom import (
    Comment,
    Element,
    ElementData,
    Node,
    Text,
    make_comment,
    make_element,
    make_text,
    pretty_print,
    to_dict,
    to_markup,
)
from .shared import (
    CommentMode,
    MarkupError,
    MarkupParseError,
    MismatchedClosingTag,
    ParseResult,
    ParserConfig,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnterminatedAttributeValue,
    UnterminatedComment,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1 and 2: parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 3: configured parser class
    "MarkupParser",

    # Tree model
    "Node",
    "Text",
    "Element",
    "Comment",
    "ElementData",
    "make_text",
    "make_element",
    "make_comment",
    "to_markup",
    "to_dict",
    "pretty_print",

    # Results, configuration and errors
    "ParseResult",
    "ParserConfig",
    "CommentMode",
    "MarkupError",
    "MarkupParseError",
    "MismatchedClosingTag",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "UnterminatedAttributeValue",
    "UnterminatedComment",
]
