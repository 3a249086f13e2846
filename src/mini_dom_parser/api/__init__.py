"""Public parsing API with progressive disclosure.

Key Components:
    parse: Parse a document into a root node, raising on malformed markup
    parse_string, parse_file: Never-raising entry points returning ParseResult
    MarkupParser: Configured, reusable parser with usage statistics
    get_adapter: Access integration adapters (dict, lxml)
"""

from .adapters import (
    ConversionResult,
    DictAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .parser import MarkupParser, parse, parse_file, parse_string

__all__ = [
    "ConversionResult",
    "DictAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "MarkupParser",
    "get_adapter",
    "list_available_adapters",
    "parse",
    "parse_file",
    "parse_string",
    "register_adapter",
]
