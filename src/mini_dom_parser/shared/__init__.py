"""Shared utilities for markup parsing.

This module provides the typed errors, configuration objects, result types and
logging helpers used across the parsing, API and CLI layers.
"""

from .config import (
    CommentMode,
    ParserConfig,
)
from .errors import (
    ConfigError,
    ConfigValidationError,
    InputTooLarge,
    MarkupError,
    MarkupParseError,
    MismatchedClosingTag,
    NestingTooDeep,
    SourcePosition,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnterminatedAttributeValue,
    UnterminatedComment,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseResult,
    PerformanceMetrics,
)

__all__ = [
    "CommentMode",
    "ParserConfig",
    "ConfigError",
    "ConfigValidationError",
    "InputTooLarge",
    "MarkupError",
    "MarkupParseError",
    "MismatchedClosingTag",
    "NestingTooDeep",
    "SourcePosition",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "UnterminatedAttributeValue",
    "UnterminatedComment",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseResult",
    "PerformanceMetrics",
]
