"""Typed errors raised by markup parsing and configuration.

Every structural violation found while scanning a document is reported as a
subclass of MarkupParseError carrying the position where the grammar was
first violated. Parsing never returns a partial tree.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SourcePosition:
    """Position information within a source document."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        """Convert position to dictionary representation."""
        return {"line": self.line, "column": self.column, "offset": self.offset}

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class MarkupError(Exception):
    """Base exception for all mini-dom-parser errors."""


class MarkupParseError(MarkupError):
    """Base exception for structural violations found while parsing."""

    code = "parse-error"

    def __init__(self, message: str, position: Optional[SourcePosition] = None):
        if position is not None:
            message = f"{message} at {position}"
        super().__init__(message)
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "code": self.code,
            "message": str(self),
            "position": self.position.to_dict() if self.position else None,
        }


class UnexpectedEndOfInput(MarkupParseError):
    """A scan needed at least one more character than remained."""

    code = "unexpected-end-of-input"

    def __init__(self, position: SourcePosition, expected: Optional[str] = None):
        message = "Unexpected end of input"
        if expected:
            message = f"{message} (expected {expected!r})"
        super().__init__(message, position)
        self.expected = expected


class UnexpectedCharacter(MarkupParseError):
    """A literal character or quote did not match."""

    code = "unexpected-character"

    def __init__(self, expected: str, found: str, position: SourcePosition):
        super().__init__(f"Expected {expected!r} but found {found!r}", position)
        self.expected = expected
        self.found = found


class MismatchedClosingTag(MarkupParseError):
    """The closing tag name differs from the currently open element."""

    code = "mismatched-closing-tag"

    def __init__(self, opened: str, closed: str, position: SourcePosition):
        super().__init__(
            f"Closing tag </{closed}> does not match open element <{opened}>",
            position,
        )
        self.opened = opened
        self.closed = closed


class UnterminatedComment(MarkupParseError):
    """A comment was opened but never closed before end of input."""

    code = "unterminated-comment"

    def __init__(self, position: SourcePosition):
        super().__init__("Comment is never terminated", position)


class UnterminatedAttributeValue(MarkupParseError):
    """An attribute value quote was opened but never closed."""

    code = "unterminated-attribute-value"

    def __init__(self, position: SourcePosition, quote: str = '"'):
        super().__init__(f"Attribute value opened with {quote} is never closed", position)
        self.quote = quote


class NestingTooDeep(MarkupParseError):
    """Element nesting exceeded the configured maximum depth."""

    code = "nesting-too-deep"

    def __init__(self, max_depth: int, position: SourcePosition):
        super().__init__(f"Element nesting exceeds maximum depth of {max_depth}", position)
        self.max_depth = max_depth


class InputTooLarge(MarkupParseError):
    """The input document exceeds the configured size limit."""

    code = "input-too-large"

    def __init__(self, size: int, limit: int):
        super().__init__(f"Input of {size} characters exceeds limit of {limit}")
        self.size = size
        self.limit = limit


class ConfigError(MarkupError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
