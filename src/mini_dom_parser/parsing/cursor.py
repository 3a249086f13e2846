"""Cursor-based scanning primitives over an immutable input string.

The cursor only ever moves forward. Offsets count code points, so consuming
a character always lands on the next character boundary regardless of how
many bytes it would occupy when encoded.
"""

from bisect import bisect_right
from typing import Callable, List, Tuple

from mini_dom_parser.shared.errors import (
    SourcePosition,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
)


class Cursor:
    """A forward-only read position within a source document."""

    def __init__(self, source: str, pos: int = 0) -> None:
        self.source = source
        self.pos = pos
        self._line_starts: List[int] = []

    def eof(self) -> bool:
        return self.pos >= len(self.source)

    def next_char(self) -> str:
        """Peek the current character without consuming it."""
        if self.eof():
            raise UnexpectedEndOfInput(self.position)
        return self.source[self.pos]

    def next_two_chars(self) -> Tuple[str, str]:
        """Peek the next two characters as a pair."""
        if self.pos + 2 > len(self.source):
            raise UnexpectedEndOfInput(self.position_at(len(self.source)))
        return self.source[self.pos], self.source[self.pos + 1]

    def starts_with(self, literal: str) -> bool:
        return self.source.startswith(literal, self.pos)

    def consume_char(self) -> str:
        """Return the current character and advance past it."""
        char = self.next_char()
        self.pos += 1
        return char

    def consume_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume the maximal run of characters satisfying ``predicate``."""
        start = self.pos
        end = len(self.source)
        pos = start
        while pos < end and predicate(self.source[pos]):
            pos += 1
        self.pos = pos
        return self.source[start:pos]

    def consume_until(self, literal: str) -> str:
        """Consume everything before the next occurrence of ``literal``.

        Raises UnexpectedEndOfInput, leaving the cursor unmoved, if
        ``literal`` never occurs.
        """
        index = self.source.find(literal, self.pos)
        if index < 0:
            raise UnexpectedEndOfInput(self.position_at(len(self.source)), literal)
        start, self.pos = self.pos, index
        return self.source[start:index]

    def consume_whitespace(self) -> None:
        self.consume_while(str.isspace)

    def expect(self, literal: str) -> None:
        """Consume ``literal`` one character at a time or raise."""
        for expected in literal:
            if self.eof():
                raise UnexpectedEndOfInput(self.position, expected)
            found = self.source[self.pos]
            if found != expected:
                raise UnexpectedCharacter(expected, found, self.position)
            self.pos += 1

    @property
    def position(self) -> SourcePosition:
        """Line, column and offset of the cursor."""
        return self.position_at(self.pos)

    def position_at(self, offset: int) -> SourcePosition:
        """Line, column and offset of an arbitrary offset into the source."""
        if not self._line_starts:
            self._line_starts = [0]
            self._line_starts.extend(
                i + 1 for i, char in enumerate(self.source) if char == "\n"
            )
        line = bisect_right(self._line_starts, offset)
        column = offset - self._line_starts[line - 1] + 1
        return SourcePosition(line=line, column=column, offset=offset)
