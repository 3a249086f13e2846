"""Tests for cursor scanning primitives."""

import pytest

from mini_dom_parser.parsing import Cursor
from mini_dom_parser.shared import (
    SourcePosition,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
)


class TestPeeking:
    """Tests for lookahead without consumption."""

    def test_next_char(self):
        """Test peeking does not advance."""
        cursor = Cursor("abc")
        assert cursor.next_char() == "a"
        assert cursor.next_char() == "a"
        assert cursor.pos == 0

    def test_next_char_at_end(self):
        """Test peeking past the end fails."""
        with pytest.raises(UnexpectedEndOfInput):
            Cursor("").next_char()

    def test_next_two_chars(self):
        """Test two-character lookahead."""
        cursor = Cursor("abc")
        assert cursor.next_two_chars() == ("a", "b")
        assert cursor.pos == 0

    def test_next_two_chars_needs_two(self):
        """Test two-character lookahead with one character left."""
        cursor = Cursor("abc", pos=2)
        with pytest.raises(UnexpectedEndOfInput):
            cursor.next_two_chars()

    def test_starts_with_and_eof(self):
        """Test literal prefix checks relative to the cursor."""
        cursor = Cursor("<a></a>", pos=3)
        assert cursor.starts_with("</")
        assert not cursor.starts_with("<a")
        assert not cursor.eof()
        cursor.pos = 7
        assert cursor.eof()


class TestConsuming:
    """Tests for consuming characters."""

    def test_consume_char_advances(self):
        """Test consuming returns the character and moves forward."""
        cursor = Cursor("ab")
        assert cursor.consume_char() == "a"
        assert cursor.consume_char() == "b"
        assert cursor.eof()
        with pytest.raises(UnexpectedEndOfInput):
            cursor.consume_char()

    def test_consume_char_multibyte(self):
        """Test multi-byte characters are consumed whole."""
        cursor = Cursor("é世🎉x")
        assert [cursor.consume_char() for _ in range(4)] == ["é", "世", "🎉", "x"]
        assert cursor.eof()

    def test_consume_while(self):
        """Test consuming a maximal run."""
        cursor = Cursor("abc123!")
        assert cursor.consume_while(str.isalpha) == "abc"
        assert cursor.consume_while(str.isalpha) == ""
        assert cursor.consume_while(str.isdigit) == "123"
        assert cursor.next_char() == "!"

    def test_consume_while_to_end(self):
        """Test a run reaching end of input."""
        cursor = Cursor("aaa")
        assert cursor.consume_while(lambda c: c == "a") == "aaa"
        assert cursor.eof()

    def test_consume_whitespace(self):
        """Test whitespace runs are discarded."""
        cursor = Cursor(" \t\n\r　x")
        cursor.consume_whitespace()
        assert cursor.next_char() == "x"

    def test_consume_until(self):
        """Test consuming up to a literal."""
        cursor = Cursor(" a-b -->rest")
        assert cursor.consume_until("-->") == " a-b "
        assert cursor.starts_with("-->")

    def test_consume_until_missing_literal(self):
        """Test a missing literal leaves the cursor in place."""
        cursor = Cursor("abc")
        with pytest.raises(UnexpectedEndOfInput):
            cursor.consume_until("-->")
        assert cursor.pos == 0

    def test_expect(self):
        """Test literal expectations."""
        cursor = Cursor("<!--x")
        cursor.expect("<!--")
        assert cursor.next_char() == "x"

    def test_expect_mismatch(self):
        """Test a mismatching literal reports what was found."""
        cursor = Cursor("<!x")
        with pytest.raises(UnexpectedCharacter) as exc_info:
            cursor.expect("<!--")
        assert exc_info.value.expected == "-"
        assert exc_info.value.found == "x"
        assert exc_info.value.position.offset == 2

    def test_expect_at_end(self):
        """Test a literal cut off by end of input."""
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            Cursor("<!").expect("<!--")
        assert exc_info.value.expected == "-"


class TestPositions:
    """Tests for line and column computation."""

    def test_position_first_line(self):
        """Test positions on the first line."""
        cursor = Cursor("abc", pos=2)
        assert cursor.position == SourcePosition(line=1, column=3, offset=2)

    def test_position_after_newlines(self):
        """Test positions on later lines."""
        cursor = Cursor("ab\ncd\nef")
        assert cursor.position_at(3) == SourcePosition(2, 1, 3)
        assert cursor.position_at(7) == SourcePosition(3, 2, 7)
        assert cursor.position_at(8) == SourcePosition(3, 3, 8)

    def test_position_validation(self):
        """Test SourcePosition rejects invalid values."""
        with pytest.raises(ValueError, match="Line number must be >= 1"):
            SourcePosition(line=0, column=1, offset=0)
        with pytest.raises(ValueError, match="Column number must be >= 1"):
            SourcePosition(line=1, column=0, offset=0)
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            SourcePosition(line=1, column=1, offset=-1)
