"""Recursive-descent markup parser.

Each grammar rule consumes one syntactic unit from the cursor and returns the
nodes built from it. The first structural violation raises a
MarkupParseError subclass and abandons the whole parse.
"""

import time
from typing import Dict, List, Optional, Tuple

from mini_dom_parser.dom.node import AttrMap, Node, make_comment, make_element, make_text
from mini_dom_parser.shared.config import CommentMode, ParserConfig
from mini_dom_parser.shared.errors import (
    InputTooLarge,
    MismatchedClosingTag,
    NestingTooDeep,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnterminatedAttributeValue,
    UnterminatedComment,
)
from mini_dom_parser.shared.logging import get_logger

from .cursor import Cursor

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
CLOSING_TAG_OPEN = "</"
QUOTE_CHARS = ("\"", "'")
MS_PER_SECOND = 1000


def is_name_char(char: str) -> bool:
    """Tag and attribute names are ASCII letters and digits only."""
    return char.isascii() and char.isalnum()


class Parser:
    """Markup parser holding the cursor for a single document."""

    def __init__(self, source: str, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.cursor = Cursor(source)
        self.depth = 0
        self.logger = get_logger(__name__, self.config.correlation_id, "parser")

    def parse(self) -> Node:
        """Parse the whole document into a single root node."""
        source = self.cursor.source
        limit = self.config.max_input_size
        if limit is not None and len(source) > limit:
            raise InputTooLarge(len(source), limit)

        start_time = time.time()
        self.logger.debug("Starting document parse", extra={"content_length": len(source)})

        try:
            nodes = self.parse_nodes()
        except RecursionError as e:
            # max_depth set above what the interpreter stack can hold
            self.logger.warning(
                "Interpreter recursion limit reached before max_depth",
                extra={"depth": self.depth, "max_depth": self.config.max_depth},
            )
            raise NestingTooDeep(self.depth, self.cursor.position) from e
        if not self.cursor.eof():
            # Only a stray closing tag can stop the top-level sequence early
            raise UnexpectedCharacter("end of input", CLOSING_TAG_OPEN, self.cursor.position)

        if len(nodes) == 1:
            root = nodes[0]
        else:
            root = make_element(self.config.synthetic_root_tag, {}, nodes)

        self.logger.debug(
            "Document parse complete",
            extra={
                "top_level_nodes": len(nodes),
                "synthetic_root": len(nodes) != 1,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            },
        )
        return root

    def parse_nodes(self) -> List[Node]:
        """Parse sibling nodes until end of input or a closing tag."""
        nodes = []
        while True:
            self.cursor.consume_whitespace()
            if self.cursor.eof() or self.cursor.starts_with(CLOSING_TAG_OPEN):
                break
            nodes.append(self.parse_node())
        return nodes

    def parse_node(self) -> Node:
        """Dispatch on lookahead to the comment, element or text rule."""
        if self.cursor.next_char() != "<":
            return self.parse_text()
        if self.cursor.next_two_chars() == ("<", "!"):
            return self.parse_comment()
        return self.parse_element()

    def parse_text(self) -> Node:
        return make_text(self.cursor.consume_while(lambda c: c != "<"))

    def parse_comment(self) -> Node:
        """Parse ``<!-- body -->`` into a comment node."""
        start = self.cursor.position
        self.cursor.expect(COMMENT_OPEN)

        try:
            if self.config.comment_mode is CommentMode.TERMINATOR:
                content = self.cursor.consume_until(COMMENT_CLOSE)
            else:
                content = self.cursor.consume_while(lambda c: c != "-")
            self.cursor.expect(COMMENT_CLOSE)
        except UnexpectedEndOfInput as e:
            raise UnterminatedComment(start) from e
        return make_comment(content)

    def parse_tag_name(self) -> str:
        return self.cursor.consume_while(is_name_char)

    def parse_attr_value(self) -> str:
        """Parse a single- or double-quoted attribute value."""
        start = self.cursor.position
        open_quote = self.cursor.consume_char()
        if open_quote not in QUOTE_CHARS:
            raise UnexpectedCharacter("quote", open_quote, start)

        value = self.cursor.consume_while(lambda c: c != open_quote)
        if self.cursor.eof():
            raise UnterminatedAttributeValue(start, open_quote)
        self.cursor.expect(open_quote)
        return value

    def parse_attr(self) -> Tuple[str, str]:
        name = self.parse_tag_name()
        self.cursor.expect("=")
        value = self.parse_attr_value()
        return name, value

    def parse_attributes(self) -> AttrMap:
        """Parse attributes up to the ``>`` closing the start tag."""
        attributes: Dict[str, str] = {}
        while True:
            self.cursor.consume_whitespace()
            if self.cursor.next_char() == ">":
                break
            name, value = self.parse_attr()
            attributes[name] = value
        return attributes

    def parse_element(self) -> Node:
        """Parse an element, its children and its matching closing tag."""
        start = self.cursor.position
        if self.depth >= self.config.max_depth:
            raise NestingTooDeep(self.config.max_depth, start)

        self.cursor.expect("<")
        tag_name = self.parse_tag_name()
        attributes = self.parse_attributes()
        self.cursor.expect(">")

        self.depth += 1
        children = self.parse_nodes()
        self.depth -= 1

        self.cursor.expect(CLOSING_TAG_OPEN)
        closing_position = self.cursor.position
        closing_name = self.parse_tag_name()
        if closing_name != tag_name:
            raise MismatchedClosingTag(tag_name, closing_name, closing_position)
        self.cursor.expect(">")

        return make_element(tag_name, attributes, children)


def parse(source: str, config: Optional[ParserConfig] = None) -> Node:
    """Parse ``source`` into a single root node.

    Raises:
        MarkupParseError: on the first structural violation in ``source``
    """
    return Parser(source, config).parse()
