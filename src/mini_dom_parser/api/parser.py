"""Core parser API with progressive disclosure.

Level 1 is ``parse()``, which returns the root node or raises the first
structural error. Level 2 adds ``parse_string()`` and ``parse_file()``, which
never raise for malformed markup and instead return a ParseResult carrying
diagnostics. Level 3 is the reusable, configured ``MarkupParser`` class.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TextIO, Union

from mini_dom_parser.dom.node import Node
from mini_dom_parser.parsing import Parser
from mini_dom_parser.shared import (
    DiagnosticSeverity,
    MarkupParseError,
    ParseResult,
    ParserConfig,
    get_logger,
)

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path]

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000
DEFAULT_ENCODING = "utf-8"


def parse(source: str, config: Optional[ParserConfig] = None) -> Node:
    """Parse a complete markup document into a single root node.

    Args:
        source: Markup document as a string
        config: Optional parser configuration

    Returns:
        The root node. When the document's top level holds more than one
        node they are wrapped in a synthetic ``html`` element.

    Raises:
        MarkupParseError: on the first structural violation

    Examples:
        >>> root = parse('<html><body id="name">Hello World</body></html>')
        >>> root.tag_name
        'html'
        >>> root.find('body').attributes['id']
        'name'
    """
    return Parser(source, config).parse()


def parse_string(
    markup: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a string into a ParseResult.

    Malformed markup yields ``success=False`` with the error attached rather
    than an exception.

    Examples:
        >>> result = parse_string('<a></b>')
        >>> result.success
        False
        >>> result.error.code
        'mismatched-closing-tag'
    """
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse_string")

    logger.info(
        "Starting string parse operation",
        extra={
            "content_length": len(markup),
            "preview": (
                markup[:PREVIEW_LENGTH] + "..."
                if len(markup) > PREVIEW_LENGTH else markup
            )
        }
    )
    return _parse_content(markup, config, correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a file.

    Missing, unreadable or undecodable files are reported as a failed
    ParseResult with a CRITICAL diagnostic.

    Examples:
        >>> result = parse_file('missing.html')
        >>> result.success
        False
        >>> 'not found' in result.diagnostics[0].message.lower()
        True
    """
    start_time = time.time()
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse_file")

    path_obj = Path(file_path)
    logger.info(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": encoding}
    )

    error_message = None
    if not path_obj.exists():
        error_message = f"File not found: {path_obj}"
    elif not path_obj.is_file():
        error_message = f"Path is not a file: {path_obj}"
    if error_message:
        return _create_error_result(
            error_message,
            correlation_id,
            (time.time() - start_time) * MS_PER_SECOND,
            source_name=str(path_obj),
        )

    try:
        content = path_obj.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(
            "File could not be read",
            extra={"file_path": str(path_obj), "error": str(e)}
        )
        return _create_error_result(
            f"Cannot read file {path_obj}: {e}",
            correlation_id,
            (time.time() - start_time) * MS_PER_SECOND,
            source_name=str(path_obj),
        )

    result = _parse_content(content, config, correlation_id, source_name=str(path_obj))
    if config.enable_diagnostics:
        result.add_diagnostic(
            DiagnosticSeverity.INFO,
            f"File read with encoding: {encoding}",
            "file_parser",
            details={"file_path": str(path_obj), "encoding": encoding}
        )
    return result


def _parse_content(
    content: str,
    config: ParserConfig,
    correlation_id: Optional[str],
    source_name: Optional[str] = None
) -> ParseResult:
    """Run the parser over ``content`` and wrap the outcome in a ParseResult."""
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse_content")

    try:
        root = Parser(content, config).parse()
    except MarkupParseError as e:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        logger.warning(
            "Markup parsing failed",
            extra={
                "error_code": e.code,
                "position": e.position.to_dict() if e.position else None,
                "processing_time_ms": processing_time
            }
        )
        result = ParseResult(
            success=False,
            error=e,
            source_name=source_name,
            correlation_id=correlation_id,
        )
        result.performance.processing_time_ms = processing_time
        result.performance.characters_processed = len(content)
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            str(e),
            "parser",
            position=e.position.to_dict() if e.position else None,
            details={"code": e.code}
        )
        return result

    processing_time = (time.time() - start_time) * MS_PER_SECOND
    result = ParseResult(root=root, source_name=source_name, correlation_id=correlation_id)
    result.performance.processing_time_ms = processing_time
    result.performance.characters_processed = len(content)
    result.performance.nodes_created = result.node_count

    logger.info(
        "Markup parsing completed",
        extra={
            "node_count": result.node_count,
            "max_depth": result.max_depth,
            "processing_time_ms": processing_time
        }
    )
    return result


def _create_error_result(
    error_message: str,
    correlation_id: Optional[str],
    processing_time: float,
    source_name: Optional[str] = None
) -> ParseResult:
    """Create a failed result for problems outside the markup itself."""
    result = ParseResult(
        success=False,
        source_name=source_name,
        correlation_id=correlation_id,
    )
    result.performance.processing_time_ms = processing_time
    result.add_diagnostic(
        DiagnosticSeverity.CRITICAL,
        error_message,
        "api_parser"
    )
    return result


class MarkupParser:
    """Configured, reusable markup parser.

    Accepts strings, UTF-8 bytes, paths and file-like objects, and keeps
    usage statistics across calls.

    Examples:
        >>> parser = MarkupParser(ParserConfig.compatible())
        >>> parser.parse('<p><!-- ok --></p>').success
        True
        >>> parser.statistics['total_parses']
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, input_data: InputType) -> ParseResult:
        """Parse markup from any supported input type."""
        start_time = time.time()
        self.logger.info(
            "Starting configured parse operation",
            extra={
                "input_type": type(input_data).__name__,
                "parse_count": self._parse_count + 1
            }
        )

        if isinstance(input_data, Path):
            result = parse_file(
                input_data, config=self.config, correlation_id=self.correlation_id
            )
        else:
            content = input_data.read() if hasattr(input_data, "read") else input_data
            result = self._parse_raw(content, start_time)

        self._parse_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success:
            self._successful_parses += 1
        return result

    def _parse_raw(self, content: Union[str, bytes], start_time: float) -> ParseResult:
        if isinstance(content, bytes):
            try:
                content = content.decode(DEFAULT_ENCODING)
            except UnicodeDecodeError as e:
                return _create_error_result(
                    f"Input is not valid {DEFAULT_ENCODING}: {e}",
                    self.correlation_id,
                    (time.time() - start_time) * MS_PER_SECOND,
                )
        if not isinstance(content, str):
            raise TypeError(f"Unsupported input type: {type(content).__name__}")
        return _parse_content(content, self.config, self.correlation_id)

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration."""
        self.config = config
        self.logger.info("Parser reconfigured", extra={"preset": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
