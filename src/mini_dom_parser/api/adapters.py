"""Integration adapters for converting parse results to other representations.

This module provides an adapter framework with bidirectional conversion between
ParseResult trees and plain dictionaries or lxml element trees.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from mini_dom_parser.dom.node import Node, make_comment, make_element, make_text
from mini_dom_parser.dom.serialize import to_dict
from mini_dom_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseResult,
    get_logger,
)

MS_PER_SECOND = 1000


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    target_library: str
    description: str
    author: str = "mini-dom-parser"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Subclasses convert a successful ParseResult to their target format and
    rebuild a ParseResult from it. Conversion failures are reported in the
    returned ConversionResult rather than raised.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library is available."""

    @abstractmethod
    def to_target(self, parse_result: ParseResult) -> ConversionResult:
        """Convert ParseResult to the target format."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target format data to a ParseResult."""

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        """Create a ConversionResult for error conditions."""
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )

    def _require_tree(self, parse_result: ParseResult, start_time: float) -> Optional[ConversionResult]:
        if not parse_result.success or parse_result.root is None:
            return self._create_error_result(
                "ParseResult is not successful or has no tree",
                parse_result,
                (time.time() - start_time) * MS_PER_SECOND
            )
        return None


class DictAdapter(IntegrationAdapter):
    """Adapter for conversion to and from nested plain dictionaries."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="dict",
            version="1.0.0",
            target_library="builtins",
            description="Bidirectional conversion between ParseResult and plain dicts"
        )

    def is_available(self) -> bool:
        return True

    def to_target(self, parse_result: ParseResult) -> ConversionResult:
        start_time = time.time()
        failure = self._require_tree(parse_result, start_time)
        if failure:
            return failure

        return ConversionResult(
            success=True,
            converted_data=to_dict(parse_result.root),
            original_data=parse_result,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            metadata={"node_count": parse_result.node_count},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        start_time = time.time()
        try:
            root = self._node_from_dict(target_data)
        except (KeyError, TypeError, ValueError) as e:
            return self._create_error_result(
                f"Failed to convert from dict: {e}",
                target_data,
                (time.time() - start_time) * MS_PER_SECOND
            )

        return ConversionResult(
            success=True,
            converted_data=ParseResult(root=root, correlation_id=self.correlation_id),
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
        )

    def _node_from_dict(self, data: Dict[str, Any]) -> Node:
        node_type = data["type"]
        if node_type == "text":
            return make_text(data["content"])
        if node_type == "comment":
            return make_comment(data["content"])
        if node_type == "element":
            children = [self._node_from_dict(child) for child in data.get("children", [])]
            return make_element(data["tag"], data.get("attributes", {}), children)
        raise ValueError(f"Unknown node type: {node_type!r}")


class LxmlAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            target_library="lxml",
            description="Bidirectional conversion between ParseResult and lxml.etree"
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def to_target(self, parse_result: ParseResult) -> ConversionResult:
        """Convert ParseResult to an lxml element.

        Text nodes become ``text`` / ``tail`` strings, so the root must be an
        element or a comment.
        """
        start_time = time.time()
        if not self.is_available():
            return self._create_error_result("lxml is not installed", parse_result)
        failure = self._require_tree(parse_result, start_time)
        if failure:
            return failure

        import lxml.etree as ET

        root = parse_result.root
        try:
            if root.is_text:
                raise ValueError("a text node cannot be the root of an lxml tree")
            lxml_root = self._convert_node_to_lxml(root, ET)
        except ValueError as e:
            return self._create_error_result(
                f"Failed to convert to lxml: {e}",
                parse_result,
                (time.time() - start_time) * MS_PER_SECOND
            )

        return ConversionResult(
            success=True,
            converted_data=lxml_root,
            original_data=parse_result,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            metadata={"lxml_version": ET.LXML_VERSION},
        )

    def _convert_node_to_lxml(self, node: Node, ET: Any) -> Any:
        if node.is_comment:
            return ET.Comment(node.content)

        element = ET.Element(node.tag_name, dict(node.attributes))
        last_child = None
        for child in node.children:
            if child.is_text:
                if last_child is None:
                    element.text = (element.text or "") + child.content
                else:
                    last_child.tail = (last_child.tail or "") + child.content
            else:
                last_child = self._convert_node_to_lxml(child, ET)
                element.append(last_child)
        return element

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert an lxml element to a ParseResult."""
        start_time = time.time()
        if not self.is_available():
            return self._create_error_result("lxml is not installed", target_data)

        import lxml.etree as ET

        if not ET.iselement(target_data):
            return self._create_error_result(
                "Target data is not a valid lxml element",
                target_data,
                (time.time() - start_time) * MS_PER_SECOND
            )
        try:
            root = self._convert_lxml_to_node(target_data, ET)
        except ValueError as e:
            return self._create_error_result(
                f"Failed to convert from lxml: {e}",
                target_data,
                (time.time() - start_time) * MS_PER_SECOND
            )

        return ConversionResult(
            success=True,
            converted_data=ParseResult(root=root, correlation_id=self.correlation_id),
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            metadata={"original_tag": str(target_data.tag)},
        )

    def _convert_lxml_to_node(self, element: Any, ET: Any) -> Node:
        if element.tag is ET.Comment:
            return make_comment(element.text or "")
        if not isinstance(element.tag, str):
            raise ValueError(f"Unsupported lxml node: {element!r}")

        children = []
        if element.text:
            children.append(make_text(element.text))
        for child in element:
            children.append(self._convert_lxml_to_node(child, ET))
            if child.tail:
                children.append(make_text(child.tail))
        return make_element(element.tag, dict(element.attrib), children)


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name, or None if unknown or unavailable."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of all adapters whose target library is importable."""
        with self._lock:
            classes = list(self._adapters.values())
        instances = [adapter_class() for adapter_class in classes]
        return [instance.metadata for instance in instances if instance.is_available()]


# Global adapter registry instance
_adapter_registry = AdapterRegistry()
_adapter_registry.register(DictAdapter)
_adapter_registry.register(LxmlAdapter)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()
