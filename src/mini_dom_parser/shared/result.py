"""Result objects and diagnostic types for markup parsing.

This module defines the result returned by the never-raising API entry
points: the parsed tree (or the error that prevented it), diagnostics, and
performance information.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from mini_dom_parser.dom.node import Node

from .errors import MarkupParseError


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for parsing operations."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    nodes_created: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms


@dataclass
class ParseResult:
    """Result of parsing one document.

    Either ``root`` holds the complete tree and ``success`` is True, or
    ``root`` is None and ``error`` holds the first structural violation.
    """

    root: Optional[Node] = None
    success: bool = True
    error: Optional[MarkupParseError] = None

    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    source_name: Optional[str] = None
    correlation_id: Optional[str] = None

    _counts: Optional[Dict[str, int]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate result consistency."""
        if self.success and self.root is None:
            raise ValueError("Successful result must carry a root node")
        if not self.success and self.root is not None:
            raise ValueError("Failed result cannot carry a partial tree")

    def _node_counts(self) -> Dict[str, int]:
        if self._counts is None:
            self._counts = (
                self.root.count() if self.root is not None
                else {"text": 0, "element": 0, "comment": 0}
            )
        return self._counts

    @property
    def node_count(self) -> int:
        return sum(self._node_counts().values())

    @property
    def element_count(self) -> int:
        return self._node_counts()["element"]

    @property
    def text_count(self) -> int:
        return self._node_counts()["text"]

    @property
    def comment_count(self) -> int:
        return self._node_counts()["comment"]

    @property
    def max_depth(self) -> int:
        """Height of the parsed tree, 0 when parsing failed."""
        return self.root.depth if self.root is not None else 0

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Summarize the result for reporting."""
        summary: Dict[str, Any] = {
            "source": self.source_name,
            "success": self.success,
            "node_count": self.node_count,
            "element_count": self.element_count,
            "text_count": self.text_count,
            "comment_count": self.comment_count,
            "max_depth": self.max_depth,
            "processing_time_ms": round(self.performance.processing_time_ms, 3),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }
        if self.error is not None:
            summary["error"] = self.error.to_dict()
        return summary
