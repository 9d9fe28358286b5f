"""Result object returned by the non-raising parse functions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from strict_markup_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from strict_markup_parser.tree import Node


@dataclass
class ParseResult:
    """Parsed tree together with diagnostics and performance information.

    ``root`` is None exactly when ``success`` is False.
    """

    root: Optional[Node] = None
    success: bool = True

    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    source_name: Optional[str] = None
    correlation_id: Optional[str] = None

    @property
    def node_count(self) -> int:
        """Get total number of nodes in the tree."""
        if self.root is None:
            return 0
        return sum(1 for _ in self.root.iter_nodes())

    @property
    def element_count(self) -> int:
        """Get total number of element nodes in the tree."""
        if self.root is None:
            return 0
        return sum(1 for _ in self.root.iter_elements())

    @property
    def max_depth(self) -> int:
        if self.root is None:
            return 0
        return self.root.depth()

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    @property
    def error(self) -> Optional[DiagnosticEntry]:
        """First error or critical diagnostic, if any."""
        return next(
            (
                diag for diag in self.diagnostics
                if diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            ),
            None,
        )

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
            correlation_id=self.correlation_id
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        result: Dict[str, Any] = {
            "success": self.success,
            "node_count": self.node_count,
            "element_count": self.element_count,
            "max_depth": self.max_depth,
            "performance": self.performance.to_dict(),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }
        if self.source_name is not None:
            result["source"] = self.source_name
        if self.root is not None:
            result["root"] = self.root.to_dict()
        return result
