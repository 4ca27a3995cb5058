"""Analysis API: parse markup, render the tree, report failures.

``DomAnalyzer`` keeps the state of one analysis session, the way the textarea
page does: the tree currently on display, its rendering, and the last error.
A failed analysis always discards the previous tree so stale output is never
shown next to an error message.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from dom_analyzer.api.adapters import ParseError
from dom_analyzer.api.parser import parse_markup
from dom_analyzer.shared import (
    AnalysisMetrics,
    AnalyzerConfig,
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    get_logger,
    new_correlation_id,
)
from dom_analyzer.tree.nodes import ParsedNode, count_elements, iter_nodes, max_depth
from dom_analyzer.tree.renderer import RenderUnit, TreeRenderer, count_units

ERROR_PREFIX = "Invalid HTML or parsing error: "
NESTING_ERROR = "Document is nested too deeply to display"

ParserCallable = Callable[[str], ParsedNode]


@dataclass
class AnalysisResult:
    """Outcome of one analysis: either a rendered tree or an error message."""

    tree: Optional[ParsedNode] = None
    units: List[RenderUnit] = field(default_factory=list)
    error: Optional[str] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: AnalysisMetrics = field(default_factory=AnalysisMetrics)
    correlation_id: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.tree is not None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            "success": self.success,
            "error": self.error,
            "tree": self.tree.to_dict() if self.tree is not None else None,
            "units": [unit.to_dict() for unit in self.units],
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "metrics": self.metrics.to_dict(),
            "correlation_id": self.correlation_id,
        }


class DomAnalyzer:
    """Stateful analysis session over a parser collaborator and a renderer.

    Args:
        config: Analyzer configuration; defaults to ``AnalyzerConfig()``
        parser: Callable turning markup into a parsed tree and raising
            ``ParseError`` on failure; defaults to the configured backend
        renderer: Tree renderer; defaults to one built from ``config.render``
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        parser: Optional[ParserCallable] = None,
        renderer: Optional[TreeRenderer] = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        self._parser = parser
        self.renderer = renderer or TreeRenderer.from_config(self.config.render)
        self.logger = get_logger(__name__, None, "analyzer")
        self._last_result = AnalysisResult()

    @property
    def last_result(self) -> AnalysisResult:
        return self._last_result

    @property
    def tree(self) -> Optional[ParsedNode]:
        return self._last_result.tree

    @property
    def units(self) -> List[RenderUnit]:
        return self._last_result.units

    @property
    def error(self) -> Optional[str]:
        return self._last_result.error

    def clear(self) -> None:
        """Drop the displayed tree and any error."""
        self._last_result = AnalysisResult()

    def analyze(self, text: str, correlation_id: Optional[str] = None) -> AnalysisResult:
        """Parse and render markup, replacing the previous session state.

        Args:
            text: Markup to analyze
            correlation_id: Optional correlation ID; generated when tracking is on

        Returns:
            AnalysisResult holding either the tree and its units or the error
        """
        self.clear()
        if correlation_id is None and self.config.global_.enable_correlation_tracking:
            correlation_id = new_correlation_id()

        start_time = time.time()
        logger = self.logger.bind(correlation_id)
        result = AnalysisResult(correlation_id=correlation_id)
        result.metrics.characters_processed = len(text) if isinstance(text, str) else 0

        logger.info(
            "Starting analysis",
            extra={
                "backend": self.config.parsing.backend,
                "content_length": result.metrics.characters_processed,
            },
        )

        try:
            tree = self._parse(text, correlation_id)
            units = self.renderer.render(tree)
        except ParseError as e:
            return self._fail(result, e.message, e.backend, start_time, logger)
        except RecursionError:
            return self._fail(
                result, NESTING_ERROR, self.config.parsing.backend, start_time, logger
            )

        result.tree = tree
        result.units = units

        metrics = result.metrics
        metrics.nodes_parsed = sum(1 for _ in iter_nodes(tree))
        metrics.elements_parsed = count_elements(tree)
        metrics.max_depth = max_depth(tree)
        metrics.units_rendered = count_units(result.units)
        metrics.processing_time_ms = (time.time() - start_time) * 1000

        if not result.units:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "Document has no visible content",
                "renderer",
            )

        logger.info(
            "Analysis complete",
            extra={
                "elements": metrics.elements_parsed,
                "units": metrics.units_rendered,
                "processing_time_ms": metrics.processing_time_ms,
            },
        )
        self._last_result = result
        return result

    def _fail(
        self,
        result: AnalysisResult,
        message: str,
        backend: Optional[str],
        start_time: float,
        logger: CorrelationLogger,
    ) -> AnalysisResult:
        result.error = ERROR_PREFIX + message
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            message,
            "parser",
            details={"backend": backend},
        )
        result.metrics.processing_time_ms = (time.time() - start_time) * 1000
        logger.warning("DOM parsing failed", extra={"reason": message, "backend": backend})
        self._last_result = result
        return result

    def _parse(self, text: str, correlation_id: Optional[str]) -> ParsedNode:
        if self._parser is not None:
            return self._parser(text)
        return parse_markup(text, self.config.parsing, correlation_id)


def analyze(
    text: str,
    config: Optional[AnalyzerConfig] = None,
    correlation_id: Optional[str] = None,
) -> AnalysisResult:
    """Analyze markup once without keeping session state.

    Examples:
        >>> result = analyze('<div class="x"><p>Hi</p></div>')
        >>> result.units[0].tag_name
        'div'
        >>> analyze("   ").error
        'Invalid HTML or parsing error: Input is empty'
    """
    return DomAnalyzer(config).analyze(text, correlation_id)
