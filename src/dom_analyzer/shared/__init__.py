"""Shared utilities for the DOM analyzer.

This module provides configuration objects, diagnostic and metric types, and
logging helpers used by the tree, api, cli and web layers.
"""

from .config import (
    DEFAULT_PALETTE,
    AnalyzerConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParsingConfig,
    RenderConfig,
    WebConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from .result import (
    AnalysisMetrics,
    DiagnosticEntry,
    DiagnosticSeverity,
)

__all__ = [
    "DEFAULT_PALETTE",
    "AnalyzerConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParsingConfig",
    "RenderConfig",
    "WebConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "new_correlation_id",
    "AnalysisMetrics",
    "DiagnosticEntry",
    "DiagnosticSeverity",
]
