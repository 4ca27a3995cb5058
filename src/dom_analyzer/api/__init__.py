"""Parsing and analysis API.

Level 1: ``analyze()`` and ``parse_markup()`` one-shot functions
Level 2: ``DomAnalyzer`` sessions with injectable parser and renderer
Level 3: parser adapters and the adapter registry
"""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    BeautifulSoupAdapter,
    LxmlAdapter,
    ParseError,
    ParserAdapter,
    get_adapter,
    get_adapter_registry,
    list_available_adapters,
    register_adapter,
)
from .analyzer import ERROR_PREFIX, AnalysisResult, DomAnalyzer, analyze
from .parser import parse_markup

__all__ = [
    "AdapterMetadata",
    "AdapterRegistry",
    "BeautifulSoupAdapter",
    "LxmlAdapter",
    "ParseError",
    "ParserAdapter",
    "get_adapter",
    "get_adapter_registry",
    "list_available_adapters",
    "register_adapter",
    "ERROR_PREFIX",
    "AnalysisResult",
    "DomAnalyzer",
    "analyze",
    "parse_markup",
]
