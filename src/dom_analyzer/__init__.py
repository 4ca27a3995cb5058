"""DOM Analyzer.

Parses HTML markup with an external parser and renders the resulting document
tree as nested, depth-coloured boxes.

Progressive API Disclosure:
- Level 1: Simple functions - analyze(), parse_markup(), render_tree()
- Level 2: Analysis sessions - DomAnalyzer class
- Level 3: Parser adapters - ParserAdapter, register_adapter()
"""

__version__ = "0.1.0"
__author__ = "DOM Analyzer Team"

from .api import (
    AnalysisResult,
    DomAnalyzer,
    ParseError,
    ParserAdapter,
    analyze,
    parse_markup,
    register_adapter,
)
from .shared.config import AnalyzerConfig, RenderConfig
from .tree import (
    DocumentRoot,
    ElementNode,
    StylePalette,
    TextNode,
    TreeRenderer,
    render_tree,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "analyze",
    "parse_markup",
    "render_tree",

    # Level 2: Analysis sessions
    "DomAnalyzer",
    "AnalysisResult",
    "ParseError",

    # Level 3: Parser adapters
    "ParserAdapter",
    "register_adapter",

    # Tree and renderer
    "DocumentRoot",
    "ElementNode",
    "TextNode",
    "StylePalette",
    "TreeRenderer",

    # Configuration
    "AnalyzerConfig",
    "RenderConfig",
]
