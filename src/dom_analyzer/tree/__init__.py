"""Parsed document tree and its renderer.

Key Components:
    DocumentRoot / TextNode / ElementNode: Tagged union produced by parser adapters
    TreeRenderer: Depth-first renderer producing depth-styled render units
    StylePalette: Cyclic style identifiers selected by depth
    to_html / to_text / to_json: Output formats for render units
"""

from .formatters import to_dicts, to_html, to_json, to_text
from .nodes import (
    DocumentRoot,
    ElementNode,
    NodeKind,
    ParsedNode,
    TextNode,
    count_elements,
    find_element,
    find_elements,
    iter_nodes,
    max_depth,
)
from .renderer import (
    AttributeChip,
    ChildSlot,
    ElementBox,
    RenderUnit,
    StylePalette,
    TextLeaf,
    TreeRenderer,
    count_units,
    render_tree,
)

__all__ = [
    "DocumentRoot",
    "ElementNode",
    "NodeKind",
    "ParsedNode",
    "TextNode",
    "count_elements",
    "find_element",
    "find_elements",
    "iter_nodes",
    "max_depth",
    "AttributeChip",
    "ChildSlot",
    "ElementBox",
    "RenderUnit",
    "StylePalette",
    "TextLeaf",
    "TreeRenderer",
    "count_units",
    "render_tree",
    "to_dicts",
    "to_html",
    "to_json",
    "to_text",
]
