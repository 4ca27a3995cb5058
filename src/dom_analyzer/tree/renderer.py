"""Recursive tree renderer for parsed documents.

The renderer walks a parsed tree depth-first and produces render units: nested,
depth-styled boxes for elements and leaves for text. It is a pure function of
the node, the depth it is called at and the injected style palette.

Key Components:
    StylePalette: Ordered, immutable style identifiers cycled by depth
    TreeRenderer: Dispatches over the node variants and threads the depth
    TextLeaf / ElementBox / AttributeChip / ChildSlot: Render units
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from dom_analyzer.shared.config import DEFAULT_PALETTE, RenderConfig
from dom_analyzer.tree.nodes import DocumentRoot, ElementNode, ParsedNode, TextNode

IndexPath = Tuple[int, ...]

DEFAULT_ATTRIBUTE_STYLE = "attr-chip"


class StylePalette:
    """Fixed, ordered set of style identifiers cycled by nesting depth."""

    __slots__ = ("_styles",)

    def __init__(self, styles: Iterable[str] = DEFAULT_PALETTE) -> None:
        styles = tuple(styles)
        if not styles:
            raise ValueError("Style palette cannot be empty")
        self._styles = styles

    @property
    def styles(self) -> Tuple[str, ...]:
        return self._styles

    def __len__(self) -> int:
        return len(self._styles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StylePalette):
            return NotImplemented
        return self._styles == other._styles

    def __hash__(self) -> int:
        return hash(self._styles)

    def __repr__(self) -> str:
        return f"StylePalette({list(self._styles)!r})"

    def style_for(self, depth: int) -> str:
        """Style applied at the given depth."""
        return self._styles[depth % len(self._styles)]


def format_path(path: IndexPath) -> str:
    """Render an index path as a stable key fragment."""
    if not path:
        return "root"
    return ".".join(str(index) for index in path)


@dataclass(frozen=True)
class AttributeChip:
    """One ``name="value"`` entry shown beside an element's tag."""

    key: str
    name: str
    value: str
    style: str

    @property
    def label(self) -> str:
        return f'{self.name}="{self.value}"'

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "name": self.name, "value": self.value, "style": self.style}


@dataclass(frozen=True)
class TextLeaf:
    """Trimmed, non-empty text content."""

    key: str
    depth: int
    style: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "text",
            "key": self.key,
            "depth": self.depth,
            "style": self.style,
            "text": self.text,
        }


@dataclass(frozen=True)
class ChildSlot:
    """Rendering of a single child; empty when the child produced nothing."""

    key: str
    units: Tuple["RenderUnit", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "units": [unit.to_dict() for unit in self.units]}


@dataclass(frozen=True)
class ElementBox:
    """Container for an element: tag header, attribute chips, nested children."""

    key: str
    depth: int
    style: str
    tag_name: str
    attributes: Tuple[AttributeChip, ...] = ()
    children: Tuple[ChildSlot, ...] = ()

    @property
    def visible_children(self) -> List["RenderUnit"]:
        """Units of every child slot, flattened in document order."""
        return [unit for slot in self.children for unit in slot.units]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "element",
            "key": self.key,
            "depth": self.depth,
            "style": self.style,
            "tag_name": self.tag_name,
            "attributes": [chip.to_dict() for chip in self.attributes],
            "children": [slot.to_dict() for slot in self.children],
        }


RenderUnit = Union[TextLeaf, ElementBox]


class TreeRenderer:
    """Render a parsed tree into nested, depth-styled render units.

    Every call returns a list: empty when the node produces nothing, a single
    unit for text and element nodes, and the concatenated renderings of its
    children for the document root.
    """

    def __init__(
        self,
        palette: Optional[Union[StylePalette, Sequence[str]]] = None,
        attribute_style: str = DEFAULT_ATTRIBUTE_STYLE,
    ) -> None:
        if palette is None:
            palette = StylePalette()
        elif not isinstance(palette, StylePalette):
            palette = StylePalette(palette)
        self.palette = palette
        self.attribute_style = attribute_style

    @classmethod
    def from_config(cls, config: RenderConfig) -> "TreeRenderer":
        """Build a renderer from render configuration."""
        return cls(StylePalette(config.palette), config.attribute_style)

    def render(
        self,
        node: Optional[ParsedNode],
        depth: int = 0,
        path: IndexPath = (),
    ) -> List[RenderUnit]:
        """Render a node at the given depth.

        Args:
            node: Node to render; ``None`` renders nothing
            depth: Nesting depth used to pick the style
            path: Child indices leading from the root to this node

        Returns:
            List of render units, possibly empty
        """
        if node is None:
            return []
        if isinstance(node, TextNode):
            return self._render_text(node, depth, path)
        if isinstance(node, ElementNode):
            return [self._render_element(node, depth, path)]
        if isinstance(node, DocumentRoot):
            # The root adds no nesting level: children stay at its depth
            units: List[RenderUnit] = []
            for index, child in enumerate(node.children):
                units.extend(self.render(child, depth, path + (index,)))
            return units
        return []

    def _render_text(self, node: TextNode, depth: int, path: IndexPath) -> List[RenderUnit]:
        text = node.value.strip()
        if not text:
            return []
        return [TextLeaf(
            key=f"text-{format_path(path)}",
            depth=depth,
            style=self.palette.style_for(depth),
            text=text,
        )]

    def _render_element(self, node: ElementNode, depth: int, path: IndexPath) -> ElementBox:
        key = format_path(path)
        chips = tuple(
            AttributeChip(
                key=f"attr-{key}@{index}",
                name=name,
                value=value,
                style=self.attribute_style,
            )
            for index, (name, value) in enumerate(node.attributes)
        )
        slots = []
        for index, child in enumerate(node.children):
            child_path = path + (index,)
            slots.append(ChildSlot(
                key=f"slot-{format_path(child_path)}",
                units=tuple(self.render(child, depth + 1, child_path)),
            ))
        return ElementBox(
            key=f"tag-{key}",
            depth=depth,
            style=self.palette.style_for(depth),
            tag_name=node.tag_name,
            attributes=chips,
            children=tuple(slots),
        )


def render_tree(
    node: Optional[ParsedNode],
    depth: int = 0,
    config: Optional[RenderConfig] = None,
) -> List[RenderUnit]:
    """Render a tree with a renderer built from configuration."""
    return TreeRenderer.from_config(config or RenderConfig()).render(node, depth)


def count_units(units: Iterable[RenderUnit]) -> int:
    """Count render units including every nested child unit."""
    total = 0
    stack: List[RenderUnit] = list(units)
    while stack:
        unit = stack.pop()
        total += 1
        if isinstance(unit, ElementBox):
            stack.extend(unit.visible_children)
    return total
