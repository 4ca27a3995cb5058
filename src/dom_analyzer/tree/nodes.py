"""Parsed document tree for the DOM analyzer.

The tree is an explicit tagged union of three immutable variants. Adapters over
third-party HTML parsers build it; the renderer only reads it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union


class NodeKind(Enum):
    """Discriminator shared by every parsed node variant."""

    DOCUMENT_ROOT = "document-root"
    TEXT = "text"
    ELEMENT = "element"


@dataclass(frozen=True)
class DocumentRoot:
    """Synthetic root of a parsed document."""

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT_ROOT

    children: Tuple["ParsedNode", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def to_dict(self) -> Dict[str, Any]:
        """Convert root to dictionary representation."""
        return {
            "kind": self.kind.value,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class TextNode:
    """Raw character data between tags, possibly whitespace-only."""

    kind: ClassVar[NodeKind] = NodeKind.TEXT

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Text value must be a string")

    @property
    def is_blank(self) -> bool:
        """True when the text holds nothing but whitespace."""
        return not self.value.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert text node to dictionary representation."""
        return {"kind": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class ElementNode:
    """Element with its tag name, attributes in source order, and children."""

    kind: ClassVar[NodeKind] = NodeKind.ELEMENT

    tag_name: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["ParsedNode", ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate the tag and freeze attribute and child sequences."""
        if not self.tag_name:
            raise ValueError("Element tag cannot be empty")

        attributes = tuple((str(name), str(value)) for name, value in self.attributes)
        object.__setattr__(self, "attributes", attributes)
        object.__setattr__(self, "children", tuple(self.children))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first attribute value with a matching name."""
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return default

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        return {
            "kind": self.kind.value,
            "tag_name": self.tag_name,
            "attributes": [[name, value] for name, value in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }


ParsedNode = Union[DocumentRoot, TextNode, ElementNode]


def iter_nodes(node: Optional[ParsedNode]) -> Iterator[ParsedNode]:
    """Iterate over a node and all its descendants in document order."""
    if node is None:
        return
    stack: List[ParsedNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, (DocumentRoot, ElementNode)):
            stack.extend(reversed(current.children))


def find_element(node: Optional[ParsedNode], tag_name: str) -> Optional[ElementNode]:
    """Find the first element with a matching tag name."""
    return next(iter(find_elements(node, tag_name)), None)


def find_elements(node: Optional[ParsedNode], tag_name: str) -> List[ElementNode]:
    """Find all elements with a matching tag name, in document order."""
    return [
        candidate for candidate in iter_nodes(node)
        if isinstance(candidate, ElementNode) and candidate.tag_name == tag_name
    ]


def count_elements(node: Optional[ParsedNode]) -> int:
    """Count element nodes in the tree."""
    return sum(1 for candidate in iter_nodes(node) if isinstance(candidate, ElementNode))


def max_depth(node: Optional[ParsedNode]) -> int:
    """Deepest element nesting below the node.

    The root contributes no level of its own; a lone top-level element has
    depth 1.
    """
    deepest = 0
    stack: List[Tuple[Optional[ParsedNode], int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, ElementNode):
            depth += 1
            deepest = max(deepest, depth)
        if isinstance(current, (DocumentRoot, ElementNode)):
            stack.extend((child, depth) for child in current.children)
    return deepest
