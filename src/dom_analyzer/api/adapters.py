"""Parser adapters over third-party HTML libraries.

Each adapter hands markup to an external parser (BeautifulSoup or lxml) and
converts the library's native tree into the analyzer's parsed node tree. The
adapters own no parsing logic of their own.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from dom_analyzer.shared import get_logger
from dom_analyzer.tree.nodes import DocumentRoot, ElementNode, ParsedNode, TextNode


class ParseError(Exception):
    """Raised when markup cannot be turned into a parsed tree."""

    def __init__(self, message: str, backend: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.backend = backend


@dataclass(frozen=True)
class AdapterMetadata:
    """Metadata about a parser adapter."""

    name: str
    target_library: str
    description: str
    produces_full_document: bool = False


class ParserAdapter(ABC):
    """Abstract base class for parser adapters.

    Subclasses convert markup into a :class:`DocumentRoot` and raise
    :class:`ParseError` for any failure of the underlying library.
    """

    def __init__(self) -> None:
        self.logger = get_logger(__name__, None, "adapter")

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the underlying library can be imported."""

    @abstractmethod
    def parse(self, text: str) -> DocumentRoot:
        """Parse markup into a document tree."""

    @property
    def name(self) -> str:
        return self.metadata.name

    def _require_available(self) -> None:
        if not self.is_available():
            raise ParseError(
                f"Parser backend {self.name!r} requires "
                f"{self.metadata.target_library}, which is not installed",
                backend=self.name,
            )


class BeautifulSoupAdapter(ParserAdapter):
    """Adapter for BeautifulSoup with a selectable tree builder."""

    def __init__(self, builder: str = "html.parser") -> None:
        super().__init__()
        self.builder = builder

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        library = "beautifulsoup4" if self.builder == "html.parser" else f"beautifulsoup4+{self.builder}"
        return AdapterMetadata(
            name=self.builder,
            target_library=library,
            description=f"BeautifulSoup using the {self.builder} tree builder",
            produces_full_document=self.builder != "html.parser",
        )

    def is_available(self) -> bool:
        """Check if BeautifulSoup and its tree builder are available."""
        try:
            from bs4.builder import builder_registry
        except ImportError:
            return False
        return builder_registry.lookup(self.builder) is not None

    def parse(self, text: str) -> DocumentRoot:
        """Parse markup with BeautifulSoup.

        Args:
            text: Markup to parse

        Returns:
            DocumentRoot mirroring the soup's top-level nodes
        """
        self._require_available()
        self.logger.debug(
            "Parsing with BeautifulSoup",
            extra={"builder": self.builder, "content_length": len(text)},
        )
        from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup

        try:
            soup = BeautifulSoup(text, self.builder, multi_valued_attributes=None)
        except FeatureNotFound as e:
            raise ParseError(str(e), backend=self.name) from e
        except (ParserRejectedMarkup, ValueError, TypeError) as e:
            raise ParseError(f"{self.builder} failed: {e}", backend=self.name) from e

        return DocumentRoot(children=self._convert_children(soup))

    def _convert_children(self, parent: Any) -> List[ParsedNode]:
        from bs4.element import (
            Comment,
            Declaration,
            Doctype,
            NavigableString,
            ProcessingInstruction,
            Tag,
        )

        top_level: List[ParsedNode] = []
        # Explicit stack of (pending children, converted children, tag) so
        # nesting depth is not bounded by the interpreter's recursion limit
        stack: List[Tuple[Iterator[Any], List[ParsedNode], Any]] = [
            (iter(parent.children), top_level, None)
        ]
        while stack:
            pending, converted, tag = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                if tag is not None:
                    stack[-1][1].append(ElementNode(
                        tag_name=tag.name,
                        attributes=tuple(
                            (name, " ".join(value) if isinstance(value, list) else value)
                            for name, value in tag.attrs.items()
                        ),
                        children=converted,
                    ))
            elif isinstance(child, Tag):
                stack.append((iter(child.children), [], child))
            elif isinstance(child, (Comment, Declaration, Doctype, ProcessingInstruction)):
                continue
            elif isinstance(child, NavigableString):
                converted.append(TextNode(str(child)))
        return top_level


class LxmlAdapter(ParserAdapter):
    """Adapter for lxml.html building a complete ``<html>`` document."""

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml-native",
            target_library="lxml",
            description="lxml.html document parser",
            produces_full_document=True,
        )

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.html  # noqa: F401
        except ImportError:
            return False
        return True

    def parse(self, text: str) -> DocumentRoot:
        """Parse markup with ``lxml.html.document_fromstring``."""
        self._require_available()
        self.logger.debug("Parsing with lxml.html", extra={"content_length": len(text)})
        import lxml.html
        from lxml import etree

        try:
            document = lxml.html.document_fromstring(text)
        except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
            raise ParseError(str(e) or "lxml could not parse the input", backend=self.name) from e

        return DocumentRoot(children=(self._convert_document(document),))

    def _convert_document(self, document: Any) -> ElementNode:
        stack: List[Tuple[Any, Iterator[Any], List[ParsedNode]]] = [
            (document, iter(document), self._leading_text(document))
        ]
        while True:
            element, pending, converted = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                node = ElementNode(
                    tag_name=element.tag,
                    attributes=tuple(element.items()),
                    children=converted,
                )
                if not stack:
                    return node
                siblings = stack[-1][2]
                siblings.append(node)
                if element.tail:
                    siblings.append(TextNode(element.tail))
            # Comments, processing instructions and entities carry a non-string tag
            elif isinstance(child.tag, str):
                stack.append((child, iter(child), self._leading_text(child)))
            elif child.tail:
                converted.append(TextNode(child.tail))

    @staticmethod
    def _leading_text(element: Any) -> List[ParsedNode]:
        return [TextNode(element.text)] if element.text else []


class AdapterRegistry:
    """Thread-safe registry of parser adapters keyed by backend name."""

    def __init__(self) -> None:
        self._adapters: Dict[str, ParserAdapter] = {}
        self._lock = threading.RLock()

    def register(self, adapter: ParserAdapter, name: Optional[str] = None) -> None:
        """Register an adapter under its metadata name or an explicit name."""
        if not isinstance(adapter, ParserAdapter):
            raise TypeError("Adapter must be a ParserAdapter instance")
        with self._lock:
            self._adapters[name or adapter.name] = adapter

    def unregister(self, name: str) -> bool:
        """Remove an adapter; returns False when it was not registered."""
        with self._lock:
            return self._adapters.pop(name, None) is not None

    def get(self, name: str) -> ParserAdapter:
        """Look up an adapter by backend name."""
        with self._lock:
            try:
                return self._adapters[name]
            except KeyError:
                known = ", ".join(sorted(self._adapters)) or "none"
                raise ParseError(
                    f"Unknown parser backend {name!r} (available: {known})",
                    backend=name,
                ) from None

    def names(self) -> List[str]:
        with self._lock:
            return list(self._adapters)

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """Metadata of registered adapters whose libraries are installed."""
        with self._lock:
            adapters = list(self._adapters.values())
        return [adapter.metadata for adapter in adapters if adapter.is_available()]


_registry = AdapterRegistry()
_registry.register(BeautifulSoupAdapter("html.parser"))
_registry.register(BeautifulSoupAdapter("lxml"))
_registry.register(LxmlAdapter())


def get_adapter_registry() -> AdapterRegistry:
    """Get the process-wide adapter registry."""
    return _registry


def register_adapter(adapter: ParserAdapter, name: Optional[str] = None) -> None:
    """Register an adapter in the process-wide registry."""
    _registry.register(adapter, name)


def get_adapter(name: str) -> ParserAdapter:
    """Get an adapter from the process-wide registry."""
    return _registry.get(name)


def list_available_adapters() -> List[AdapterMetadata]:
    """List adapters whose libraries are installed."""
    return _registry.list_available_adapters()
