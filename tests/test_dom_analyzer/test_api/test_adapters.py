"""Tests for parser adapters over BeautifulSoup and lxml."""

import pytest

from dom_analyzer.api.adapters import (
    AdapterMetadata,
    AdapterRegistry,
    BeautifulSoupAdapter,
    LxmlAdapter,
    ParseError,
    ParserAdapter,
    get_adapter,
    get_adapter_registry,
    list_available_adapters,
)
from dom_analyzer.tree import (
    DocumentRoot,
    ElementNode,
    TextNode,
    find_element,
    find_elements,
    max_depth,
)


class FakeAdapter(ParserAdapter):
    """Adapter returning a fixed tree."""

    def __init__(self, available: bool = True) -> None:
        super().__init__()
        self.available = available

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(name="custom:fake", target_library="none", description="Fake")

    def is_available(self) -> bool:
        return self.available

    def parse(self, text: str) -> DocumentRoot:
        self._require_available()
        return DocumentRoot(children=[TextNode(text)])


class TestBeautifulSoupAdapter:
    """Test conversion of BeautifulSoup trees."""

    @pytest.fixture
    def adapter(self) -> BeautifulSoupAdapter:
        return BeautifulSoupAdapter("html.parser")

    def test_metadata(self, adapter: BeautifulSoupAdapter) -> None:
        assert adapter.name == "html.parser"
        assert adapter.metadata.target_library == "beautifulsoup4"
        assert adapter.metadata.produces_full_document is False
        assert adapter.is_available()

    def test_fragment_structure(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse('<div class="x"><p>Hi</p></div>')

        assert isinstance(root, DocumentRoot)
        assert len(root.children) == 1
        div = root.children[0]
        assert isinstance(div, ElementNode)
        assert div.tag_name == "div"
        assert div.attributes == (("class", "x"),)
        p = div.children[0]
        assert p.tag_name == "p"
        assert p.attributes == ()
        assert p.children == (TextNode("Hi"),)

    def test_multi_valued_attribute_kept_as_string(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse('<p class="a  b" rel="x y">t</p>')
        assert root.children[0].get_attribute("class") == "a  b"
        assert root.children[0].get_attribute("rel") == "x y"

    def test_attribute_order(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse('<a href="/x" id="l" title="t">x</a>')
        assert [name for name, _ in root.children[0].attributes] == ["href", "id", "title"]

    def test_whitespace_text_nodes_are_kept(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse("<ul>\n  <li>a</li>\n</ul>")
        ul = root.children[0]

        assert isinstance(ul.children[0], TextNode)
        assert ul.children[0].is_blank
        assert ul.children[1].tag_name == "li"

    def test_comments_and_doctype_are_dropped(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse("<!DOCTYPE html><!-- note --><p>x<!-- inner --></p>")

        assert len(root.children) == 1
        assert root.children[0].tag_name == "p"
        assert root.children[0].children == (TextNode("x"),)

    def test_lxml_builder_wraps_document(self) -> None:
        adapter = BeautifulSoupAdapter("lxml")
        root = adapter.parse("<p>x</p>")

        assert adapter.metadata.produces_full_document is True
        assert root.children[0].tag_name == "html"
        assert find_element(root, "body") is not None
        assert find_element(root, "p").children == (TextNode("x"),)

    def test_rejected_markup_raises_parse_error(self, adapter: BeautifulSoupAdapter,
                                                monkeypatch: pytest.MonkeyPatch) -> None:
        from bs4 import ParserRejectedMarkup

        def rejecting_soup(*args, **kwargs):
            raise ParserRejectedMarkup(
                AssertionError("unknown status keyword 'foo' in marked section")
            )

        monkeypatch.setattr("bs4.BeautifulSoup", rejecting_soup)

        with pytest.raises(ParseError, match="html.parser failed") as exc_info:
            adapter.parse("<![foo[ x ]]>")
        assert exc_info.value.backend == "html.parser"

    def test_deep_nesting_converts_without_recursion(self, adapter: BeautifulSoupAdapter) -> None:
        root = adapter.parse("<div>" * 400 + "x")

        assert max_depth(root) == 400
        innermost = find_elements(root, "div")[-1]
        assert innermost.children == (TextNode("x"),)

    def test_unknown_builder(self) -> None:
        adapter = BeautifulSoupAdapter("no-such-builder")

        assert adapter.is_available() is False
        with pytest.raises(ParseError, match="not installed") as exc_info:
            adapter.parse("<p>x</p>")
        assert exc_info.value.backend == "no-such-builder"


class TestLxmlAdapter:
    """Test conversion of lxml.html trees."""

    @pytest.fixture
    def adapter(self) -> LxmlAdapter:
        return LxmlAdapter()

    def test_metadata(self, adapter: LxmlAdapter) -> None:
        assert adapter.name == "lxml-native"
        assert adapter.metadata.produces_full_document is True
        assert adapter.is_available()

    def test_document_structure(self, adapter: LxmlAdapter) -> None:
        root = adapter.parse('<div class="x"><p>Hi</p></div>')

        assert len(root.children) == 1
        assert root.children[0].tag_name == "html"
        div = find_element(root, "div")
        assert div.attributes == (("class", "x"),)
        assert div.children[0].tag_name == "p"
        assert div.children[0].children == (TextNode("Hi"),)

    def test_text_and_tail(self, adapter: LxmlAdapter) -> None:
        div = find_element(adapter.parse("<div>lead<b>bold</b>tail</div>"), "div")

        assert div.children[0] == TextNode("lead")
        assert div.children[1].tag_name == "b"
        assert div.children[2] == TextNode("tail")

    def test_comments_are_dropped_but_tail_kept(self, adapter: LxmlAdapter) -> None:
        div = find_element(adapter.parse("<div><!-- c -->after<p>x</p></div>"), "div")

        assert div.children[0] == TextNode("after")
        assert div.children[1].tag_name == "p"
        assert len(div.children) == 2

    def test_tails_of_nested_elements(self, adapter: LxmlAdapter) -> None:
        div = find_element(adapter.parse("<div><p>a<b>b</b>c</p>d</div>"), "div")

        p = div.children[0]
        assert div.children[1] == TextNode("d")
        assert p.children[0] == TextNode("a")
        assert p.children[1].children == (TextNode("b"),)
        assert p.children[2] == TextNode("c")

    def test_attribute_order(self, adapter: LxmlAdapter) -> None:
        a = find_element(adapter.parse('<a href="/x" id="l" title="t">x</a>'), "a")
        assert [name for name, _ in a.attributes] == ["href", "id", "title"]

    def test_empty_document_raises_parse_error(self, adapter: LxmlAdapter) -> None:
        with pytest.raises(ParseError) as exc_info:
            adapter.parse("")
        assert exc_info.value.backend == "lxml-native"
        assert exc_info.value.message


class TestAdapterRegistry:
    """Test adapter registration and lookup."""

    def test_builtin_adapters_registered(self) -> None:
        names = get_adapter_registry().names()
        assert {"html.parser", "lxml", "lxml-native"} <= set(names)
        assert isinstance(get_adapter("lxml-native"), LxmlAdapter)

    def test_list_available_adapters(self) -> None:
        names = {meta.name for meta in list_available_adapters()}
        assert "html.parser" in names

    def test_unknown_backend_raises_parse_error(self) -> None:
        registry = AdapterRegistry()
        with pytest.raises(ParseError, match="Unknown parser backend 'nope'"):
            registry.get("nope")

    def test_register_and_unregister(self) -> None:
        registry = AdapterRegistry()
        adapter = FakeAdapter()

        registry.register(adapter)
        assert registry.get("custom:fake") is adapter
        assert registry.unregister("custom:fake") is True
        assert registry.unregister("custom:fake") is False

    def test_register_under_alias(self) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter(), name="alias")
        assert registry.names() == ["alias"]

    def test_register_rejects_non_adapters(self) -> None:
        with pytest.raises(TypeError, match="Adapter must be a ParserAdapter instance"):
            AdapterRegistry().register("html.parser")  # type: ignore[arg-type]

    def test_unavailable_adapters_not_listed(self) -> None:
        registry = AdapterRegistry()
        registry.register(FakeAdapter(available=False))

        assert registry.list_available_adapters() == []
        with pytest.raises(ParseError, match="not installed"):
            registry.get("custom:fake").parse("x")
