"""Tests for analysis sessions and the one-shot analyze function."""

import logging

import pytest

from dom_analyzer.api import ERROR_PREFIX, DomAnalyzer, ParseError, analyze
from dom_analyzer.api.analyzer import NESTING_ERROR
from dom_analyzer.shared import AnalyzerConfig, DiagnosticSeverity
from dom_analyzer.tree import DocumentRoot, ElementNode, TextLeaf, TextNode, TreeRenderer


def failing_parser(text: str):
    raise ParseError("unexpected end of input", backend="fake")


class TestDomAnalyzer:
    """Test session state handling."""

    def test_initial_state_is_empty(self) -> None:
        analyzer = DomAnalyzer()

        assert analyzer.tree is None
        assert analyzer.units == []
        assert analyzer.error is None
        assert analyzer.last_result.success is False

    def test_end_to_end_example(self) -> None:
        analyzer = DomAnalyzer()
        result = analyzer.analyze('<div class="x"><p>Hi</p></div>')

        assert result.success
        assert result.error is None
        assert analyzer.tree is result.tree
        assert len(result.units) == 1

        div = result.units[0]
        assert div.tag_name == "div"
        assert [chip.label for chip in div.attributes] == ['class="x"']
        p = div.visible_children[0]
        assert p.tag_name == "p"
        assert p.attributes == ()
        assert p.depth == div.depth + 1
        text = p.visible_children[0]
        assert isinstance(text, TextLeaf)
        assert text.text == "Hi"
        assert text.depth == p.depth + 1

    def test_metrics(self) -> None:
        result = DomAnalyzer().analyze('<div class="x"><p>Hi</p></div>')

        assert result.metrics.characters_processed == 30
        assert result.metrics.elements_parsed == 2
        assert result.metrics.nodes_parsed == 4
        assert result.metrics.units_rendered == 3
        assert result.metrics.max_depth == 2
        assert result.metrics.processing_time_ms >= 0

    def test_parse_error_sets_message_and_no_tree(self) -> None:
        result = DomAnalyzer(parser=failing_parser).analyze("<p")

        assert not result.success
        assert result.error == ERROR_PREFIX + "unexpected end of input"
        assert result.tree is None
        assert result.units == []
        assert result.diagnostics[0].severity is DiagnosticSeverity.ERROR
        assert result.diagnostics[0].details == {"backend": "fake"}

    def test_error_clears_previous_tree(self) -> None:
        """A failed analysis never leaves an earlier tree on display."""
        calls = []

        def parser(text: str):
            calls.append(text)
            if text == "bad":
                raise ParseError("cannot parse")
            return DocumentRoot(children=[ElementNode("p", children=[TextNode(text)])])

        analyzer = DomAnalyzer(parser=parser)
        assert analyzer.analyze("good").success
        assert analyzer.tree is not None

        result = analyzer.analyze("bad")

        assert analyzer.error == "Invalid HTML or parsing error: cannot parse"
        assert analyzer.tree is None
        assert analyzer.units == []
        assert result is analyzer.last_result
        assert calls == ["good", "bad"]

    def test_empty_input_after_success_clears_tree(self) -> None:
        analyzer = DomAnalyzer()
        analyzer.analyze("<p>x</p>")

        analyzer.analyze("   ")

        assert analyzer.error == ERROR_PREFIX + "Input is empty"
        assert analyzer.tree is None

    def test_success_after_error_clears_error(self) -> None:
        analyzer = DomAnalyzer()
        analyzer.analyze("")
        assert analyzer.error is not None

        analyzer.analyze("<b>ok</b>")

        assert analyzer.error is None
        assert analyzer.units[0].tag_name == "b"

    def test_clear(self) -> None:
        analyzer = DomAnalyzer()
        analyzer.analyze("<p>x</p>")

        analyzer.clear()

        assert analyzer.tree is None
        assert analyzer.units == []
        assert analyzer.error is None

    def test_whitespace_only_document_reports_no_content(self) -> None:
        result = DomAnalyzer(parser=lambda text: DocumentRoot(children=[TextNode("  ")])).analyze("x")

        assert result.success
        assert result.units == []
        assert result.diagnostics[0].severity is DiagnosticSeverity.INFO

    def test_injected_renderer(self) -> None:
        analyzer = DomAnalyzer(renderer=TreeRenderer(["only"]))
        result = analyzer.analyze("<p><b>x</b></p>")

        assert result.units[0].style == "only"
        assert result.units[0].visible_children[0].style == "only"

    def test_palette_from_config(self) -> None:
        config = AnalyzerConfig().override(render__palette=("a", "b"))
        result = DomAnalyzer(config).analyze("<p><b><i>x</i></b></p>")

        p = result.units[0]
        b = p.visible_children[0]
        i = b.visible_children[0]
        assert [p.style, b.style, i.style] == ["a", "b", "a"]

    def test_correlation_ids(self) -> None:
        analyzer = DomAnalyzer()

        assert analyzer.analyze("<p>x</p>", correlation_id="req-1").correlation_id == "req-1"
        assert len(analyzer.analyze("<p>x</p>").correlation_id) == 32

        untracked = DomAnalyzer(AnalyzerConfig().override(global___enable_correlation_tracking=False))
        assert untracked.analyze("<p>x</p>").correlation_id is None

    def test_rejected_marked_section_returns_result(self) -> None:
        """Markup the tree builder rejects never escapes as an exception."""
        analyzer = DomAnalyzer()
        analyzer.analyze("<p>earlier</p>")

        result = analyzer.analyze("<![foo[ x ]]>")

        if not result.success:
            assert result.error.startswith(ERROR_PREFIX + "html.parser failed")
            assert result.tree is None
            assert analyzer.units == []

    def test_deeply_nested_markup_is_an_error(self) -> None:
        analyzer = DomAnalyzer()
        analyzer.analyze("<p>earlier</p>")

        result = analyzer.analyze("<div>" * 500)

        assert not result.success
        assert result.error.startswith(ERROR_PREFIX)
        assert result.tree is None
        assert analyzer.units == []

    def test_recursion_limit_during_render_is_an_error(self) -> None:
        node = ElementNode("b", children=[TextNode("x")])
        for _ in range(5000):
            node = ElementNode("div", children=[node])
        deep_tree = DocumentRoot(children=[node])
        config = AnalyzerConfig().override(parsing__max_nesting_depth=None)

        result = DomAnalyzer(config, parser=lambda text: deep_tree).analyze("x")

        assert result.error == ERROR_PREFIX + NESTING_ERROR
        assert result.tree is None
        assert result.units == []
        assert result.diagnostics[0].severity is DiagnosticSeverity.ERROR

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="dom_analyzer.api.analyzer"):
            DomAnalyzer(parser=failing_parser).analyze("x")

        assert any(record.message == "DOM parsing failed" for record in caplog.records)


class TestAnalyzeFunction:
    """Test the one-shot helper."""

    def test_success(self) -> None:
        result = analyze("<ul><li>a</li><li>b</li></ul>")

        ul = result.units[0]
        assert [li.visible_children[0].text for li in ul.visible_children] == ["a", "b"]

    def test_error(self) -> None:
        result = analyze("")
        assert result.error == "Invalid HTML or parsing error: Input is empty"

    def test_to_dict(self) -> None:
        data = analyze("<p>x</p>").to_dict()

        assert data["success"] is True
        assert data["tree"]["kind"] == "document-root"
        assert data["units"][0]["tag_name"] == "p"
        assert data["metrics"]["elements_parsed"] == 1

    def test_lxml_backend_preset(self) -> None:
        result = analyze("<p>x</p>", AnalyzerConfig.lxml_backend())

        assert result.units[0].tag_name == "html"
        assert result.units[0].depth == 0
