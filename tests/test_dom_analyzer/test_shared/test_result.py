"""Tests for diagnostic entries and analysis metrics."""

import pytest

from dom_analyzer.shared.result import AnalysisMetrics, DiagnosticEntry, DiagnosticSeverity


class TestDiagnosticEntry:
    """Test diagnostic validation and serialization."""

    def test_valid_entry(self) -> None:
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "boom", "parser", {"backend": "lxml"})

        data = entry.to_dict()
        assert data["severity"] == "ERROR"
        assert data["message"] == "boom"
        assert data["details"] == {"backend": "lxml"}

    def test_empty_message_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "parser")

    def test_empty_component_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "x", "")


class TestAnalysisMetrics:
    """Test derived metrics."""

    def test_characters_per_second(self) -> None:
        metrics = AnalysisMetrics(processing_time_ms=500.0, characters_processed=100)
        assert metrics.characters_per_second == 200.0

    def test_zero_time(self) -> None:
        assert AnalysisMetrics(characters_processed=10).characters_per_second == 0.0

    def test_to_dict(self) -> None:
        data = AnalysisMetrics(units_rendered=3).to_dict()
        assert data["units_rendered"] == 3
        assert set(data) == {
            "processing_time_ms", "characters_processed", "nodes_parsed",
            "elements_parsed", "units_rendered", "max_depth",
        }
