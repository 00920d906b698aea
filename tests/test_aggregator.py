"""Tests for bmad_viewer.lib.aggregator module."""

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.result import create_result, error_result


class TestErrorAggregator:
    """Test ErrorAggregator collection and summary."""

    def test_starts_empty(self):
        aggregator = ErrorAggregator()
        assert not aggregator.has_errors()
        assert not aggregator.has_warnings()
        assert aggregator.get_summary() == {"errors": [], "warnings": []}

    def test_collects_errors_and_warnings_with_source(self):
        aggregator = ErrorAggregator()
        aggregator.add_result("a.yaml", error_result(ValueError("broken"), ["Failed to parse a.yaml"]))
        aggregator.add_result("b.csv", create_result([], [], ["Row 2 short"]))

        summary = aggregator.get_summary()
        assert summary["errors"] == [{"source": "a.yaml", "message": "broken"}]
        assert summary["warnings"] == [
            {"source": "a.yaml", "message": "Failed to parse a.yaml"},
            {"source": "b.csv", "message": "Row 2 short"},
        ]

    def test_keeps_original_error(self):
        aggregator = ErrorAggregator()
        error = ValueError("broken")
        aggregator.add_result("a.yaml", error_result(error))
        assert aggregator.errors[0].error is error

    def test_add_warning(self):
        aggregator = ErrorAggregator()
        aggregator.add_warning("x.md", "Duplicate id")
        assert aggregator.has_warnings()
        assert aggregator.get_summary()["warnings"] == [{"source": "x.md", "message": "Duplicate id"}]

    def test_equal_when_same_entries(self):
        first = ErrorAggregator()
        second = ErrorAggregator()
        first.add_result("a", error_result(ValueError("boom")))
        second.add_result("a", error_result(ValueError("boom")))
        assert first == second
