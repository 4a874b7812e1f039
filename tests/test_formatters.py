"""Tests for console formatters."""

import io
import json

import pytest
from rich.console import Console

from score_normalizer.output.formatters import format_chart, format_json, format_notes, format_table
from score_normalizer.scoring import normalize_scores


@pytest.fixture
def console():
    """Console writing plain text to a buffer."""
    return Console(file=io.StringIO(), width=120, color_system=None)


def _output(console):
    return console.file.getvalue()


class TestFormatTable:
    """Tests for format_table function."""

    def test_shows_statistics(self, console, sample_result):
        """Batch statistics are shown with two decimals."""
        format_table(sample_result, console)
        out = _output(console)
        assert "62.40" in out
        assert "14.18" in out
        assert "75.00" in out

    def test_shows_students(self, console, sample_result):
        """Each student and adjusted score appears."""
        format_table(sample_result, console)
        out = _output(console)
        assert "Student C" in out
        assert "94.6" in out

    def test_shows_method(self, console, sample_result):
        """Method label is shown."""
        format_table(sample_result, console)
        assert "Robust (Linear Shift)" in _output(console)

    def test_empty_roster(self, console):
        """Empty roster prints a placeholder row."""
        format_table(normalize_scores([]), console)
        assert "No students" in _output(console)


class TestFormatChart:
    """Tests for format_chart function."""

    def test_chart_has_legend(self, console, sample_result):
        """Chart shows a legend with the target average."""
        format_chart(sample_result, console)
        out = _output(console)
        assert "Performance Shift" in out
        assert "Target Avg (75.00)" in out

    def test_bar_lengths_scale_with_score(self, console):
        """A full-marks score fills the whole bar width."""
        result = normalize_scores([{"id": 1, "name": "A", "raw": 100}], {"target_mean_percent": 100})
        format_chart(result, console, width=10)
        assert "█" * 10 in _output(console)

    def test_empty_roster(self, console):
        """Empty roster has nothing to chart."""
        format_chart(normalize_scores([]), console)
        assert "Nothing to chart" in _output(console)

    def test_invalid_max_marks(self, console, sample_students):
        """Non-positive max marks cannot be charted."""
        format_chart(normalize_scores(sample_students, {"max_marks": 0}), console)
        assert "Nothing to chart" in _output(console)


class TestFormatNotes:
    """Tests for format_notes function."""

    def test_numbered(self, console):
        """Notes are numbered."""
        format_notes(["first", "second"], console)
        out = _output(console)
        assert "1. first" in out
        assert "2. second" in out

    def test_no_notes_prints_nothing(self, console):
        """Empty notes print nothing."""
        format_notes([], console)
        assert _output(console) == ""


class TestFormatJson:
    """Tests for format_json function."""

    def test_valid_json(self, console, sample_result):
        """Output parses back to the result."""
        format_json(sample_result, console)
        data = json.loads(_output(console))
        assert data["statistics"]["target_mean_points"] == 75
        assert len(data["students"]) == 5

    def test_nan_written_as_null(self, console, sample_students):
        """NaN values become null so strict parsers accept the output."""
        result = normalize_scores(sample_students, {"sd_scaling": "wide"})
        format_json(result, console)

        def reject(token):
            raise ValueError(token)

        data = json.loads(_output(console), parse_constant=reject)
        assert data["config"]["sd_scaling"] is None
        assert all(s["adjusted"] is None for s in data["students"])
