"""Tests for statistics module."""

import math
import statistics

import pytest
from score_normalizer.scoring import compute_statistics, parse_score, valid_scores


class TestParseScore:
    """Tests for parse_score function."""

    def test_int(self):
        """Integers are converted to float."""
        assert parse_score(65) == 65.0

    def test_numeric_string(self):
        """Numeric strings are parsed."""
        assert parse_score("72.5") == 72.5

    def test_string_with_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert parse_score("  40 ") == 40.0

    def test_empty_string_is_nan(self):
        """Empty string is not a score."""
        assert math.isnan(parse_score(""))

    def test_none_is_nan(self):
        """None is not a score."""
        assert math.isnan(parse_score(None))

    def test_non_numeric_is_nan(self):
        """Non-numeric text becomes NaN."""
        assert math.isnan(parse_score("absent"))

    def test_infinity_is_nan(self):
        """Infinite values are rejected."""
        assert math.isnan(parse_score("inf"))
        assert math.isnan(parse_score(float("-inf")))

    def test_bool_is_nan(self):
        """Booleans are not treated as scores."""
        assert math.isnan(parse_score(True))


class TestValidScores:
    """Tests for valid_scores function."""

    def test_filters_invalid(self):
        """Only finite scores are kept, in order."""
        students = [{"raw": 10}, {"raw": ""}, {"raw": "x"}, {"raw": "20"}, {}]
        assert valid_scores(students) == [10.0, 20.0]


class TestComputeStatistics:
    """Tests for compute_statistics function."""

    def test_example_roster(self, sample_students):
        """Demo roster produces the expected statistics."""
        stats = compute_statistics(sample_students, 100, 75)
        assert stats["raw_mean"] == pytest.approx(62.4)
        assert stats["raw_sd"] == pytest.approx(14.179, abs=1e-3)
        assert stats["target_mean_points"] == 75

    def test_matches_reference_mean_and_pstdev(self):
        """Mean and population SD match the statistics module."""
        scores = [12.5, 99, 47, 47, 3.25, 88, 61]
        students = [{"raw": s} for s in scores]
        stats = compute_statistics(students, 100, 50)
        assert stats["raw_mean"] == pytest.approx(statistics.fmean(scores))
        assert stats["raw_sd"] == pytest.approx(statistics.pstdev(scores))

    def test_population_not_sample_sd(self):
        """Variance divides by count, not count - 1."""
        stats = compute_statistics([{"raw": 2}, {"raw": 4}], 10, 50)
        assert stats["raw_sd"] == pytest.approx(1.0)

    def test_single_score_has_zero_sd(self):
        """One score has no spread."""
        stats = compute_statistics([{"raw": 42}], 100, 50)
        assert stats["raw_mean"] == 42
        assert stats["raw_sd"] == 0

    def test_empty_roster_returns_zeros(self):
        """Empty roster returns zeros regardless of configuration."""
        stats = compute_statistics([], 250, 90)
        assert stats == {"raw_mean": 0.0, "raw_sd": 0.0, "target_mean_points": 0.0}

    def test_all_invalid_returns_zeros(self):
        """A roster with no valid scores behaves like an empty one."""
        stats = compute_statistics([{"raw": ""}, {"raw": "abc"}], 100, 75)
        assert stats["target_mean_points"] == 0

    def test_invalid_scores_excluded_from_mean(self):
        """Invalid scores do not count towards the mean."""
        stats = compute_statistics([{"raw": 50}, {"raw": ""}, {"raw": 70}], 100, 75)
        assert stats["raw_mean"] == 60

    def test_target_points(self):
        """Target points are percent of max marks."""
        stats = compute_statistics([{"raw": 10}], 80, 60)
        assert stats["target_mean_points"] == (60 / 100) * 80

    def test_target_above_100_percent_not_clamped(self):
        """Percentages over 100 give targets above max marks."""
        stats = compute_statistics([{"raw": 10}], 50, 120)
        assert stats["target_mean_points"] == pytest.approx(60)

    def test_negative_target_not_clamped(self):
        """Negative percentages give negative targets."""
        stats = compute_statistics([{"raw": 10}], 100, -10)
        assert stats["target_mean_points"] == pytest.approx(-10)

    def test_nan_config_propagates(self):
        """NaN configuration yields a NaN target."""
        stats = compute_statistics([{"raw": 10}], math.nan, 75)
        assert math.isnan(stats["target_mean_points"])

    def test_recompute_is_deterministic(self, sample_students):
        """Computing twice gives identical output."""
        first = compute_statistics(sample_students, 100, 75)
        second = compute_statistics(sample_students, 100, 75)
        assert first == second
