"""Pytest configuration and fixtures."""

import pytest

from score_normalizer.scoring import normalize_scores


@pytest.fixture
def sample_students():
    """Return the five demo students."""
    return [
        {"id": 1, "name": "Student A", "raw": 65},
        {"id": 2, "name": "Student B", "raw": 55},
        {"id": 3, "name": "Student C", "raw": 82},
        {"id": 4, "name": "Student D", "raw": 40},
        {"id": 5, "name": "Student E", "raw": 70},
    ]


@pytest.fixture
def sample_config():
    """Return the default configuration."""
    return {"max_marks": 100, "target_mean_percent": 75, "method": "robust", "sd_scaling": 1.0}


@pytest.fixture
def sample_result(sample_students, sample_config):
    """Return the normalization result for the demo students."""
    return normalize_scores(sample_students, sample_config)
