"""Aggregate statistics over a roster of raw scores."""

import math
from typing import Any, Iterable


def parse_score(value: Any) -> float:
    """
    Parse a user-entered score.

    Args:
        value: Number, numeric string, empty string or None

    Returns:
        The value as a float, or NaN when it is empty, non-numeric
        or not finite.
    """
    if value is None or isinstance(value, bool):
        return math.nan

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan

    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan

    return number if math.isfinite(number) else math.nan


def valid_scores(students: Iterable[dict]) -> list[float]:
    """Return the finite raw scores of the given students, in order."""
    scores = []
    for student in students:
        score = parse_score(student.get("raw"))
        if not math.isnan(score):
            scores.append(score)
    return scores


def compute_statistics(students: Iterable[dict], max_marks: float, target_mean_percent: float) -> dict:
    """
    Compute mean, population standard deviation and target mean.

    Args:
        students: Student records with a 'raw' key
        max_marks: Maximum marks for the exam
        target_mean_percent: Desired class mean as a percentage of max_marks

    Returns:
        Dict with raw_mean, raw_sd, target_mean_points. All zero when no
        student has a valid score.
    """
    scores = valid_scores(students)
    count = len(scores)

    if count == 0:
        return {"raw_mean": 0.0, "raw_sd": 0.0, "target_mean_points": 0.0}

    raw_mean = sum(scores) / count
    variance = sum((x - raw_mean) ** 2 for x in scores) / count
    raw_sd = math.sqrt(variance)

    # Not clamped: percentages outside 0-100 give out-of-range targets
    target_mean_points = (target_mean_percent / 100) * max_marks

    return {
        "raw_mean": raw_mean,
        "raw_sd": raw_sd,
        "target_mean_points": target_mean_points,
    }
