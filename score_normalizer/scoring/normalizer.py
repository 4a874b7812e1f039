"""Score normalization logic."""

import math
from typing import Any, Iterable

from ..config import SCORE_DECIMALS, default_config
from .statistics import compute_statistics, parse_score


def resolve_config(config: dict | None = None) -> dict:
    """
    Fill in defaults and parse numeric configuration values.

    Unparseable numbers become NaN and are passed through unchanged.
    """
    resolved = default_config()
    if config:
        resolved.update({k: v for k, v in config.items() if k in resolved and v is not None})

    for key in ("max_marks", "target_mean_percent", "sd_scaling"):
        resolved[key] = parse_score(resolved[key])

    resolved["method"] = str(resolved["method"]).strip().lower()
    return resolved


def clamp_score(value: float, max_marks: float) -> float:
    """Clamp value to [0, max_marks]. NaN in either argument propagates."""
    if math.isnan(value) or math.isnan(max_marks):
        return math.nan
    return min(max_marks, max(0.0, value))


def unclamped_score(raw: Any, stats: dict, method: str, sd_scaling: float) -> float:
    """Apply the normalization formula without clamping. NaN for invalid raw."""
    score = parse_score(raw)
    if math.isnan(score):
        return math.nan

    raw_mean = stats["raw_mean"]
    target = stats["target_mean_points"]

    if method == "ratio":
        # Identity when the class mean is zero
        if raw_mean == 0:
            return score
        return score * (target / raw_mean)

    return target + sd_scaling * (score - raw_mean)


def adjust_score(
    raw: Any,
    stats: dict,
    method: str,
    sd_scaling: float,
    max_marks: float,
) -> float:
    """
    Compute one student's adjusted score.

    Args:
        raw: The student's raw score as entered
        stats: Output of compute_statistics
        method: 'robust' or 'ratio'; anything else is treated as robust
        sd_scaling: Spread multiplier for the robust method
        max_marks: Upper bound of the valid range

    Returns:
        Clamped adjusted score, or 0 when raw is not a valid number.
    """
    if math.isnan(parse_score(raw)):
        return 0.0

    return clamp_score(unclamped_score(raw, stats, method, sd_scaling), max_marks)


def normalize_scores(students: Iterable[dict], config: dict | None = None) -> dict:
    """
    Recompute statistics and adjusted scores for a roster.

    Args:
        students: Student records ({id, name, raw}) in display order
        config: Configuration values; missing keys use defaults

    Returns:
        Dict with config, statistics and students (each record copied
        with an 'adjusted' key added).
    """
    students = list(students)
    cfg = resolve_config(config)
    stats = compute_statistics(students, cfg["max_marks"], cfg["target_mean_percent"])

    rows = []
    for student in students:
        adjusted = adjust_score(
            student.get("raw"),
            stats,
            cfg["method"],
            cfg["sd_scaling"],
            cfg["max_marks"],
        )
        rows.append({**student, "adjusted": adjusted})

    return {
        "config": cfg,
        "statistics": stats,
        "students": rows,
    }


def round_score(value: float) -> float:
    """Round a score to display precision."""
    return round(value, SCORE_DECIMALS)


def format_score(value: Any) -> str:
    """
    Render a score for display or export.

    Numbers are rounded to two decimals with trailing zeros dropped
    (77.60 -> '77.6', 100.00 -> '100'). Non-numeric values are returned
    as text, None as an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if not math.isfinite(value):
        return str(value)

    text = f"{round_score(value):.{SCORE_DECIMALS}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
