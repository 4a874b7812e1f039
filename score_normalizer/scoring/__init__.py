"""Scoring and normalization modules."""

from .statistics import compute_statistics, parse_score, valid_scores
from .normalizer import (
    adjust_score,
    clamp_score,
    format_score,
    normalize_scores,
    resolve_config,
    round_score,
    unclamped_score,
)

__all__ = [
    "compute_statistics",
    "parse_score",
    "valid_scores",
    "adjust_score",
    "clamp_score",
    "format_score",
    "normalize_scores",
    "resolve_config",
    "round_score",
    "unclamped_score",
]
