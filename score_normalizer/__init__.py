"""Score Normalizer - rescale exam scores to hit a target class mean."""

__version__ = "1.0.0"
