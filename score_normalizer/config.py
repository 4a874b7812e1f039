"""Configuration constants for Score Normalizer."""

# Defaults
DEFAULT_MAX_MARKS = 100
DEFAULT_TARGET_MEAN_PERCENT = 75
DEFAULT_METHOD = "robust"
DEFAULT_SD_SCALING = 1.0

# Normalization methods
METHODS = {
    "robust": "Robust (Linear Shift)",
    "ratio": "Simple Ratio (Multiplier)",
}

# Spread scaling slider range
SD_SCALING_MIN = 0.5
SD_SCALING_MAX = 1.5
SD_SCALING_STEP = 0.1

# Export
CSV_FILENAME = "normalized_scores.csv"
CSV_HEADERS = ["Student Name", "Raw Score", "Adjusted Score"]

# Column aliases accepted when reading a roster CSV
NAME_COLUMNS = ["student name", "name", "student", "student name/id"]
RAW_COLUMNS = ["raw score", "raw", "score", "marks"]

# Session
SESSION_DIR = ".score_normalizer"
SESSION_FILE = "session.json"

# Display precision
SCORE_DECIMALS = 2

# Demo roster seeded by `init`
SAMPLE_STUDENTS = [
    {"id": 1, "name": "Student A", "raw": 65},
    {"id": 2, "name": "Student B", "raw": 55},
    {"id": 3, "name": "Student C", "raw": 82},
    {"id": 4, "name": "Student D", "raw": 40},
    {"id": 5, "name": "Student E", "raw": 70},
]


def default_config() -> dict:
    """Return a fresh configuration dict with default values."""
    return {
        "max_marks": DEFAULT_MAX_MARKS,
        "target_mean_percent": DEFAULT_TARGET_MEAN_PERCENT,
        "method": DEFAULT_METHOD,
        "sd_scaling": DEFAULT_SD_SCALING,
    }
