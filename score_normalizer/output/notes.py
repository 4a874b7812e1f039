"""Plain-language notes about a normalization result."""

import math

from ..config import SD_SCALING_MAX, SD_SCALING_MIN
from ..scoring import format_score, parse_score, unclamped_score


METHOD_DESCRIPTIONS = {
    "robust": (
        "Robust Linear Shift: shifts the class average to the target and locks in the gap "
        "between students, so top scorers keep their lead."
    ),
    "ratio": (
        "Simple Ratio: every score is multiplied by the same factor to reach the target. "
        "Good for quick, proportional scaling."
    ),
}

NOTE_TEMPLATES = {
    "invalid_config": "{field} is not a number - adjusted scores cannot be computed.",
    "invalid_raw": "{count} student(s) without a valid raw score ({names}) are left out of the mean and adjusted to 0.",
    "ratio_zero_mean": "The raw mean is 0, so the ratio method leaves scores unchanged.",
    "target_out_of_range": "Target mean {target} is outside 0-{max_marks} - adjusted scores will pile up at the limit.",
    "capped_max": "{count} student(s) capped at {max_marks}: {names}.",
    "capped_zero": "{count} student(s) floored at 0: {names}.",
    "boundary_tie": "Capping ties {names} at {limit} although their unclamped scores differed.",
    "sd_scaling_range": "Spread scaling {value}x is outside the usual {low}x-{high}x range.",
    "sd_scaling_compress": "Spread scaling {value}x compresses scores towards the target mean.",
    "sd_scaling_expand": "Spread scaling {value}x stretches scores away from the target mean.",
}

CONFIG_LABELS = {
    "max_marks": "Max marks",
    "target_mean_percent": "Target mean (%)",
    "sd_scaling": "Spread scaling",
}


def describe_method(method: str) -> str:
    """Explain a normalization method. Unknown methods fall back to robust."""
    return METHOD_DESCRIPTIONS.get(method, METHOD_DESCRIPTIONS["robust"])


def generate_notes(result: dict) -> list[str]:
    """
    Generate notes explaining what the normalization did.

    Args:
        result: Output of normalize_scores

    Returns:
        List of note strings, warnings before informational notes.
    """
    config = result.get("config", {})
    notes = _get_config_notes(config)

    # Nothing else is meaningful with NaN inputs
    if not notes:
        notes.extend(_get_data_notes(result))
        notes.extend(_get_clamping_notes(result))
        notes.extend(_get_scaling_notes(config))

    notes.append(("info", describe_method(config.get("method", "robust"))))

    priority_order = {"warning": 0, "info": 1}
    sorted_notes = sorted(notes, key=lambda x: priority_order.get(x[0], 2))

    return [note[1] for note in sorted_notes]


def _get_config_notes(config: dict) -> list[tuple[str, str]]:
    """Flag configuration values that failed to parse."""
    notes = []
    for field, label in CONFIG_LABELS.items():
        value = config.get(field)
        if isinstance(value, float) and math.isnan(value):
            notes.append(("warning", NOTE_TEMPLATES["invalid_config"].format(field=label)))
    return notes


def _get_data_notes(result: dict) -> list[tuple[str, str]]:
    """Generate notes about the raw data and the statistics."""
    notes = []
    config = result.get("config", {})
    stats = result.get("statistics", {})
    students = result.get("students", [])

    invalid = [s for s in students if math.isnan(parse_score(s.get("raw")))]
    if invalid:
        notes.append(("warning", NOTE_TEMPLATES["invalid_raw"].format(
            count=len(invalid), names=", ".join(str(s.get("name") or "?") for s in invalid)
        )))

    if config.get("method") == "ratio" and len(invalid) < len(students) and stats.get("raw_mean") == 0:
        notes.append(("warning", NOTE_TEMPLATES["ratio_zero_mean"]))

    max_marks = config.get("max_marks", 0)
    target = stats.get("target_mean_points", 0)
    if students and not 0 <= target <= max_marks:
        notes.append(("warning", NOTE_TEMPLATES["target_out_of_range"].format(
            target=format_score(target), max_marks=format_score(max_marks)
        )))

    return notes


def _get_clamping_notes(result: dict) -> list[tuple[str, str]]:
    """Generate notes for students clamped at 0 or max marks."""
    notes = []
    config = result.get("config", {})
    stats = result.get("statistics", {})
    max_marks = config.get("max_marks", 0)

    capped = []
    floored = []
    for student in result.get("students", []):
        value = unclamped_score(student.get("raw"), stats, config.get("method"), config.get("sd_scaling", 1.0))
        if math.isnan(value):
            continue
        if value > max_marks:
            capped.append((student, value))
        elif value < 0:
            floored.append((student, value))

    if capped:
        notes.append(("warning", NOTE_TEMPLATES["capped_max"].format(
            count=len(capped), max_marks=format_score(max_marks), names=_names(capped)
        )))
        if _has_distinct_values(capped):
            notes.append(("info", NOTE_TEMPLATES["boundary_tie"].format(
                names=_names(capped), limit=format_score(max_marks)
            )))

    if floored:
        notes.append(("warning", NOTE_TEMPLATES["capped_zero"].format(
            count=len(floored), names=_names(floored)
        )))
        if _has_distinct_values(floored):
            notes.append(("info", NOTE_TEMPLATES["boundary_tie"].format(
                names=_names(floored), limit="0"
            )))

    return notes


def _get_scaling_notes(config: dict) -> list[tuple[str, str]]:
    """Generate notes about the spread scaling of the robust method."""
    notes = []
    if config.get("method") == "ratio":
        return notes

    value = config.get("sd_scaling", 1.0)
    display = format_score(value)

    if not SD_SCALING_MIN <= value <= SD_SCALING_MAX:
        notes.append(("warning", NOTE_TEMPLATES["sd_scaling_range"].format(
            value=display, low=format_score(SD_SCALING_MIN), high=format_score(SD_SCALING_MAX)
        )))

    if value < 1:
        notes.append(("info", NOTE_TEMPLATES["sd_scaling_compress"].format(value=display)))
    elif value > 1:
        notes.append(("info", NOTE_TEMPLATES["sd_scaling_expand"].format(value=display)))

    return notes


def _names(entries: list[tuple[dict, float]]) -> str:
    return ", ".join(str(student.get("name") or "?") for student, _ in entries)


def _has_distinct_values(entries: list[tuple[dict, float]]) -> bool:
    return len({value for _, value in entries}) > 1
