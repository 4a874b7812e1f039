"""CSV export for normalized scores."""

import csv
import io
from pathlib import Path

from ..config import CSV_FILENAME, CSV_HEADERS
from ..scoring import format_score


def render_csv(result: dict) -> str:
    """
    Render normalized scores as CSV text.

    Args:
        result: Output of normalize_scores

    Returns:
        Header row followed by one row per student in display order.
        Fields containing commas or quotes are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(_student_to_row(s) for s in result.get("students", []))
    return buffer.getvalue()


def export_to_csv(result: dict, output_path: str = CSV_FILENAME) -> Path:
    """
    Export normalized scores to a CSV file.

    A roster with no students produces a header-only file.

    Args:
        result: Output of normalize_scores
        output_path: Path to output CSV file

    Returns:
        Path of the written file.
    """
    path = Path(output_path)
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(render_csv(result))
    return path


def _student_to_row(student: dict) -> list[str]:
    """Convert a normalized student record to a CSV row."""
    return [
        student.get("name", ""),
        format_score(student.get("raw")),
        format_score(student.get("adjusted")),
    ]
