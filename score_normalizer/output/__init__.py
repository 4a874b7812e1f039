"""Output formatting modules."""

from .formatters import format_table, format_chart, format_notes, format_json
from .csv_export import export_to_csv, render_csv
from .notes import describe_method, generate_notes

__all__ = [
    "format_table",
    "format_chart",
    "format_notes",
    "format_json",
    "export_to_csv",
    "render_csv",
    "describe_method",
    "generate_notes",
]
