"""Output formatters for normalization results."""

import json
import math

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import METHODS
from ..scoring import format_score, parse_score

CHART_WIDTH = 40
RAW_BAR_STYLE = "grey62"
ADJUSTED_BAR_STYLE = "slate_blue3"
TARGET_STYLE = "green"


def format_table(result: dict, console: Console) -> None:
    """Format and print configuration, statistics and scores as rich tables."""
    config = result["config"]
    stats = result["statistics"]
    students = result["students"]

    # Configuration and statistics panel
    method = config.get("method", "robust")
    header = Text()
    header.append(f"Method: {METHODS.get(method, method)}\n", style="bold cyan")
    header.append(f"Max Marks: {format_score(config['max_marks'])}  |  ")
    header.append(f"Target Mean: {format_score(config['target_mean_percent'])}%")
    if method != "ratio":
        header.append(f"  |  Spread Scaling: {format_score(config['sd_scaling'])}x")

    console.print(Panel(header, title="[bold]Configuration[/bold]", border_style="cyan"))
    console.print()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column("Statistic", style="dim")
    stats_table.add_column("Value", justify="right")

    stats_table.add_row("Raw Mean", _fixed(stats["raw_mean"]))
    stats_table.add_row("Raw Std Dev", _fixed(stats["raw_sd"]))
    stats_table.add_row("Target Mean", f"[bold cyan]{_fixed(stats['target_mean_points'])}[/bold cyan]")

    console.print(Panel(stats_table, title="[bold]Batch Statistics[/bold]", border_style="dim"))
    console.print()

    # Scores table
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="center", style="dim", width=4)
    table.add_column("ID", justify="right", width=4)
    table.add_column("Student Name/ID", width=30)
    table.add_column("Raw Score", justify="right", width=10)
    table.add_column("Adjusted", justify="right", style="bold slate_blue3", width=10)

    for index, student in enumerate(students, 1):
        raw = student.get("raw")
        raw_display = escape(format_score(raw))
        if math.isnan(parse_score(raw)):
            raw_display = f"[red]{raw_display or '-'}[/red]"

        table.add_row(
            str(index),
            str(student.get("id", "")),
            escape(str(student.get("name", ""))),
            raw_display,
            format_score(student.get("adjusted")),
        )

    if not students:
        table.add_row("", "", "[dim]No students[/dim]", "", "")

    console.print(table)
    console.print()


def format_chart(result: dict, console: Console, width: int = CHART_WIDTH) -> None:
    """
    Print a horizontal bar chart of raw vs adjusted scores.

    Bars are scaled to [0, max_marks]; the target average is marked
    with a vertical rule on each bar.
    """
    max_marks = result["config"]["max_marks"]
    target = result["statistics"]["target_mean_points"]
    students = result["students"]

    if not students or not _is_positive(max_marks):
        console.print("[dim]Nothing to chart[/dim]")
        return

    target_col = _columns(target, max_marks, width) if math.isfinite(target) else None
    label_width = max(len(str(s.get("name", ""))) for s in students)

    chart = Text()
    for student in students:
        name = str(student.get("name", "")).ljust(label_width)
        raw = parse_score(student.get("raw"))
        raw_value = 0.0 if math.isnan(raw) else raw

        chart.append(f"{name}  ", style="bold")
        chart.append_text(_bar(raw_value, max_marks, width, RAW_BAR_STYLE, target_col))
        chart.append(f" {format_score(raw_value)}\n", style=RAW_BAR_STYLE)

        chart.append(" " * (label_width + 2))
        chart.append_text(_bar(student.get("adjusted", 0.0), max_marks, width, ADJUSTED_BAR_STYLE, target_col))
        chart.append(f" {format_score(student.get('adjusted'))}\n", style=ADJUSTED_BAR_STYLE)

    legend = Text()
    legend.append("█", style=RAW_BAR_STYLE)
    legend.append(" Raw Score  ")
    legend.append("█", style=ADJUSTED_BAR_STYLE)
    legend.append(" Adjusted Score  ")
    legend.append("│", style=TARGET_STYLE)
    legend.append(f" Target Avg ({_fixed(target)})")
    chart.append_text(legend)

    console.print(Panel(chart, title="[bold]Performance Shift[/bold]", border_style="dim"))
    console.print()


def format_notes(notes: list[str], console: Console) -> None:
    """Print numbered notes in a panel."""
    if not notes:
        return

    notes_text = Text()
    for i, note in enumerate(notes, 1):
        notes_text.append(f"{i}. ", style="bold cyan")
        notes_text.append(f"{note}\n")
    console.print(Panel(notes_text, title="[bold]Notes[/bold]", border_style="green"))
    console.print()


def format_json(result: dict, console: Console) -> None:
    """Format and print results as JSON. Non-finite numbers become null."""
    console.print_json(json.dumps(_json_safe(result), indent=2, default=str, allow_nan=False))


def _json_safe(obj):
    """Recursively replace NaN and infinity with None."""
    if isinstance(obj, dict):
        return {k: _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


def _bar(value: float, max_marks: float, width: int, style: str, target_col: int | None) -> Text:
    """Render one bar with an optional target marker."""
    filled = _columns(value, max_marks, width) if math.isfinite(value) else 0
    bar = Text()
    for col in range(width):
        if col == target_col:
            bar.append("│", style=TARGET_STYLE)
        elif col < filled:
            bar.append("█", style=style)
        else:
            bar.append(" ")
    return bar


def _columns(value: float, max_marks: float, width: int) -> int:
    """Map a score in [0, max_marks] to a column count in [0, width]."""
    fraction = min(1.0, max(0.0, value / max_marks))
    return round(fraction * width)


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _fixed(value: float) -> str:
    """Two-decimal display used for batch statistics."""
    return f"{value:.2f}"
