"""CLI entry point for Score Normalizer."""

import csv
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import CSV_FILENAME, METHODS, NAME_COLUMNS, RAW_COLUMNS, default_config
from .output import (
    export_to_csv,
    format_chart,
    format_json,
    format_notes,
    format_table,
    generate_notes,
)
from .roster import EDITABLE_FIELDS, Roster
from .scoring import normalize_scores, parse_score
from .utils import SessionError, SessionStore

app = typer.Typer(
    name="score-normalizer",
    help="Rescale exam scores so the class mean meets a target.",
    add_completion=False,
)
console = Console()

OUTPUT_FORMATS = ["table", "json"]

SESSION_OPTION = typer.Option(
    None,
    "--session",
    "-s",
    help="Session file (default: .score_normalizer/session.json)",
)


def parse_config_options(
    max_marks: Optional[str] = None,
    target: Optional[str] = None,
    method: Optional[str] = None,
    sd_scaling: Optional[str] = None,
) -> dict:
    """Turn CLI option strings into config values. Omitted options are left out."""
    values = {}
    if max_marks is not None:
        values["max_marks"] = parse_score(max_marks)
    if target is not None:
        values["target_mean_percent"] = parse_score(target)
    if method is not None:
        values["method"] = method.strip().lower()
    if sd_scaling is not None:
        values["sd_scaling"] = parse_score(sd_scaling)
    return values


def render_result(result: dict, output_format: str = "table", chart: bool = True) -> None:
    """Print a normalization result in the requested format."""
    if output_format == "json":
        format_json(result, console)
        return

    format_table(result, console)
    if chart:
        format_chart(result, console)
    format_notes(generate_notes(result), console)


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Invalid format: {output_format}[/red]")
        console.print(f"Available formats: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(1)


def _check_method(method: Optional[str]) -> None:
    if method is not None and method.strip().lower() not in METHODS:
        console.print(f"[red]Invalid method: {method}[/red]")
        console.print(f"Available methods: {', '.join(METHODS)}")
        raise typer.Exit(1)


def _load_session(store: SessionStore) -> dict:
    """Load the session or exit with a hint to run init."""
    try:
        session = store.load()
    except SessionError:
        console.print(f"[red]Session file is unreadable: {store.path}[/red]")
        console.print("Fix the file by hand or run [cyan]score-normalizer init --force[/cyan] to start over.")
        raise typer.Exit(1)

    if session is None:
        console.print(f"[red]No session found at {store.path}[/red]")
        console.print("Run [cyan]score-normalizer init[/cyan] first.")
        raise typer.Exit(1)
    return session


@app.command()
def init(
    empty: bool = typer.Option(False, "--empty", help="Start with no students instead of the sample roster"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing session"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Create a new session with default configuration."""
    store = SessionStore(session)
    if store.exists() and not force:
        console.print(f"[red]Session already exists: {store.path}[/red]")
        console.print("Use --force to overwrite it.")
        raise typer.Exit(1)

    roster = Roster() if empty else Roster.sample()
    store.save(roster, default_config())
    console.print(f"[green]Session created at {store.path} with {len(roster)} students[/green]")


@app.command()
def add(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Student name (default: 'Student <id>')"),
    raw: Optional[str] = typer.Option(None, "--raw", "-r", help="Raw score (default: 0)"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Add a student to the roster."""
    store = SessionStore(session)
    state = _load_session(store)

    student = state["roster"].add(name=name, raw=0 if raw is None else raw)
    store.save(state["roster"], state["config"])
    console.print(f"[green]Added {escape(student['name'])} (id {student['id']})[/green]")


@app.command()
def remove(
    student_id: int = typer.Argument(..., help="Id of the student to remove"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Remove a student from the roster."""
    store = SessionStore(session)
    state = _load_session(store)

    if not state["roster"].remove(student_id):
        console.print(f"[red]No student with id {student_id}[/red]")
        raise typer.Exit(1)

    store.save(state["roster"], state["config"])
    console.print(f"[green]Removed student {student_id}[/green]")


@app.command("set", context_settings={"ignore_unknown_options": True})
def set_field(
    student_id: int = typer.Argument(..., help="Id of the student to edit"),
    field: str = typer.Argument(..., help=f"Field to edit: {', '.join(EDITABLE_FIELDS)}"),
    value: str = typer.Argument(..., help="New value"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Edit a student's name or raw score."""
    store = SessionStore(session)
    state = _load_session(store)

    try:
        updated = state["roster"].update(student_id, field.strip().lower(), value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not updated:
        console.print(f"[red]No student with id {student_id}[/red]")
        raise typer.Exit(1)

    store.save(state["roster"], state["config"])
    console.print(f"[green]Student {student_id}: {escape(field)} = {escape(value)}[/green]")


@app.command()
def configure(
    max_marks: Optional[str] = typer.Option(None, "--max-marks", "-m", help="Total max marks"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target mean (%)"),
    method: Optional[str] = typer.Option(None, "--method", help=f"Normalization method: {', '.join(METHODS)}"),
    sd_scaling: Optional[str] = typer.Option(None, "--sd-scaling", help="Spread scaling for the robust method"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Change the normalization configuration."""
    _check_method(method)

    store = SessionStore(session)
    state = _load_session(store)

    values = parse_config_options(max_marks, target, method, sd_scaling)
    state["config"].update(values)
    store.save(state["roster"], state["config"])

    if values:
        changes = ", ".join(f"{k}={v}" for k, v in values.items())
        console.print(f"[green]Configuration updated: {changes}[/green]")
    else:
        console.print("[dim]Nothing to change[/dim]")


@app.command()
def show(
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    chart: bool = typer.Option(True, "--chart/--no-chart", help="Show the performance shift chart"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Recompute and display the normalized scores."""
    _check_format(output_format)

    state = _load_session(SessionStore(session))
    result = normalize_scores(state["roster"], state["config"])
    render_result(result, output_format, chart)


@app.command()
def export(
    output: str = typer.Option(CSV_FILENAME, "--output", "-o", help="Output CSV file path"),
    session: Optional[str] = SESSION_OPTION,
) -> None:
    """Export the normalized scores to CSV."""
    state = _load_session(SessionStore(session))
    result = normalize_scores(state["roster"], state["config"])

    path = export_to_csv(result, output)
    console.print(f"[green]Results saved to {path}[/green]")


@app.command()
def normalize(
    input_file: str = typer.Argument(..., help="CSV file with student name and raw score columns"),
    max_marks: Optional[str] = typer.Option(None, "--max-marks", "-m", help="Total max marks"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target mean (%)"),
    method: Optional[str] = typer.Option(None, "--method", help=f"Normalization method: {', '.join(METHODS)}"),
    sd_scaling: Optional[str] = typer.Option(None, "--sd-scaling", help="Spread scaling for the robust method"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    chart: bool = typer.Option(True, "--chart/--no-chart", help="Show the performance shift chart"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output CSV file path"),
) -> None:
    """Normalize scores from a CSV file without using a session."""
    _check_format(output_format)
    _check_method(method)

    input_path = Path(input_file)
    if not input_path.exists():
        console.print(f"[red]File not found: {input_file}[/red]")
        raise typer.Exit(1)

    roster = Roster()
    for name, raw in _read_students_from_csv(input_path):
        roster.add(name=name, raw=raw)

    if not len(roster):
        console.print("[yellow]No students found in file[/yellow]")

    config = parse_config_options(max_marks, target, method, sd_scaling)
    result = normalize_scores(roster, config)

    if output:
        path = export_to_csv(result, output)
        console.print(f"[green]Results saved to {path}[/green]")
    else:
        render_result(result, output_format, chart)


def _read_students_from_csv(path: Path) -> list[tuple[str, str]]:
    """Read (name, raw) pairs from a CSV file."""
    students = []

    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return students

        columns = [h.strip().lower() for h in header]
        name_col = _find_column(columns, NAME_COLUMNS)
        raw_col = _find_column(columns, RAW_COLUMNS)

        rows = list(reader)
        if name_col is None or raw_col is None:
            # No recognised header, treat as name,raw data
            name_col, raw_col = 0, 1
            rows.insert(0, header)

        for row in rows:
            if not any(cell.strip() for cell in row):
                continue
            name = row[name_col].strip() if len(row) > name_col else ""
            raw = row[raw_col].strip() if len(row) > raw_col else ""
            students.append((name, raw))

    return students


def _find_column(columns: list[str], aliases: list[str]) -> int | None:
    """Return the index of the first column matching an alias."""
    for alias in aliases:
        if alias in columns:
            return columns.index(alias)
    return None


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"score-normalizer version {__version__}")


if __name__ == "__main__":
    app()
