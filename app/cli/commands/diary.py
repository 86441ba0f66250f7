"""
Diary text import/export commands.

Work on local files: export a JSON list of entries to diary text, or parse
a diary text file and report duplicates against a JSON list of existing
entries.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from app.cli.logging import setup_cli_logging
from app.core.exceptions import DiaryAppException
from app.data_transfer.diary_text import import_document
from app.services.diary_io_service import DiaryIOService
from app.utils.import_export.constants import ImportConfig

app = typer.Typer(help="Diary text import/export commands")
console = Console()

PREVIEW_WIDTH = 60


def _load_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]{what} file not found: {path}[/red]")
        raise typer.Exit(code=2)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        console.print(f"[red]{what} file is not valid JSON: {exc}[/red]")
        raise typer.Exit(code=2)


def _load_format(format_file: Optional[Path]) -> dict:
    if format_file is None:
        return {}
    options = _load_json(format_file, "Format")
    if not isinstance(options, dict):
        console.print("[red]Format file must contain a JSON object[/red]")
        raise typer.Exit(code=2)
    return options


def _load_entries(path: Optional[Path], what: str) -> List[dict]:
    if path is None:
        return []
    entries = _load_json(path, what)
    if not isinstance(entries, list):
        console.print(f"[red]{what} file must contain a JSON list of entries[/red]")
        raise typer.Exit(code=2)
    return entries


def _read_diary_text(text_file: Path) -> str:
    if not text_file.is_file():
        console.print(f"[red]Diary file not found: {text_file}[/red]")
        raise typer.Exit(code=2)
    try:
        # utf-8-sig drops the byte-order mark Windows editors write
        return text_file.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        console.print(f"[red]Diary file is not valid UTF-8 text: {exc}[/red]")
        raise typer.Exit(code=2)


def _preview(content: str) -> str:
    first_line = content.split("\n", 1)[0]
    if len(first_line) > PREVIEW_WIDTH:
        return first_line[:PREVIEW_WIDTH] + "..."
    return first_line


@app.command("export")
def export_entries(
    entries_file: Path = typer.Argument(..., help="JSON list of entries"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the document here instead of stdout"),
    format_file: Optional[Path] = typer.Option(None, "--format", "-f", help="JSON object with format options"),
    diary_id: Optional[int] = typer.Option(None, "--diary-id", help="Diary ID used in the default filename"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Export entries to a diary text document."""
    setup_cli_logging(verbose)
    entries = _load_entries(entries_file, "Entries")
    service = DiaryIOService()

    try:
        result = service.export_entries(entries, _load_format(format_file), diary_id=diary_id)
    except ValueError as exc:
        console.print(f"[red]Invalid entries: {exc}[/red]")
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(result.content, nl=False)
        return

    output.write_text(result.content, encoding="utf-8", newline="")
    console.print(f"[green]✓ Exported {result.entry_count} entries to {output}[/green]")


@app.command("import")
def import_entries(
    text_file: Path = typer.Argument(..., help="Diary text document"),
    existing_file: Optional[Path] = typer.Option(None, "--existing", "-e", help="JSON list of entries already stored"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write entries to import as JSON"),
    format_file: Optional[Path] = typer.Option(None, "--format", "-f", help="JSON object with format options"),
    include_duplicates: bool = typer.Option(False, "--include-duplicates", help="Keep entries that already exist"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Parse a diary text document and report duplicates."""
    setup_cli_logging(verbose)
    content = _read_diary_text(text_file)
    if text_file.suffix.lower() not in ImportConfig.ALLOWED_EXTENSIONS:
        console.print(f"[yellow]Warning: {text_file.name} does not look like a diary text file[/yellow]")

    existing = _load_entries(existing_file, "Existing entries")
    options = _load_format(format_file)
    service = DiaryIOService()

    try:
        preview = service.preview_import(content, options, existing=existing)
        plan = service.plan_import(
            content, options, existing=existing, skip_duplicates=not include_duplicates,
        )
    except DiaryAppException as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Diary import: {text_file.name}")
    table.add_column("Date", style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Tags", style="magenta")
    table.add_column("Content", style="white")
    for entry in preview.entries:
        table.add_row(entry.date, str(entry.index), escape(", ".join(entry.tags)), escape(_preview(entry.content)))
    console.print(table)

    summary = Table(title="Summary")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="white")
    summary.add_row("Entries parsed", str(preview.total_count))
    summary.add_row("Duplicates", str(preview.duplicate_count))
    summary.add_row("Entries to import", str(plan.import_count))
    console.print(summary)

    if output is not None:
        payload = [entry.model_dump() for entry in plan.entries]
        output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        console.print(f"[green]✓ Wrote {plan.import_count} entries to {output}[/green]")


@app.command("check")
def check_document(
    text_file: Path = typer.Argument(..., help="Diary text document"),
    format_file: Optional[Path] = typer.Option(None, "--format", "-f", help="JSON object with format options"),
    renumber: bool = typer.Option(False, "--renumber", help="Number same-day entries by position"),
):
    """Parse a document and list its entries without any limits or duplicate checks."""
    setup_cli_logging(verbose=True)
    result = import_document(_read_diary_text(text_file), _load_format(format_file), renumber=renumber)
    for entry in result.entries:
        console.print(escape(f"{entry.date} #{entry.index} [{', '.join(entry.tags)}] {_preview(entry.content)}"))
    console.print(f"[green]{len(result.entries)} entries[/green]")


@app.command("format")
def show_format(
    format_file: Optional[Path] = typer.Option(None, "--format", "-f", help="JSON object with format options"),
):
    """Show the format configuration after defaults are applied."""
    config = DiaryIOService.resolve_format(_load_format(format_file))

    table = Table(title="Diary text format")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="white")
    for key, value in config.to_options().items():
        table.add_row(key, escape(repr(value)))
    console.print(table)
