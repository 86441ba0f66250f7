"""
Main CLI application using Typer.

Entry point: python -m app.cli
CLI Name: diary-io
"""
import typer

from app import __version__ as app_version

app = typer.Typer(
    name="diary-io",
    help="Diary IO CLI - convert journal entries to and from plain-text diaries",
)

@app.command()
def version():
    """Show CLI version information."""
    typer.echo(f"Diary IO CLI version {app_version}")

# Register command groups
from app.cli.commands import diary
app.add_typer(diary.app, name="diary")
