#!/usr/bin/env python3
"""
CLI interface for the bank statement parser.
"""
import logging
import typer
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.table import Table

from .core.detectors import FormatRegistry
from .core.errors import StatementError
from .core.loader import load_statement_text
from .core.runner import run_statements
from .core.views import ConsoleView
from .tools.inspect_lines import inspect_statement, render_line_report

app = typer.Typer(help="Bank statement to CSV converter")
console = Console()


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@app.command()
def parse(
    paths: List[Path] = typer.Argument(..., help="Statement PDF (or extracted .txt) files"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Output CSV file path"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template ID to use"),
    templates_dir: Optional[Path] = typer.Option(None, "--templates", help="Directory of format templates"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Convert statements into a single CSV of deposits and payments, newest first."""
    _configure_logging(verbose)

    for path in paths:
        if not path.exists():
            console.print(f"[red]Error: file not found: {path}[/red]")
            raise typer.Exit(1)

    out_path = output or paths[0].with_suffix(".csv")

    try:
        run_statements(paths, out_path, ConsoleView(console), template, templates_dir)
    except StatementError as e:
        console.print(f"\n\n[red]Encountered an error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n\n[red]Encountered an unknown error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


@app.command()
def detect(
    path: Path = typer.Argument(..., help="Statement PDF (or extracted .txt) file"),
    templates_dir: Optional[Path] = typer.Option(None, "--templates", help="Directory of format templates"),
):
    """Detect which institution format a statement follows."""
    try:
        text = load_statement_text(path)
        identifier, _ = FormatRegistry(templates_dir).select(text)
    except StatementError as e:
        console.print(f"[red]Error detecting format: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Detected format: {identifier.name}[/green]")


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="Statement PDF (or extracted .txt) file"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template ID to use"),
    templates_dir: Optional[Path] = typer.Option(None, "--templates", help="Directory of format templates"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Show how a statement is split into candidate transaction lines."""
    _configure_logging(verbose)

    try:
        text = load_statement_text(path)
        registry = FormatRegistry(templates_dir)
        if template:
            fmt = registry.get_template(template)
        else:
            fmt = registry.select(text)[1].fmt
        reports = inspect_statement(text, fmt)
    except StatementError as e:
        console.print(f"[red]Error inspecting statement: {e}[/red]")
        raise typer.Exit(1)

    render_line_report(reports, console, title=f"{fmt.name}: {path.name}")
    matched = sum(1 for r in reports if r.matched)
    console.print(f"{matched} of {len(reports)} candidate line(s) parsed")


@app.command()
def formats(
    templates_dir: Optional[Path] = typer.Option(None, "--templates", help="Directory of format templates"),
):
    """List known statement formats in the order they are tried."""
    registry = FormatRegistry(templates_dir)

    table = Table(title="Statement formats")
    table.add_column("Priority", justify="right")
    table.add_column("Template ID")
    table.add_column("Name")
    table.add_column("Identified by")
    for fmt in registry.list_templates():
        table.add_row(str(fmt.priority), fmt.template_id, fmt.name, fmt.identifier.must_contain)
    console.print(table)


if __name__ == "__main__":
    app()
