"""pattern-scout CLI - detect the conventions a codebase already follows.

Usage:
    pattern-scout detect <directory> --type component
    pattern-scout detect ./src --type hook --manifest package.json
    pattern-scout stack package.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .analyzer import DEFAULT_SAMPLE_SIZE, AnalysisRun, combined_report, detect_patterns
from .files import FILE_TYPE_SUFFIXES
from .logging import configure_logging
from .techstack import KNOWN_PACKAGES, TechStackInfo, detect_tech_stack

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def cli(verbose: bool):
    """pattern-scout - infer a codebase's conventions and recommend how to follow them.

    Scans source files for import style, component shape, hooks, state
    management, error handling, styling and file naming, then ranks what it
    finds by how representative it is.
    """
    if verbose:
        configure_logging(logging.INFO)


@cli.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option(
    "--type", "-t", "file_type",
    type=click.Choice(sorted(FILE_TYPE_SUFFIXES)),
    default="component",
    help="Which kind of files to analyze",
)
@click.option(
    "--sample-size", "-n",
    type=click.IntRange(min=1),
    default=DEFAULT_SAMPLE_SIZE,
    envvar="PATTERN_SCOUT_SAMPLE_SIZE",
    show_default=True,
    help="Maximum number of files read per run",
)
@click.option("--manifest", "-m", type=click.Path(path_type=Path), default=None, help="package.json to detect the tech stack from")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
def detect(directory: str, file_type: str, sample_size: int, manifest: Path | None, json_only: bool):
    """Detect patterns used by FILE_TYPE files under DIRECTORY.

    Examples:

        pattern-scout detect ./src

        pattern-scout detect ./src --type hook --manifest package.json

        pattern-scout detect ./src --json-only > patterns.json
    """
    if not Path(directory).is_dir():
        raise click.BadParameter(f"Not a directory: {directory}", param_hint="DIRECTORY")

    run = detect_patterns(directory, file_type, sample_size=sample_size)
    stack = detect_tech_stack(manifest) if manifest else None

    if json_only:
        click.echo(json.dumps(combined_report(run, stack), indent=2))
        return

    console.print()
    console.print(Panel.fit(
        f"[bold cyan]pattern-scout v{__version__}[/] - {file_type} patterns in {run.directory}",
        border_style="cyan",
    ))
    console.print(
        f"[dim]{run.files_matched} files matched, {run.files_sampled} analyzed[/]"
    )
    _print_patterns(run)
    if stack is not None:
        _print_tech_stack(stack)
    _print_recommendations(run)


@cli.command()
@click.argument("manifest", type=click.Path(path_type=Path))
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
def stack(manifest: Path, json_only: bool):
    """Detect frameworks declared in a package.json (or a directory holding one)."""
    if not manifest.exists():
        raise click.ClickException(f"No such file or directory: {manifest}")

    info = detect_tech_stack(manifest)
    if json_only:
        click.echo(json.dumps(info.to_dict(), indent=2))
        return
    _print_tech_stack(info)


@cli.command()
def version():
    """Show version information."""
    console.print(f"pattern-scout v{__version__}")
    console.print("Codebase pattern detection & recommendations")


def _print_patterns(run: AnalysisRun) -> None:
    """Print one table per category that has records."""
    for category, records in run.categories.items():
        if not records:
            continue
        table = Table(title=category.replace("_", " ").title(), title_justify="left", border_style="dim")
        table.add_column("Pattern", style="bold")
        table.add_column("Frequency", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Examples", overflow="fold")

        for r in records:
            table.add_row(
                r.pattern,
                str(r.frequency),
                f"{r.confidence:.0%}",
                "\n".join(r.examples),
            )
        console.print()
        console.print(table)


def _print_tech_stack(info: TechStackInfo) -> None:
    console.print()
    if not info.detected:
        console.print("[yellow]No known frameworks detected[/]")
        return

    console.print(f"[bold]Detected:[/] {', '.join(info.detected)}")
    table = Table(title="Tech Stack", title_justify="left", show_header=True, border_style="dim")
    table.add_column("Framework", style="bold")
    table.add_column("Package")
    table.add_column("Version")
    for package, version in info.versions.items():
        table.add_row(KNOWN_PACKAGES.get(package, ""), package, version)
    console.print(table)


def _print_recommendations(run: AnalysisRun) -> None:
    console.print()
    console.print("[bold]Recommendations:[/]")
    for rec in run.recommendations:
        console.print(f"  - {rec}")


if __name__ == "__main__":
    cli()
