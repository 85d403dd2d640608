"""
Build commands.

- transform: Resolve references and write the Standard Shape JSON
- build: Transform, then render platform packages
- validate: Check the token source and print statistics
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from design_tokens.core.errors import TokenError
from design_tokens.core.loader import load_token_document
from design_tokens.core.pipeline import build, transform_tokens, write_transformed
from design_tokens.core.resolver import ResolutionIssue
from design_tokens.core.validator import ValidationReport, validate_document
from design_tokens.emitters import list_emitters

from .utils import fail, load_project

console = Console()

ALL_PLATFORMS = "all"


def _relative(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _print_issues(issues: list[ResolutionIssue]) -> None:
    if not issues:
        return
    typer.echo(f"Unresolved references ({len(issues)}):", err=True)
    for issue in issues:
        typer.echo(f"  WARNING: {issue.describe()}", err=True)


def transform_command(ctx: typer.Context) -> None:
    """
    Resolve token references and write tokens/transformed/*.json.
    """
    try:
        manifest = load_project(ctx)
        result = transform_tokens(manifest)
        written = write_transformed(manifest, result)
    except TokenError as e:
        fail(e)

    _print_issues(result.issues)
    for path in written:
        typer.echo(f"  wrote {_relative(path)}")
    typer.echo("Tokens transformed successfully")


def build_command(
    ctx: typer.Context,
    platform: str = typer.Option(
        ALL_PLATFORMS,
        "--platform",
        "-p",
        help="Platform to build: flutter, tailwind, css or all",
    ),
) -> None:
    """
    Transform tokens, then generate the platform packages.
    """
    available = list_emitters()
    if platform != ALL_PLATFORMS and platform not in available:
        typer.echo(
            f"Error: Unknown platform '{platform}'. Available: {', '.join(available)}, all",
            err=True,
        )
        raise typer.Exit(code=1)

    platforms = None if platform == ALL_PLATFORMS else [platform]
    try:
        manifest = load_project(ctx)
        result = build(manifest, platforms)
    except TokenError as e:
        fail(e)

    _print_issues(result.transform.issues)
    for name, paths in result.artifacts.items():
        typer.echo(f"{name}:")
        for path in paths:
            typer.echo(f"  wrote {_relative(path)}")
    typer.echo(f"Built {len(result.artifacts)} platform package(s)")


def _print_report(report: ValidationReport) -> None:
    if report.errors:
        typer.echo("Validation failed:\n", err=True)
        for err in report.errors:
            typer.echo(f"ERROR: {err}", err=True)

    for warn in report.warnings:
        typer.echo(f"WARNING: {warn}")

    if report.ok:
        stats = report.stats
        table = Table(title="Token Statistics")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Token sets", str(stats.sets))
        table.add_row("Total tokens", str(stats.total))
        table.add_row("Colors", str(stats.colors))
        table.add_row("Spacing", str(stats.spacing))
        table.add_row("Border radius", str(stats.border_radius))
        table.add_row("Font sizes", str(stats.font_sizes))
        console.print(table)
        typer.echo("OK: tokens are valid.")


def validate_command(ctx: typer.Context) -> None:
    """
    Validate the token source: required sets, value formats, references.
    """
    try:
        manifest = load_project(ctx)
        document = load_token_document(manifest.source_path)
    except TokenError as e:
        fail(e)

    report = validate_document(document, manifest.tokens.required_sets)
    _print_report(report)
    if not report.ok:
        raise typer.Exit(code=1)


__all__ = ["transform_command", "build_command", "validate_command"]
