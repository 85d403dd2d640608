"""
Version commands.

    design-tokens version            print the current version
    design-tokens version check      exit 0 if a version update is needed, 1 if not
    design-tokens version auto       classify changes and bump accordingly
    design-tokens version patch      force a bump (also: minor, major)
    design-tokens version info       show the recorded state
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from design_tokens.core.changes import MAJOR, MINOR, PATCH
from design_tokens.core.errors import TokenError
from design_tokens.core.manifest import ProjectManifest
from design_tokens.core.versioning import VersionManager, VersionStatus, VersionUpdate

from .utils import fail, load_project

console = Console()

ACTIONS = ("check", "auto", PATCH, MINOR, MAJOR, "info")

# `check` reserves exit 1 for "up to date"
CHECK_ERROR_EXIT = 2


def _manager(manifest: ProjectManifest) -> VersionManager:
    return VersionManager(
        source_path=manifest.source_path,
        state_path=manifest.state_path,
        initial_version=manifest.version.initial,
    )


def _print_update(update: VersionUpdate) -> None:
    if update.changes is not None:
        typer.echo("Token changes:")
        typer.echo(update.changes.summary())
    if update.decision is not None and update.decision.needs_review:
        typer.echo(f"WARNING: {update.decision.reason}", err=True)
    if update.changed:
        typer.echo(f"Version updated: {update.previous_version} -> {update.version}")
    else:
        typer.echo(f"Tokens hash refreshed, version unchanged ({update.version})")


def _check(manager: VersionManager) -> None:
    try:
        needs_update = manager.needs_update()
    except TokenError as e:
        fail(e, code=CHECK_ERROR_EXIT)
    typer.echo("yes" if needs_update else "no")
    raise typer.Exit(code=0 if needs_update else 1)


def _info(manager: VersionManager) -> None:
    state = manager.load_state()
    status = manager.status()

    table = Table(title="Token Version")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Version", state.version if state else f"{manager.initial_version} (initial)")
    table.add_row("Status", status.value)
    if state is not None:
        table.add_row("Tokens hash", state.tokens_hash[:12])
        table.add_row("Token count", str(state.token_count))
        table.add_row("Last updated", state.last_updated or "-")
        table.add_row("Updated by", state.updated_by)
    console.print(table)


def version_command(
    ctx: typer.Context,
    action: str | None = typer.Argument(
        None,
        help="check, auto, patch, minor, major or info (default: print version)",
    ),
) -> None:
    """
    Manage the token package version.
    """
    if action is not None and action not in ACTIONS:
        typer.echo(
            f"Error: Unknown action '{action}'. Available: {', '.join(ACTIONS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        manager = _manager(load_project(ctx))
    except TokenError as e:
        fail(e, code=CHECK_ERROR_EXIT if action == "check" else 1)

    if action == "check":
        _check(manager)
        return

    try:
        if action is None:
            typer.echo(manager.current_version())
        elif action == "info":
            _info(manager)
        elif action == "auto":
            update = manager.auto()
            if update is None:
                typer.echo(f"No token changes detected, version unchanged ({manager.current_version()})")
            else:
                _print_update(update)
        else:
            _print_update(manager.bump(action))
    except TokenError as e:
        fail(e)


__all__ = ["version_command"]
