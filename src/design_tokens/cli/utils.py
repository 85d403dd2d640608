"""
Shared CLI utilities.
"""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from design_tokens.core.errors import TokenError
from design_tokens.core.manifest import MANIFEST_FILE, ProjectManifest, load_manifest


def get_version() -> str:
    """Get the package version."""
    from design_tokens import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"design-tokens version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """
    Configure stdlib logging for a CLI run.

    ``--verbose`` forces DEBUG; otherwise ``LOG_LEVEL`` (default WARNING).
    """
    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass
class CLIState:
    """Global options shared with every command through ``ctx.obj``."""

    manifest_path: Path = Path(MANIFEST_FILE)
    verbose: bool = False


def get_state(ctx: typer.Context) -> CLIState:
    state = ctx.find_root().obj
    return state if isinstance(state, CLIState) else CLIState()


def load_project(ctx: typer.Context) -> ProjectManifest:
    """Load the manifest named by ``--manifest`` (defaults when absent)."""
    return load_manifest(get_state(ctx).manifest_path)


def fail(error: TokenError, code: int = 1) -> NoReturn:
    """Print ``Error: ...`` to stderr and exit."""
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=code)


__all__ = [
    "get_version",
    "version_callback",
    "configure_logging",
    "CLIState",
    "get_state",
    "load_project",
    "fail",
]
