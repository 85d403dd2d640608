"""
design-tokens CLI.

- build.py: transform, build and validate commands
- version.py: version management
- utils.py: Shared utilities
"""

from __future__ import annotations

from pathlib import Path

import typer

from design_tokens.core.manifest import MANIFEST_FILE

from .build import build_command, transform_command, validate_command
from .utils import CLIState, configure_logging, version_callback
from .version import version_command

app = typer.Typer(
    help="""
Design token pipeline for Figma Tokens Studio exports.

Resolves references across the global/light/dark sets and generates
Flutter, Tailwind and CSS packages.

  • transform  → tokens/transformed/*.json
  • build      → platform packages (--platform flutter|tailwind|css|all)
  • validate   → check the token source
  • version    → check and bump the token package version
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    manifest: Path = typer.Option(  # noqa: B008
        Path(MANIFEST_FILE),
        "--manifest",
        "-m",
        help="Path to tokens.toml",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """design-tokens main callback for global options."""
    configure_logging(verbose)
    ctx.obj = CLIState(manifest_path=manifest, verbose=verbose)


app.command(name="transform")(transform_command)
app.command(name="build")(build_command)
app.command(name="validate")(validate_command)
app.command(name="version")(version_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
