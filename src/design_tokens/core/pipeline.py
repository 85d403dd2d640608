"""
Build pipeline.

    load -> resolve -> project -> render -> write

Every artifact is rendered in memory before anything is written, so a
failure in one emitter leaves previous outputs untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from design_tokens.emitters import get_emitter, list_emitters

from .errors import EmitterError
from .ir import StandardTokens
from .loader import load_token_document
from .manifest import ProjectManifest
from .outputs import write_artifacts, write_json
from .projector import project_standard_shape
from .resolver import ResolutionIssue, ResolveOptions, resolve_document

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Projected tokens plus the references left unresolved."""

    tokens: StandardTokens
    issues: list[ResolutionIssue] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)


@dataclass
class BuildResult:
    """Outcome of a build: the transform plus files written per platform."""

    transform: TransformResult
    artifacts: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def files(self) -> list[Path]:
        paths = list(self.transform.written)
        for written in self.artifacts.values():
            paths.extend(written)
        return paths


def resolve_options(manifest: ProjectManifest) -> ResolveOptions:
    return ResolveOptions(
        throw_on_unresolved=manifest.resolve.throw_on_unresolved,
        preserve_raw_value=manifest.resolve.preserve_raw_value,
        max_depth=manifest.resolve.max_depth,
    )


def transform_tokens(manifest: ProjectManifest) -> TransformResult:
    """
    Load the token source, resolve references and project the Standard Shape.

    Raises:
        InputError: If the source cannot be read
        ReferenceResolutionError: With ``throw_on_unresolved`` enabled
    """
    document = load_token_document(manifest.source_path)
    logger.info("Loaded %d tokens from %s", document.count_tokens(), manifest.source_path)

    result = resolve_document(document, manifest.tokens.sets, resolve_options(manifest))
    tokens = project_standard_shape(result.document, themes=manifest.tokens.themes)
    return TransformResult(tokens=tokens, issues=result.issues)


def write_transformed(manifest: ProjectManifest, transform: TransformResult) -> list[Path]:
    """Write tokens.json and its primitive/semantic/component slices."""
    out_dir = manifest.output_dir("transformed")
    data = transform.tokens.to_data()
    written = [
        write_json(out_dir / "tokens.json", data),
        write_json(out_dir / "primitive.json", data["primitive"]),
        write_json(out_dir / "semantic.json", data["semantic"]),
        write_json(out_dir / "component.json", data["component"]),
    ]
    transform.written = written
    return written


def render_platforms(
    tokens: StandardTokens,
    platforms: Sequence[str],
) -> dict[str, dict[str, str]]:
    """
    Render every requested platform in memory.

    Raises:
        EmitterError: If a platform is unknown or its renderer fails
    """
    rendered: dict[str, dict[str, str]] = {}
    for name in platforms:
        emitter = get_emitter(name)
        try:
            rendered[name] = emitter.render(tokens)
        except (KeyError, TypeError, ValueError) as e:
            raise EmitterError(f"Failed to render {name} artifacts: {e}") from e
        logger.debug("Rendered %s: %s", name, ", ".join(rendered[name]))
    return rendered


def build(manifest: ProjectManifest, platforms: Sequence[str] | None = None) -> BuildResult:
    """
    Run the whole pipeline.

    Args:
        manifest: Project manifest
        platforms: Platforms to build; all registered platforms when None

    Returns:
        BuildResult with every file written
    """
    selected = list(platforms) if platforms else list_emitters()
    transform = transform_tokens(manifest)
    rendered = render_platforms(transform.tokens, selected)

    write_transformed(manifest, transform)
    result = BuildResult(transform=transform)
    for name, files in rendered.items():
        out_dir = manifest.output_dir(get_emitter(name).output)
        result.artifacts[name] = write_artifacts(out_dir, files)
        logger.info("Built %s package in %s", name, out_dir)
    return result


__all__ = [
    "TransformResult",
    "BuildResult",
    "resolve_options",
    "transform_tokens",
    "write_transformed",
    "render_platforms",
    "build",
]
