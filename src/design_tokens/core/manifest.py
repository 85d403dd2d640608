"""
Project manifest (tokens.toml) loading.

Every key is optional; a project without a manifest runs on the defaults,
which match the conventional Tokens Studio repository layout:

    [tokens]
    source = "tokens/figma/tokens.json"
    sets = ["global", "light", "dark"]
    themes = ["light", "dark"]

    [resolve]
    throw_on_unresolved = false

    [output]
    flutter = "packages/flutter/lib"

    [version]
    state_file = "tokens/.token-info.json"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "tokens.toml"


@dataclass
class TokensConfig:
    """Where the token source lives and how its sets layer."""

    source: str = "tokens/figma/tokens.json"
    sets: list[str] = field(default_factory=lambda: ["global", "light", "dark"])
    themes: list[str] = field(default_factory=lambda: ["light", "dark"])
    required_sets: list[str] = field(default_factory=lambda: ["global"])


@dataclass
class ResolveConfig:
    """Reference resolution options."""

    throw_on_unresolved: bool = False
    preserve_raw_value: bool = False
    max_depth: int = 32


@dataclass
class OutputConfig:
    """Output directories, one per artifact family."""

    transformed: str = "tokens/transformed"
    flutter: str = "packages/flutter/lib"
    tailwind: str = "packages/tailwind"
    css: str = "packages/css"


@dataclass
class VersionConfig:
    """Version state persistence."""

    state_file: str = "tokens/.token-info.json"
    initial: str = "1.0.0"


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from tokens.toml.

    ``project_root`` is the directory relative paths resolve against.
    """

    project_root: Path
    tokens: TokensConfig = field(default_factory=TokensConfig)
    resolve: ResolveConfig = field(default_factory=ResolveConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    version: VersionConfig = field(default_factory=VersionConfig)

    def path(self, relative: str) -> Path:
        candidate = Path(relative)
        if candidate.is_absolute():
            return candidate
        return self.project_root / candidate

    @property
    def source_path(self) -> Path:
        return self.path(self.tokens.source)

    @property
    def state_path(self) -> Path:
        return self.path(self.version.state_file)

    def output_dir(self, name: str) -> Path:
        return self.path(getattr(self.output, name))


def _expect(section: str, key: str, value: Any, kind: type | tuple[type, ...]) -> Any:
    # bool is a subclass of int
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
        raise ManifestError(f"[{section}] {key} has the wrong type: {value!r}")
    if isinstance(value, list) and not all(isinstance(item, str) for item in value):
        raise ManifestError(f"[{section}] {key} must be a list of strings")
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ManifestError(f"[{name}] must be a table")
    return section


def parse_manifest(data: dict[str, Any], project_root: Path) -> ProjectManifest:
    tokens_data = _section(data, "tokens")
    resolve_data = _section(data, "resolve")
    output_data = _section(data, "output")
    version_data = _section(data, "version")

    defaults = TokensConfig()
    tokens_config = TokensConfig(
        source=_expect("tokens", "source", tokens_data.get("source", defaults.source), str),
        sets=_expect("tokens", "sets", tokens_data.get("sets", defaults.sets), list),
        themes=_expect("tokens", "themes", tokens_data.get("themes", defaults.themes), list),
        required_sets=_expect(
            "tokens",
            "required_sets",
            tokens_data.get("required_sets", defaults.required_sets),
            list,
        ),
    )

    resolve_config = ResolveConfig(
        throw_on_unresolved=_expect(
            "resolve",
            "throw_on_unresolved",
            resolve_data.get("throw_on_unresolved", False),
            bool,
        ),
        preserve_raw_value=_expect(
            "resolve",
            "preserve_raw_value",
            resolve_data.get("preserve_raw_value", False),
            bool,
        ),
        max_depth=_expect("resolve", "max_depth", resolve_data.get("max_depth", 32), int),
    )
    if resolve_config.max_depth < 1:
        raise ManifestError("[resolve] max_depth must be at least 1")

    out_defaults = OutputConfig()
    output_config = OutputConfig(
        transformed=_expect(
            "output", "transformed", output_data.get("transformed", out_defaults.transformed), str
        ),
        flutter=_expect("output", "flutter", output_data.get("flutter", out_defaults.flutter), str),
        tailwind=_expect(
            "output", "tailwind", output_data.get("tailwind", out_defaults.tailwind), str
        ),
        css=_expect("output", "css", output_data.get("css", out_defaults.css), str),
    )

    version_config = VersionConfig(
        state_file=_expect(
            "version",
            "state_file",
            version_data.get("state_file", VersionConfig.state_file),
            str,
        ),
        initial=_expect("version", "initial", version_data.get("initial", "1.0.0"), str),
    )

    return ProjectManifest(
        project_root=project_root,
        tokens=tokens_config,
        resolve=resolve_config,
        output=output_config,
        version=version_config,
    )


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load tokens.toml.

    A missing file is not an error: the project runs on defaults rooted at
    the file's directory.

    Raises:
        ManifestError: If the file exists but cannot be parsed
    """
    project_root = path.resolve().parent
    if not path.exists():
        logger.debug("No manifest at %s, using defaults", path)
        return ProjectManifest(project_root=project_root)

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ManifestError(f"Failed to read {path}: {e}") from e

    return parse_manifest(data, project_root)


__all__ = [
    "MANIFEST_FILE",
    "TokensConfig",
    "ResolveConfig",
    "OutputConfig",
    "VersionConfig",
    "ProjectManifest",
    "parse_manifest",
    "load_manifest",
]
