"""
design-tokens - Figma Tokens Studio pipeline.

Resolves token references across layered sets, projects them into the
primitive/semantic/component shape, and renders Flutter, Tailwind and CSS
artifacts. Also tracks token versions from content hashes.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import (
    EmitterError,
    InputError,
    ManifestError,
    OutputError,
    ReferenceResolutionError,
    StateError,
    TokenError,
    VersionError,
)


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("design-tokens")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "TokenError",
    "EmitterError",
    "InputError",
    "ManifestError",
    "OutputError",
    "ReferenceResolutionError",
    "StateError",
    "VersionError",
]
