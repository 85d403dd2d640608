"""
Writing generated artifacts and state files.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import OutputError

logger = logging.getLogger(__name__)


def write_text(path: Path, content: str) -> Path:
    """
    Write a text artifact, creating parent directories.

    Raises:
        OutputError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e
    logger.debug("Wrote %s (%d bytes)", path, len(content))
    return path


def write_json(path: Path, data: Any) -> Path:
    return write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def write_json_atomic(path: Path, data: Any) -> Path:
    """
    Replace ``path`` with ``data`` in one step.

    The JSON is written to a temporary file in the same directory and moved
    into place, so readers see either the old file or the new one.

    Raises:
        OutputError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".tmp.", dir=path.parent)
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp, path)
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)
    return path


def write_artifacts(output_dir: Path, files: dict[str, str]) -> list[Path]:
    """Write a rendered ``{filename: content}`` mapping under ``output_dir``."""
    return [write_text(output_dir / name, content) for name, content in files.items()]


__all__ = [
    "write_text",
    "write_json",
    "write_json_atomic",
    "write_artifacts",
]
