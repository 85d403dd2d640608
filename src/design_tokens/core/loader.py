"""
Token source loading and hashing.

The source is a single Tokens Studio JSON export. Any failure to read or
parse it is fatal for every command that needs it.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

from .errors import ErrorContext, InputError
from .ir import TokenDocument

logger = logging.getLogger(__name__)


def read_token_source(path: Path) -> dict[str, Any]:
    """
    Read the raw token JSON.

    Args:
        path: Path to tokens.json

    Returns:
        Parsed JSON object keyed by set name

    Raises:
        InputError: If the file is missing, unreadable, not JSON or not an object
    """
    if not path.exists():
        raise InputError(f"Tokens file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Failed to read tokens file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(
            f"Invalid JSON format: {e.msg} (line {e.lineno}, column {e.colno})",
            ErrorContext(file=path),
        ) from e

    if not isinstance(data, dict):
        raise InputError(
            f"Expected a JSON object keyed by token set, got {type(data).__name__}",
            ErrorContext(file=path),
        )

    logger.debug("Loaded %d top-level entries from %s", len(data), path)
    return data


def load_token_document(path: Path) -> TokenDocument:
    """Read and parse the token source into a TokenDocument."""
    return TokenDocument.from_data(read_token_source(path))


def canonical_json(data: Any) -> str:
    """Whitespace- and key-order-independent JSON text."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_tokens_hash(data: Any) -> str:
    """
    SHA256 of the canonical JSON form.

    Reformatting the source file does not change the hash.
    """
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


__all__ = [
    "read_token_source",
    "load_token_document",
    "canonical_json",
    "compute_tokens_hash",
]
