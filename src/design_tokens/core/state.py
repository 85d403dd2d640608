"""
Version state persistence.

Tracks:
- Current token package version
- Hash of the token source at that version
- Full token snapshot for diffing on the next run
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .errors import OutputError, StateError
from .outputs import write_json_atomic


@dataclass
class VersionState:
    """
    The persisted record of the last version-affecting run.

    Serialized with camelCase keys (``tokensHash``, ``tokensSnapshot``,
    ``lastUpdated``) so the file stays readable by the JS tooling that
    shares it.
    """

    version: str
    tokens_hash: str
    tokens_snapshot: dict[str, Any] = field(default_factory=dict)
    last_updated: str = ""
    updated_by: str = "local"
    token_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "version": self.version,
            "tokensHash": self.tokens_hash,
            "tokensSnapshot": self.tokens_snapshot,
            "lastUpdated": self.last_updated,
            "updatedBy": self.updated_by,
            "tokenCount": self.token_count,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> VersionState:
        """Create VersionState from dict."""
        if "version" not in data or "tokensHash" not in data:
            raise StateError("State file is missing 'version' or 'tokensHash'")
        snapshot = data.get("tokensSnapshot") or {}
        if not isinstance(snapshot, dict):
            raise StateError("'tokensSnapshot' must be an object")
        return VersionState(
            version=str(data["version"]),
            tokens_hash=str(data["tokensHash"]),
            tokens_snapshot=snapshot,
            last_updated=str(data.get("lastUpdated", "")),
            updated_by=str(data.get("updatedBy", "local")),
            token_count=int(data.get("tokenCount", 0)),
        )


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def updated_by() -> str:
    """``CI/CD`` inside a CI job, ``local`` otherwise."""
    return "CI/CD" if os.environ.get("CI") else "local"


def load_state(state_file: Path) -> VersionState | None:
    """
    Load the previous version state.

    Args:
        state_file: Path to the state JSON

    Returns:
        VersionState if the file exists, None otherwise

    Raises:
        StateError: If the state file is corrupted
    """
    if not state_file.exists():
        return None

    try:
        with open(state_file, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StateError(f"Failed to load version state: {e}") from e

    if not isinstance(data, dict):
        raise StateError("Failed to load version state: expected a JSON object")
    try:
        return VersionState.from_dict(data)
    except (TypeError, ValueError) as e:
        raise StateError(f"Failed to load version state: {e}") from e


def save_state(state_file: Path, state: VersionState) -> None:
    """
    Atomically replace the state file.

    Raises:
        StateError: If state cannot be saved
    """
    try:
        write_json_atomic(state_file, state.to_dict())
    except OutputError as e:
        raise StateError(f"Failed to save version state: {e.message}") from e


__all__ = [
    "VersionState",
    "now_iso",
    "updated_by",
    "load_state",
    "save_state",
]
