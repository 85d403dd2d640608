"""
Change detection between token snapshots.

Compares the previously recorded token tree with the current one and
derives the version bump. Deletions are never turned into an automatic
major release: they are flagged for review and bumped as minor.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .ir import is_token_data

PATCH = "patch"
MINOR = "minor"
MAJOR = "major"


def flatten_tokens(data: Any, prefix: str = "") -> dict[str, Any]:
    """
    Map every token path to its leaf object.

    Paths are dot-joined keys down to, but not including, the object that
    carries a ``value`` field. Non-object entries are ignored.

    >>> flatten_tokens({"color": {"white": {"value": "#FFF", "type": "color"}}})
    {'color.white': {'value': '#FFF', 'type': 'color'}}
    """
    result: dict[str, Any] = {}
    if not isinstance(data, dict):
        return result
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if is_token_data(value):
            result[path] = value
        elif isinstance(value, dict):
            result.update(flatten_tokens(value, path))
    return result


def serialize_leaf(leaf: Any) -> str:
    return json.dumps(leaf, sort_keys=True, ensure_ascii=False)


@dataclass(frozen=True)
class RenameCandidate:
    """A deleted path whose exact leaf reappeared under a new path."""

    from_path: str
    to_path: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_path, "to": self.to_path}


@dataclass
class ChangeSet:
    """
    Describes what changed between two token trees.

    ``renamed`` is a heuristic: every (deleted, added) pair with identical
    serialized leaves is listed, so two unrelated tokens that happen to share
    a value show up as a candidate too. The paths in a candidate stay in
    ``deleted`` and ``added``.
    """

    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    renamed: list[RenameCandidate] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if there are no changes."""
        return not self.added and not self.deleted and not self.modified and not self.renamed

    def has_breaking_changes(self) -> bool:
        """Deletions and renames break consumers referencing the old path."""
        return bool(self.deleted) or bool(self.renamed)

    def ambiguous_renames(self) -> dict[str, list[str]]:
        """Paths involved in more than one rename candidate, with their partners."""
        partners: dict[str, list[str]] = {}
        for candidate in self.renamed:
            partners.setdefault(candidate.from_path, []).append(candidate.to_path)
            partners.setdefault(candidate.to_path, []).append(candidate.from_path)
        return {path: others for path, others in partners.items() if len(others) > 1}

    def summary(self) -> str:
        """Generate human-readable summary of changes."""
        lines = []

        if self.added:
            lines.append(f"  Added: +{len(self.added)} ({', '.join(self.added)})")
        if self.deleted:
            lines.append(f"  Deleted: -{len(self.deleted)} ({', '.join(self.deleted)})")
        if self.modified:
            lines.append(f"  Modified: ~{len(self.modified)} ({', '.join(self.modified)})")
        for candidate in self.renamed:
            lines.append(f"  Possible rename: {candidate.from_path} -> {candidate.to_path}")

        return "\n".join(lines) if lines else "  No changes detected"

    def to_dict(self) -> dict[str, Any]:
        return {
            "added": list(self.added),
            "deleted": list(self.deleted),
            "modified": list(self.modified),
            "renamed": [candidate.to_dict() for candidate in self.renamed],
        }


@dataclass(frozen=True)
class BumpDecision:
    """
    Version bump derived from a ChangeSet.

    Attributes:
        kind: "patch", "minor", or None when nothing changed
        needs_review: Deletions or renames were found; a human should
            decide whether this is really a major release
        reason: One-line explanation
    """

    kind: str | None
    needs_review: bool
    reason: str


def classify_changes(previous: Any, current: Any) -> ChangeSet:
    """
    Detect changes between two token trees.

    Args:
        previous: Last recorded token tree (raw JSON data)
        current: Current token tree (raw JSON data)

    Returns:
        ChangeSet describing differences, paths in current/previous order
    """
    prev_tokens = flatten_tokens(previous)
    curr_tokens = flatten_tokens(current)

    changeset = ChangeSet()
    changeset.added = [path for path in curr_tokens if path not in prev_tokens]
    changeset.deleted = [path for path in prev_tokens if path not in curr_tokens]

    for path, leaf in curr_tokens.items():
        if path in prev_tokens and serialize_leaf(prev_tokens[path]) != serialize_leaf(leaf):
            changeset.modified.append(path)

    added_by_value: dict[str, list[str]] = {}
    for path in changeset.added:
        added_by_value.setdefault(serialize_leaf(curr_tokens[path]), []).append(path)

    for path in changeset.deleted:
        for target in added_by_value.get(serialize_leaf(prev_tokens[path]), []):
            changeset.renamed.append(RenameCandidate(from_path=path, to_path=target))

    return changeset


def recommend_bump(changeset: ChangeSet) -> BumpDecision:
    """
    Derive the version bump for a ChangeSet.

    - deletions or rename candidates: minor, flagged for review
    - additions: minor
    - modifications only: patch
    - nothing: no bump
    """
    if changeset.has_breaking_changes():
        return BumpDecision(
            kind=MINOR,
            needs_review=True,
            reason="Tokens were deleted or renamed; consider a manual major release",
        )
    if changeset.added:
        return BumpDecision(kind=MINOR, needs_review=False, reason="New tokens were added")
    if changeset.modified:
        return BumpDecision(kind=PATCH, needs_review=False, reason="Token values changed")
    return BumpDecision(kind=None, needs_review=False, reason="No token changes")


__all__ = [
    "PATCH",
    "MINOR",
    "MAJOR",
    "flatten_tokens",
    "serialize_leaf",
    "RenameCandidate",
    "ChangeSet",
    "BumpDecision",
    "classify_changes",
    "recommend_bump",
]
