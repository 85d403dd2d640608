"""
Token package versioning.

The version manager compares the SHA256 of the token source against the
hash recorded in the state file:

    UNINITIALIZED  no state file yet; the first run writes a patch baseline
    UP_TO_DATE     hashes match; nothing to do
    STALE          hashes differ; classify the diff and bump

The new state (version, hash, snapshot, timestamp) is only written once the
new version has been computed, and the write itself is atomic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from .changes import (
    MAJOR,
    MINOR,
    PATCH,
    BumpDecision,
    ChangeSet,
    classify_changes,
    flatten_tokens,
    recommend_bump,
)
from .errors import VersionError
from .loader import compute_tokens_hash, read_token_source
from .state import VersionState, load_state, now_iso, save_state, updated_by

logger = logging.getLogger(__name__)

BUMP_KINDS = (PATCH, MINOR, MAJOR)

SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def bump_version(version: str, kind: str) -> str:
    """
    Increment a semantic version.

    A prerelease is released rather than skipped: ``1.3.0-rc.1`` bumped as
    minor gives ``1.3.0``. Build metadata is dropped.

    Raises:
        VersionError: If ``version`` is not MAJOR.MINOR.PATCH or ``kind`` is unknown
    """
    match = SEMVER_PATTERN.match(version.strip())
    if not match:
        raise VersionError(f"Invalid semantic version: {version!r}")
    if kind not in BUMP_KINDS:
        raise VersionError(f"Unknown bump type {kind!r} (expected one of {', '.join(BUMP_KINDS)})")

    major, minor, patch = (int(part) for part in match.group(1, 2, 3))
    prerelease = match.group(4)

    if kind == MAJOR:
        if not (prerelease and minor == 0 and patch == 0):
            major += 1
        minor = patch = 0
    elif kind == MINOR:
        if not (prerelease and patch == 0):
            minor += 1
        patch = 0
    elif not prerelease:
        patch += 1

    return f"{major}.{minor}.{patch}"


class VersionStatus(StrEnum):
    UNINITIALIZED = "uninitialized"
    UP_TO_DATE = "up_to_date"
    STALE = "stale"


@dataclass
class VersionUpdate:
    """Outcome of a version-affecting run."""

    previous_version: str
    state: VersionState
    kind: str | None
    changes: ChangeSet | None = None
    decision: BumpDecision | None = None

    @property
    def version(self) -> str:
        return self.state.version

    @property
    def changed(self) -> bool:
        return self.previous_version != self.state.version


class VersionManager:
    """
    Drives version checks and bumps for one token source.

    Reading or parsing the token source is fatal (``InputError``); a missing
    state file is the UNINITIALIZED state, not an error.
    """

    def __init__(self, source_path: Path, state_path: Path, initial_version: str = "1.0.0"):
        self.source_path = source_path
        self.state_path = state_path
        self.initial_version = initial_version

    def load_state(self) -> VersionState | None:
        return load_state(self.state_path)

    def current_version(self) -> str:
        state = self.load_state()
        return state.version if state else self.initial_version

    def status(self) -> VersionStatus:
        data = read_token_source(self.source_path)
        return self._status(self.load_state(), compute_tokens_hash(data))

    def needs_update(self) -> bool:
        return self.status() != VersionStatus.UP_TO_DATE

    @staticmethod
    def _status(state: VersionState | None, tokens_hash: str) -> VersionStatus:
        if state is None:
            return VersionStatus.UNINITIALIZED
        if state.tokens_hash == tokens_hash:
            return VersionStatus.UP_TO_DATE
        return VersionStatus.STALE

    def auto(self) -> VersionUpdate | None:
        """
        Classify changes since the last run and apply the recommended bump.

        Returns:
            The update, or None when the source is unchanged
        """
        data = read_token_source(self.source_path)
        tokens_hash = compute_tokens_hash(data)
        state = self.load_state()
        status = self._status(state, tokens_hash)

        if status == VersionStatus.UP_TO_DATE:
            logger.info("No token changes detected, version unchanged")
            return None

        if state is None:
            logger.info("No previous version state; writing a patch baseline")
            return self._apply(self.initial_version, PATCH, data, tokens_hash)

        changes = classify_changes(state.tokens_snapshot, data)
        decision = recommend_bump(changes)
        if decision.needs_review:
            logger.warning("%s", decision.reason)
            for path, partners in changes.ambiguous_renames().items():
                logger.info("Ambiguous rename for %s: %s", path, ", ".join(partners))

        if decision.kind is None:
            logger.info("Source changed without token changes; refreshing hash only")
        return self._apply(state.version, decision.kind, data, tokens_hash, changes, decision)

    def bump(self, kind: str) -> VersionUpdate:
        """Force a ``patch``, ``minor`` or ``major`` bump."""
        data = read_token_source(self.source_path)
        return self._apply(self.current_version(), kind, data, compute_tokens_hash(data))

    def _apply(
        self,
        current: str,
        kind: str | None,
        data: dict[str, Any],
        tokens_hash: str,
        changes: ChangeSet | None = None,
        decision: BumpDecision | None = None,
    ) -> VersionUpdate:
        new_version = bump_version(current, kind) if kind else current
        state = VersionState(
            version=new_version,
            tokens_hash=tokens_hash,
            tokens_snapshot=data,
            last_updated=now_iso(),
            updated_by=updated_by(),
            token_count=len(flatten_tokens(data)),
        )
        save_state(self.state_path, state)
        if kind:
            logger.info("Version updated: %s -> %s", current, new_version)
        return VersionUpdate(
            previous_version=current,
            state=state,
            kind=kind,
            changes=changes,
            decision=decision,
        )


__all__ = [
    "BUMP_KINDS",
    "SEMVER_PATTERN",
    "bump_version",
    "VersionStatus",
    "VersionUpdate",
    "VersionManager",
]
