"""
Unit tests for version state and the version manager.

Tests:
- Semantic version bumps
- State file persistence
- UNINITIALIZED / UP_TO_DATE / STALE handling
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from design_tokens.core.errors import InputError, StateError, VersionError
from design_tokens.core.loader import compute_tokens_hash
from design_tokens.core.state import VersionState, load_state, save_state
from design_tokens.core.versioning import VersionManager, VersionStatus, bump_version


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def source_path(tmp_path: Path, sample_tokens: dict[str, Any]) -> Path:
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(sample_tokens, indent=2))
    return path


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / ".token-info.json"


@pytest.fixture
def manager(source_path: Path, state_path: Path) -> VersionManager:
    return VersionManager(source_path=source_path, state_path=state_path)


def rewrite(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2))


# =============================================================================
# bump_version
# =============================================================================


class TestBumpVersion:
    """Test semantic version increments."""

    @pytest.mark.parametrize(
        ("version", "kind", "expected"),
        [
            ("1.0.0", "patch", "1.0.1"),
            ("1.2.3", "minor", "1.3.0"),
            ("1.2.3", "major", "2.0.0"),
            ("1.3.0-rc.1", "minor", "1.3.0"),
            ("1.2.3-beta", "patch", "1.2.3"),
            ("2.0.0-alpha", "major", "2.0.0"),
            ("1.2.3+build.5", "patch", "1.2.4"),
        ],
    )
    def test_bumps(self, version: str, kind: str, expected: str) -> None:
        assert bump_version(version, kind) == expected

    def test_invalid_version(self) -> None:
        with pytest.raises(VersionError):
            bump_version("1.0", "patch")

    def test_unknown_kind(self) -> None:
        with pytest.raises(VersionError):
            bump_version("1.0.0", "huge")


# =============================================================================
# State persistence
# =============================================================================


class TestVersionState:
    """Test VersionState serialization and the state file."""

    def test_camel_case_keys(self) -> None:
        state = VersionState(version="1.0.1", tokens_hash="abc", tokens_snapshot={"a": 1})

        data = state.to_dict()

        assert data["tokensHash"] == "abc"
        assert data["tokensSnapshot"] == {"a": 1}
        assert set(data) == {
            "version",
            "tokensHash",
            "tokensSnapshot",
            "lastUpdated",
            "updatedBy",
            "tokenCount",
        }

    def test_save_and_load(self, state_path: Path) -> None:
        state = VersionState(version="1.2.0", tokens_hash="abc", last_updated="2024-01-01T00:00:00+00:00")

        save_state(state_path, state)

        assert load_state(state_path) == state
        assert not list(state_path.parent.glob(".tmp.*"))

    def test_missing_state_is_none(self, state_path: Path) -> None:
        assert load_state(state_path) is None

    def test_corrupt_state(self, state_path: Path) -> None:
        state_path.write_text("{not json")

        with pytest.raises(StateError):
            load_state(state_path)

    def test_state_missing_fields(self, state_path: Path) -> None:
        state_path.write_text(json.dumps({"version": "1.0.0"}))

        with pytest.raises(StateError):
            load_state(state_path)

    def test_failed_save_keeps_previous_state(
        self, state_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        previous = VersionState(version="1.0.0", tokens_hash="x")
        save_state(state_path, previous)

        def failing_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("design_tokens.core.outputs.os.replace", failing_replace)

        with pytest.raises(StateError, match="disk full"):
            save_state(state_path, VersionState(version="1.1.0", tokens_hash="y"))

        assert load_state(state_path) == previous
        assert not list(state_path.parent.glob(".tmp.*"))

    def test_unwritable_state_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "tokens"
        blocker.write_text("not a directory")

        with pytest.raises(StateError, match="Failed to save version state"):
            save_state(blocker / ".token-info.json", VersionState(version="1.0.0", tokens_hash="x"))


# =============================================================================
# VersionManager
# =============================================================================


class TestVersionManager:
    """Test version checks and bumps."""

    def test_uninitialized(self, manager: VersionManager) -> None:
        assert manager.status() == VersionStatus.UNINITIALIZED
        assert manager.needs_update()
        assert manager.current_version() == "1.0.0"

    def test_first_auto_writes_patch_baseline(
        self, manager: VersionManager, state_path: Path, sample_tokens: dict[str, Any]
    ) -> None:
        update = manager.auto()

        assert update is not None
        assert update.version == "1.0.1"
        assert update.changed
        state = load_state(state_path)
        assert state is not None
        assert state.version == "1.0.1"
        assert state.tokens_hash == compute_tokens_hash(sample_tokens)
        assert state.tokens_snapshot == sample_tokens
        assert state.token_count == 22

    def test_up_to_date_is_noop(self, manager: VersionManager, state_path: Path) -> None:
        manager.auto()
        before = state_path.read_text()

        assert manager.status() == VersionStatus.UP_TO_DATE
        assert not manager.needs_update()
        assert manager.auto() is None
        assert state_path.read_text() == before

    def test_whitespace_only_edit_is_not_a_change(
        self, manager: VersionManager, source_path: Path, sample_tokens: dict[str, Any]
    ) -> None:
        manager.auto()

        source_path.write_text(json.dumps(sample_tokens, indent=4))

        assert manager.status() == VersionStatus.UP_TO_DATE

    def test_added_token_bumps_minor(
        self, manager: VersionManager, source_path: Path, sample_tokens: dict[str, Any]
    ) -> None:
        manager.auto()
        current = copy.deepcopy(sample_tokens)
        current["global"]["color"]["accent"] = {"value": "#4d62e5", "type": "color"}
        rewrite(source_path, current)

        assert manager.status() == VersionStatus.STALE
        update = manager.auto()

        assert update is not None
        assert update.version == "1.1.0"
        assert update.changes is not None
        assert update.changes.added == ["global.color.accent"]

    def test_modified_token_bumps_patch(
        self, manager: VersionManager, source_path: Path, sample_tokens: dict[str, Any]
    ) -> None:
        manager.auto()
        current = copy.deepcopy(sample_tokens)
        current["global"]["spacing"]["4"]["value"] = "20"
        rewrite(source_path, current)

        update = manager.auto()

        assert update is not None
        assert update.version == "1.0.2"

    def test_deleted_token_flags_review(
        self, manager: VersionManager, source_path: Path, sample_tokens: dict[str, Any]
    ) -> None:
        manager.auto()
        current = copy.deepcopy(sample_tokens)
        del current["global"]["color"]["black"]
        rewrite(source_path, current)

        update = manager.auto()

        assert update is not None
        assert update.version == "1.1.0"
        assert update.decision is not None
        assert update.decision.needs_review

    def test_metadata_only_change_refreshes_hash(
        self,
        manager: VersionManager,
        source_path: Path,
        state_path: Path,
        sample_tokens: dict[str, Any],
    ) -> None:
        manager.auto()
        current = copy.deepcopy(sample_tokens)
        current["$metadata"]["tokenSetOrder"] = ["global", "dark", "light"]
        rewrite(source_path, current)

        update = manager.auto()

        assert update is not None
        assert update.kind is None
        assert not update.changed
        assert update.version == "1.0.1"
        state = load_state(state_path)
        assert state is not None
        assert state.tokens_hash == compute_tokens_hash(current)
        assert manager.status() == VersionStatus.UP_TO_DATE

    @pytest.mark.parametrize(("kind", "expected"), [("patch", "1.0.2"), ("minor", "1.1.0"), ("major", "2.0.0")])
    def test_forced_bump(self, manager: VersionManager, kind: str, expected: str) -> None:
        manager.auto()

        update = manager.bump(kind)

        assert update.version == expected
        assert manager.current_version() == expected

    def test_forced_bump_from_initial(self, manager: VersionManager) -> None:
        assert manager.bump("minor").version == "1.1.0"

    def test_custom_initial_version(self, source_path: Path, state_path: Path) -> None:
        manager = VersionManager(source_path, state_path, initial_version="0.1.0")

        update = manager.auto()

        assert update is not None
        assert update.version == "0.1.1"

    def test_missing_source_is_fatal(self, tmp_path: Path, state_path: Path) -> None:
        manager = VersionManager(tmp_path / "missing.json", state_path)

        with pytest.raises(InputError):
            manager.auto()
        assert not state_path.exists()

    def test_invalid_json_is_fatal(self, source_path: Path, manager: VersionManager) -> None:
        source_path.write_text("{ broken")

        with pytest.raises(InputError, match="Invalid JSON format"):
            manager.status()

    def test_updated_by_ci(
        self, manager: VersionManager, state_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CI", "true")

        manager.auto()

        state = load_state(state_path)
        assert state is not None
        assert state.updated_by == "CI/CD"
