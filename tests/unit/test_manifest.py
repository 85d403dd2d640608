"""
Unit tests for tokens.toml loading and the token source loader.
"""

import json
from pathlib import Path

import pytest

from design_tokens.core.errors import InputError, ManifestError
from design_tokens.core.loader import canonical_json, compute_tokens_hash, read_token_source
from design_tokens.core.manifest import load_manifest


class TestLoadManifest:
    """Test manifest parsing and defaults."""

    def test_missing_manifest_uses_defaults(self, tmp_path: Path) -> None:
        manifest = load_manifest(tmp_path / "tokens.toml")

        assert manifest.project_root == tmp_path.resolve()
        assert manifest.tokens.sets == ["global", "light", "dark"]
        assert manifest.tokens.themes == ["light", "dark"]
        assert manifest.resolve.throw_on_unresolved is False
        assert manifest.source_path == tmp_path.resolve() / "tokens" / "figma" / "tokens.json"
        assert manifest.state_path == tmp_path.resolve() / "tokens" / ".token-info.json"
        assert manifest.output_dir("flutter") == tmp_path.resolve() / "packages" / "flutter" / "lib"

    def test_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.toml"
        path.write_text(
            """
[tokens]
source = "design/tokens.json"
sets = ["global", "brand", "light"]
themes = ["light"]

[resolve]
throw_on_unresolved = true
max_depth = 8

[output]
css = "web/css"

[version]
state_file = "design/.state.json"
initial = "0.1.0"
"""
        )

        manifest = load_manifest(path)

        assert manifest.source_path == tmp_path.resolve() / "design" / "tokens.json"
        assert manifest.tokens.sets == ["global", "brand", "light"]
        assert manifest.tokens.themes == ["light"]
        assert manifest.tokens.required_sets == ["global"]
        assert manifest.resolve.throw_on_unresolved is True
        assert manifest.resolve.max_depth == 8
        assert manifest.output_dir("css") == tmp_path.resolve() / "web" / "css"
        assert manifest.output.tailwind == "packages/tailwind"
        assert manifest.version.initial == "0.1.0"

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        source = tmp_path / "elsewhere" / "tokens.json"
        path = tmp_path / "tokens.toml"
        path.write_text(f'[tokens]\nsource = "{source.as_posix()}"\n')

        assert load_manifest(path).source_path == source

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.toml"
        path.write_text("[tokens\nsource = ")

        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.toml"
        path.write_text('[tokens]\nsets = "global"\n')

        with pytest.raises(ManifestError, match="sets"):
            load_manifest(path)

    def test_max_depth_rejects_boolean(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.toml"
        path.write_text("[resolve]\nmax_depth = true\n")

        with pytest.raises(ManifestError, match="max_depth"):
            load_manifest(path)

    def test_max_depth_must_be_positive(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.toml"
        path.write_text("[resolve]\nmax_depth = 0\n")

        with pytest.raises(ManifestError, match="max_depth"):
            load_manifest(path)


class TestTokenSource:
    """Test reading and hashing the token source."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="not found"):
            read_token_source(tmp_path / "tokens.json")

    def test_invalid_json_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.json"
        path.write_text('{"global": ')

        with pytest.raises(InputError) as exc_info:
            read_token_source(path)

        assert "Invalid JSON format" in str(exc_info.value)
        assert str(path) in str(exc_info.value)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.json"
        path.write_text("[]")

        with pytest.raises(InputError, match="JSON object"):
            read_token_source(path)

    def test_hash_ignores_formatting_and_key_order(self) -> None:
        a = {"global": {"a": {"value": "1", "type": "spacing"}}, "light": {}}
        b = json.loads('{"light": {}, "global": {"a": {"type": "spacing", "value": "1"}}}')

        assert canonical_json(a) == canonical_json(b)
        assert compute_tokens_hash(a) == compute_tokens_hash(b)
        assert len(compute_tokens_hash(a)) == 64

    def test_hash_changes_with_values(self) -> None:
        a = {"a": {"value": "1", "type": "spacing"}}
        b = {"a": {"value": "2", "type": "spacing"}}

        assert compute_tokens_hash(a) != compute_tokens_hash(b)
