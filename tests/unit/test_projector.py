"""
Unit tests for Standard Shape projection.
"""

from typing import Any

from design_tokens.core.ir import StandardTokens, Token, TokenDocument
from design_tokens.core.projector import project_standard_shape
from design_tokens.core.resolver import resolve_document


def _resolved(sample_document: TokenDocument) -> TokenDocument:
    return resolve_document(sample_document, ["global", "light", "dark"]).document


class TestProjection:
    """Test reshaping resolved sets into primitive/semantic/component."""

    def test_primitive_from_global(self, sample_document: TokenDocument) -> None:
        tokens = project_standard_shape(_resolved(sample_document))

        assert list(tokens.primitive.color.children) == ["white", "black", "primary", "neutral"]
        assert list(tokens.primitive.spacing.children) == ["1", "2", "4"]
        assert list(tokens.primitive.radius.children) == ["md", "full"]
        assert list(tokens.primitive.font_size.children) == ["base"]

    def test_semantic_and_component_per_theme(self, sample_document: TokenDocument) -> None:
        tokens = project_standard_shape(_resolved(sample_document))

        light_base = tokens.semantic_for("light").get(["color", "background", "base"])
        dark_base = tokens.semantic_for("dark").get(["color", "background", "base"])
        assert isinstance(light_base, Token) and light_base.value == "#FFFFFF"
        assert isinstance(dark_base, Token) and dark_base.value == "#111827"

        button = tokens.component_for("light").get(["button", "text"])
        assert isinstance(button, Token) and button.value == "#FFFFFF"

    def test_white_end_to_end(self, sample_tokens: dict[str, Any]) -> None:
        document = TokenDocument.from_data(sample_tokens)
        data = project_standard_shape(_resolved(document)).to_data()

        assert data["primitive"]["color"]["white"]["value"] == "#FFFFFF"
        assert data["semantic"]["light"]["color"]["background"]["base"]["value"] == "#FFFFFF"

    def test_missing_sets_become_empty_groups(self) -> None:
        tokens = project_standard_shape(TokenDocument.from_data({"light": {}}))

        data = tokens.to_data()
        assert data["primitive"] == {"color": {}, "spacing": {}, "radius": {}, "fontSize": {}}
        assert data["semantic"] == {"light": {}, "dark": {}}
        assert data["component"] == {"light": {}, "dark": {}}

    def test_custom_themes(self, sample_document: TokenDocument) -> None:
        tokens = project_standard_shape(_resolved(sample_document), themes=["dark"])

        assert tokens.themes == ["dark"]

    def test_raw_document_dict_accepted(self, sample_tokens: dict[str, Any]) -> None:
        tokens = project_standard_shape(sample_tokens)

        white = tokens.primitive.color.get(["white"])
        assert isinstance(white, Token) and white.value == "#FFFFFF"


class TestIdempotence:
    """Projecting an already projected value changes nothing."""

    def test_standard_tokens_returned_as_is(self, sample_document: TokenDocument) -> None:
        tokens = project_standard_shape(_resolved(sample_document))

        assert project_standard_shape(tokens) is tokens

    def test_standard_shape_dict(self, sample_document: TokenDocument) -> None:
        tokens = project_standard_shape(_resolved(sample_document))

        again = project_standard_shape(tokens.to_data())

        assert isinstance(again, StandardTokens)
        assert again.to_data() == tokens.to_data()

    def test_custom_themes_survive_reprojection(self, sample_document: TokenDocument) -> None:
        once = project_standard_shape(_resolved(sample_document), themes=["dark"])

        twice = project_standard_shape(once.to_data())

        assert twice.themes == ["dark"]
        assert twice.to_data() == once.to_data()
