"""
Unit tests for token source validation.
"""

from design_tokens.core.ir import Token, TokenDocument
from design_tokens.core.validator import (
    collect_stats,
    is_valid_color,
    is_valid_number,
    validate_document,
    validate_token,
)


class TestValueChecks:
    """Test individual value validators."""

    def test_colors(self) -> None:
        assert is_valid_color("#FFF")
        assert is_valid_color("#4f46e5")
        assert is_valid_color("rgb(0, 0, 0)")
        assert is_valid_color("rgba(0, 0, 0, 0.5)")
        assert not is_valid_color("blue")
        assert not is_valid_color("#GGGGGG")

    def test_numbers(self) -> None:
        assert is_valid_number("16")
        assert is_valid_number("0.5")
        assert is_valid_number(8)
        assert not is_valid_number("16px")
        assert not is_valid_number(True)
        assert not is_valid_number("nan")


class TestValidateToken:
    """Test per-token validation messages."""

    def test_valid_color(self) -> None:
        assert validate_token(Token(value="#FFFFFF", type="color"), "global.color.white") == []

    def test_invalid_color(self) -> None:
        errors = validate_token(Token(value="white", type="color"), "global.color.white")

        assert errors == ['Invalid color value "white" at global.color.white']

    def test_invalid_spacing(self) -> None:
        errors = validate_token(Token(value="4px", type="spacing"), "global.spacing.1")

        assert errors == ['Invalid numeric value "4px" at global.spacing.1']

    def test_missing_value_and_type(self) -> None:
        assert validate_token(Token(value="", type="color"), "a") == ["Missing value at a"]
        assert validate_token(Token(value="#FFF"), "a") == ["Missing type at a"]

    def test_reference_not_type_checked(self) -> None:
        assert validate_token(Token(value="{color.white}", type="color"), "a") == []

    def test_embedded_references_not_type_checked(self) -> None:
        assert validate_token(Token(value="rgba({color.black}, 0.5)", type="color"), "a") == []
        assert validate_token(Token(value="{spacing.1} * 2", type="spacing"), "b") == []

    def test_unknown_types_accepted(self) -> None:
        assert validate_token(Token(value="Inter", type="fontFamilies"), "a") == []


class TestValidateDocument:
    """Test whole-document validation."""

    def test_sample_is_valid(self, sample_document: TokenDocument) -> None:
        report = validate_document(sample_document)

        assert report.ok
        assert report.errors == []
        assert report.warnings == []

    def test_missing_required_set(self) -> None:
        report = validate_document(TokenDocument.from_data({"light": {}}), ["global", "light"])

        assert not report.ok
        assert report.errors == ["Missing required token sets: global"]

    def test_errors_collected_with_paths(self) -> None:
        document = TokenDocument.from_data(
            {"global": {"color": {"bad": {"value": "nope", "type": "color"}}}}
        )

        report = validate_document(document)

        assert report.errors == ['Invalid color value "nope" at global.color.bad']

    def test_dangling_reference_is_warning(self) -> None:
        document = TokenDocument.from_data(
            {"global": {"a": {"value": "{missing}", "type": "color"}}}
        )

        report = validate_document(document)

        assert report.ok
        assert report.warnings == ["Reference {missing} at global.a does not point to a token"]

    def test_stats(self, sample_document: TokenDocument) -> None:
        stats = collect_stats(sample_document)

        assert stats.sets == 3
        assert stats.total == 22
        assert stats.colors == 16
        assert stats.spacing == 3
        assert stats.border_radius == 2
        assert stats.font_sizes == 1
