"""
Token source validation.

Checks that required sets exist, every token has a value and a type, and
literal values match their type. References are not checked for type;
dangling references are reported as warnings.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .ir import Token, TokenDocument, format_path
from .resolver import REFERENCE_PATTERN, contains_reference, merge_sets, reference_path

# =============================================================================
# Validation Constants
# =============================================================================

HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
RGB_COLOR = re.compile(r"^rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*(\d+(?:\.\d+)?))?\)$")

NUMERIC_TYPES = frozenset({"spacing", "borderRadius", "fontSizes"})

# Stats buckets reported by `validate`, keyed by token type
STAT_TYPES = {
    "color": "colors",
    "spacing": "spacing",
    "borderRadius": "border_radius",
    "fontSizes": "font_sizes",
}


@dataclass
class TokenStats:
    """Counts reported after a successful validation."""

    sets: int = 0
    total: int = 0
    colors: int = 0
    spacing: int = 0
    border_radius: int = 0
    font_sizes: int = 0


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: TokenStats = field(default_factory=TokenStats)

    @property
    def ok(self) -> bool:
        return not self.errors


def is_valid_color(value: str) -> bool:
    return bool(HEX_COLOR.match(value) or RGB_COLOR.match(value))


def is_valid_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    try:
        float(str(value))
    except ValueError:
        return False
    return str(value).strip().lower() not in ("nan", "inf", "-inf", "infinity", "-infinity")


def validate_token(token: Token, path: str) -> list[str]:
    """Validate a single token; returns error strings (empty = valid)."""
    if token.value is None or token.value == "":
        return [f"Missing value at {path}"]
    if not token.type:
        return [f"Missing type at {path}"]
    if contains_reference(token.value):
        return []

    errors: list[str] = []
    if token.type == "color":
        if not isinstance(token.value, str) or not is_valid_color(token.value):
            errors.append(f'Invalid color value "{token.value}" at {path}')
    elif token.type in NUMERIC_TYPES:
        if not is_valid_number(token.value):
            errors.append(f'Invalid numeric value "{token.value}" at {path}')
    return errors


def validate_references(document: TokenDocument) -> list[str]:
    """
    Find references whose target does not exist in any set.

    Returns:
        List of warning messages
    """
    scope = merge_sets(document, list(document.sets))
    warnings: list[str] = []
    for set_name, group in document.sets.items():
        for path, token in group.iter_tokens((set_name,)):
            if not isinstance(token.value, str):
                continue
            for match in REFERENCE_PATTERN.finditer(token.value):
                target = scope.get(reference_path(match.group(0)))
                if not isinstance(target, Token):
                    warnings.append(
                        f"Reference {match.group(0)} at {format_path(path)} does not point to a token"
                    )
    return warnings


def collect_stats(document: TokenDocument) -> TokenStats:
    stats = TokenStats(sets=len(document.sets))
    for group in document.sets.values():
        for _, token in group.iter_tokens():
            stats.total += 1
            bucket = STAT_TYPES.get(token.type)
            if bucket:
                setattr(stats, bucket, getattr(stats, bucket) + 1)
    return stats


def validate_document(
    document: TokenDocument,
    required_sets: Sequence[str] = ("global",),
) -> ValidationReport:
    """
    Validate a whole token document.

    Args:
        document: Parsed token document
        required_sets: Set names that must be present

    Returns:
        ValidationReport with errors, warnings and statistics
    """
    report = ValidationReport()

    missing = [name for name in required_sets if name not in document.sets]
    if missing:
        report.errors.append(f"Missing required token sets: {', '.join(missing)}")
        return report

    for set_name, group in document.sets.items():
        for path, token in group.iter_tokens((set_name,)):
            report.errors.extend(validate_token(token, format_path(path)))

    report.warnings.extend(validate_references(document))
    report.stats = collect_stats(document)
    return report


__all__ = [
    "TokenStats",
    "ValidationReport",
    "is_valid_color",
    "is_valid_number",
    "validate_token",
    "validate_references",
    "collect_stats",
    "validate_document",
]
