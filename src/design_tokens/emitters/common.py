"""
Formatting helpers shared by the platform emitters.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

from design_tokens.core.ir import Token, TokenGroup, format_path
from design_tokens.core.resolver import contains_reference

GENERATED_NOTICE = "Generated by Design Tokens - DO NOT EDIT"

_HEX = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGB = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*(\d*\.?\d+)\s*)?\)$"
)
_NUMERIC = re.compile(r"^-?\d+(\.\d+)?$")
_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")


def timestamp() -> str:
    return datetime.now(UTC).isoformat()


def token_value(token: Token | None, fallback: Any = None) -> Any:
    """
    The token's value, or ``fallback`` when it is missing or still a reference.

    Unresolved references survive resolution in pass-through mode; emitters
    substitute a literal instead of printing ``{path}`` into generated code.
    """
    if token is None or token.value is None or contains_reference(token.value):
        return fallback
    return token.value


def lookup(group: TokenGroup, path: str) -> Token | None:
    node = group.get(path.split("."))
    return node if isinstance(node, Token) else None


def iter_leaves(group: TokenGroup) -> Iterator[tuple[str, Token]]:
    """``(dotted_path, token)`` pairs in input order."""
    for path, token in group.iter_tokens():
        yield format_path(path), token


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    return isinstance(value, str) and bool(_NUMERIC.match(value.strip()))


def with_unit(value: Any, unit: str = "px") -> str:
    """``4`` / ``"4"`` -> ``"4px"``; values that already carry a unit pass through."""
    if is_numeric(value):
        return f"{str(value).strip()}{unit}"
    return str(value)


def to_number(value: Any, default: float = 0.0) -> float:
    """Leading number of a dimension (``"16px"`` -> 16.0)."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    match = re.match(r"^\s*(-?\d+(?:\.\d+)?)", str(value))
    return float(match.group(1)) if match else default


def kebab(path: str) -> str:
    """``"background.elevated"`` -> ``"background-elevated"``."""
    return "-".join(part for part in _WORD_SPLIT.split(path) if part)


def camel(path: str) -> str:
    """``"text.primary"`` / ``"text-primary"`` -> ``"textPrimary"``."""
    parts = [part for part in _WORD_SPLIT.split(path) if part]
    if not parts:
        return ""
    return parts[0][0].lower() + parts[0][1:] + "".join(p[0].upper() + p[1:] for p in parts[1:])


def parse_color(value: Any) -> tuple[int, int, int, float] | None:
    """
    Parse ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA``, ``rgb()`` or ``rgba()``.

    Returns:
        (red, green, blue, alpha) or None if the value is not a color
    """
    if not isinstance(value, str):
        return None
    text = value.strip()

    hex_match = _HEX.match(text)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), alpha

    rgb_match = _RGB.match(text)
    if rgb_match:
        red, green, blue = (min(int(c), 255) for c in rgb_match.group(1, 2, 3))
        alpha = float(rgb_match.group(4)) if rgb_match.group(4) else 1.0
        return red, green, blue, min(alpha, 1.0)

    return None


__all__ = [
    "GENERATED_NOTICE",
    "timestamp",
    "token_value",
    "lookup",
    "iter_leaves",
    "is_numeric",
    "with_unit",
    "to_number",
    "kebab",
    "camel",
    "parse_color",
]
