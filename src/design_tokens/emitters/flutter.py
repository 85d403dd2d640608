"""
Flutter emitter.

Renders ``design_tokens.dart``: primitive color constants, light and dark
``ColorScheme``s, a ``DesignTokens`` accessor class and ``ThemeData``
builders. ColorScheme slots and theme builders refer to named palette
constants (``primary500``, ``neutral900``, ...); when the token source does
not define one, a fixed fallback literal is emitted so the file still
compiles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from design_tokens.core.ir import StandardTokens, Token

from .common import (
    GENERATED_NOTICE,
    camel,
    iter_leaves,
    parse_color,
    timestamp,
    to_number,
    token_value,
)
from .templating import render_template

logger = logging.getLogger(__name__)

OUTPUT_FILE = "design_tokens.dart"

# Fallbacks for palette constants referenced by schemes and themes
FALLBACK_COLORS: dict[str, str] = {
    "white": "#FFFFFF",
    "black": "#000000",
    "primary100": "#E0E7FF",
    "primary300": "#A5B4FC",
    "primary400": "#818CF8",
    "primary500": "#6366F1",
    "primary600": "#4F46E5",
    "primary700": "#4338CA",
    "primary900": "#312E81",
    "neutral50": "#F9FAFB",
    "neutral100": "#F3F4F6",
    "neutral300": "#D1D5DB",
    "neutral400": "#9CA3AF",
    "neutral600": "#4B5563",
    "neutral700": "#374151",
    "neutral800": "#1F2937",
    "neutral900": "#111827",
}

# ColorScheme slot -> palette constant name, or a literal color
LIGHT_SCHEME: list[tuple[str, str]] = [
    ("primary", "primary500"),
    ("onPrimary", "white"),
    ("primaryContainer", "primary100"),
    ("onPrimaryContainer", "primary900"),
    ("secondary", "primary400"),
    ("onSecondary", "white"),
    ("secondaryContainer", "primary100"),
    ("onSecondaryContainer", "primary900"),
    ("error", "#DC2626"),
    ("onError", "white"),
    ("errorContainer", "#FFEBEE"),
    ("onErrorContainer", "#7F1D1D"),
    ("surface", "white"),
    ("onSurface", "neutral900"),
    ("surfaceContainerHighest", "neutral100"),
    ("onSurfaceVariant", "neutral700"),
    ("outline", "neutral400"),
    ("outlineVariant", "neutral300"),
    ("shadow", "black"),
    ("scrim", "black"),
    ("inverseSurface", "neutral900"),
    ("onInverseSurface", "white"),
    ("inversePrimary", "primary300"),
]

DARK_SCHEME: list[tuple[str, str]] = [
    ("primary", "primary400"),
    ("onPrimary", "primary900"),
    ("primaryContainer", "primary700"),
    ("onPrimaryContainer", "primary100"),
    ("secondary", "primary300"),
    ("onSecondary", "primary900"),
    ("secondaryContainer", "primary700"),
    ("onSecondaryContainer", "primary100"),
    ("error", "#EF4444"),
    ("onError", "white"),
    ("errorContainer", "#991B1B"),
    ("onErrorContainer", "#FECACA"),
    ("surface", "neutral900"),
    ("onSurface", "neutral100"),
    ("surfaceContainerHighest", "neutral800"),
    ("onSurfaceVariant", "neutral300"),
    ("outline", "neutral600"),
    ("outlineVariant", "neutral700"),
    ("shadow", "black"),
    ("scrim", "black"),
    ("inverseSurface", "neutral100"),
    ("onInverseSurface", "neutral900"),
    ("inversePrimary", "primary600"),
]

# Semantic spacing aliases -> numeric spacing key
SPACING_ALIASES = [("xs", "1"), ("sm", "2"), ("md", "4"), ("lg", "6"), ("xl", "8")]

DEFAULT_COLOR = "#000000"


def dart_color(value: Any, fallback: str = DEFAULT_COLOR) -> str:
    """``"#4f46e5"`` -> ``"Color(0xFF4F46E5)"``."""
    parsed = parse_color(value) or parse_color(fallback)
    if parsed is None:
        parsed = (0, 0, 0, 1.0)
    red, green, blue, alpha = parsed
    return f"Color(0x{round(alpha * 255):02X}{red:02X}{green:02X}{blue:02X})"


def dart_double(value: Any) -> str:
    number = to_number(value)
    if number.is_integer():
        return f"{int(number)}.0"
    return repr(number)


def dart_identifier(name: str, prefix: str = "t") -> str:
    ident = camel(name)
    if not ident:
        return prefix
    if ident[0].isdigit():
        return f"{prefix}{ident}"
    return ident


def _start_case(name: str) -> str:
    return " ".join(part.capitalize() for part in camel(name).replace("_", " ").split()) or name


@dataclass
class ColorConstant:
    name: str
    dart: str
    section: str | None = None


class FlutterEmitter:
    """Builds the template context for one StandardTokens instance."""

    def __init__(self, tokens: StandardTokens):
        self.tokens = tokens
        self.constants = self._color_constants()
        self.constant_names = {constant.name for constant in self.constants}
        self.spacing_keys = list(self.tokens.primitive.spacing.children)
        self.radius_keys = list(self.tokens.primitive.radius.children)

    def _color_constants(self) -> list[ColorConstant]:
        constants: list[ColorConstant] = []
        taken: set[str] = set()

        def add(path: str, token: Token, section: str | None = None) -> bool:
            name = dart_identifier(path, "c")
            if name in taken:
                logger.warning("Color %s maps to Dart constant %s, which is already defined; skipping", path, name)
                return False
            taken.add(name)
            constants.append(ColorConstant(name, dart_color(token_value(token)), section))
            return True

        for color_name, node in self.tokens.primitive.color.children.items():
            if isinstance(node, Token):
                add(color_name, node)
                continue
            section: str | None = f"{_start_case(color_name)} Colors"
            for shade, token in iter_leaves(node):
                if add(f"{color_name}.{shade}", token, section):
                    section = None
        return constants

    def color_ref(self, name: str, qualified: bool = False) -> str:
        """Constant reference if the palette defines ``name``, else a literal."""
        if name.startswith("#"):
            return dart_color(name)
        if name in self.constant_names:
            return f"AppColorSchemes.{name}" if qualified else name
        logger.debug("Palette constant %s not defined; using fallback", name)
        return dart_color(FALLBACK_COLORS.get(name, DEFAULT_COLOR))

    def spacing_ref(self, key: str, fallback: float) -> str:
        if key in self.spacing_keys:
            return f"DesignTokens.spacing.{dart_identifier('s' + key, 's')}"
        return dart_double(fallback)

    def radius_ref(self, key: str, fallback: float) -> str:
        if key in self.radius_keys:
            return f"DesignTokens.radius.{dart_identifier(key, 'r')}"
        return dart_double(fallback)

    def _scheme(self, slots: list[tuple[str, str]]) -> list[tuple[str, str]]:
        return [(slot, self.color_ref(name)) for slot, name in slots]

    def _spacing_getters(self) -> list[tuple[str, str]]:
        return [
            (dart_identifier("s" + key, "s"), dart_double(token_value(token, 0)))
            for key, token in self.tokens.primitive.spacing.children.items()
            if isinstance(token, Token)
        ]

    def _spacing_aliases(self) -> list[tuple[str, str]]:
        return [
            (alias, dart_identifier("s" + key, "s"))
            for alias, key in SPACING_ALIASES
            if key in self.spacing_keys
        ]

    def _radius_getters(self) -> list[tuple[str, str]]:
        return [
            (dart_identifier(key, "r"), dart_double(token_value(token, 0)))
            for key, token in self.tokens.primitive.radius.children.items()
            if isinstance(token, Token)
        ]

    def _primary_getters(self) -> list[tuple[str, str]]:
        wanted = [("primary", "primary500"), ("primaryLight", "primary400"), ("primaryDark", "primary600")]
        return [(getter, f"AppColorSchemes.{name}") for getter, name in wanted if name in self.constant_names]

    def _semantic_color_getters(self) -> list[tuple[str, str]]:
        taken = {getter for getter, _ in self._primary_getters()}
        getters: list[tuple[str, str]] = []
        semantic_colors = self.tokens.semantic_for("light").group("color")
        for path, token in iter_leaves(semantic_colors):
            value = token_value(token)
            if parse_color(value) is None:
                continue
            getter = dart_identifier(path, "c")
            if getter in taken:
                continue
            taken.add(getter)
            getters.append((getter, dart_color(value)))
        return getters

    def context(self) -> dict[str, Any]:
        return {
            "notice": GENERATED_NOTICE,
            "timestamp": timestamp(),
            "constants": self.constants,
            "light_scheme": self._scheme(LIGHT_SCHEME),
            "dark_scheme": self._scheme(DARK_SCHEME),
            "primary_getters": self._primary_getters(),
            "semantic_getters": self._semantic_color_getters(),
            "spacing_getters": self._spacing_getters(),
            "spacing_aliases": self._spacing_aliases(),
            "radius_getters": self._radius_getters(),
            "color_ref": self.color_ref,
            "button_radius": self.radius_ref("md", 8),
            "button_padding_x": self.spacing_ref("4", 16),
            "button_padding_y": self.spacing_ref("3", 12),
        }


def render_flutter(tokens: StandardTokens) -> dict[str, str]:
    """
    Render the Flutter artifacts.

    Returns:
        ``{"design_tokens.dart": source}``
    """
    emitter = FlutterEmitter(tokens)
    return {OUTPUT_FILE: render_template("design_tokens.dart.j2", **emitter.context())}


__all__ = [
    "OUTPUT_FILE",
    "FALLBACK_COLORS",
    "dart_color",
    "dart_double",
    "dart_identifier",
    "FlutterEmitter",
    "render_flutter",
]
