"""
Tailwind CSS emitter.

Renders a configuration module (``index.js``) whose ``colors``, ``spacing``
and ``borderRadius`` can be dropped straight into ``tailwind.config.js``,
plus ``index.d.ts`` describing it.
"""

from __future__ import annotations

import logging
from typing import Any

from design_tokens.core.ir import StandardTokens, Token, TokenGroup

from .common import GENERATED_NOTICE, lookup, timestamp, token_value, with_unit
from .templating import render_template

logger = logging.getLogger(__name__)

INDEX_FILE = "index.js"
TYPES_FILE = "index.d.ts"

# Spacing alias -> numeric spacing key
SPACING_ALIASES = [
    ("xs", "1"),
    ("sm", "2"),
    ("md", "4"),
    ("lg", "6"),
    ("xl", "8"),
    ("2xl", "12"),
    ("3xl", "16"),
]

# (category group, token path, output name, fallback) read from the light theme
SEMANTIC_COLORS = [
    ("background", "base", "surface", "#FFFFFF"),
    ("background", "elevated", "surface-elevated", "#F8FAFC"),
    ("text", "primary", "text-primary", "#111827"),
    ("text", "secondary", "text-secondary", "#6B7280"),
    ("text", "disabled", "text-disabled", "#9CA3AF"),
    ("border", "default", "border-default", "#D1D5DB"),
    ("border", "focus", "border-focus", "#4F46E5"),
]

COLOR_FALLBACK = "transparent"
DIMENSION_FALLBACK = "0px"


def _color_values(group: TokenGroup) -> dict[str, Any]:
    colors: dict[str, Any] = {}
    for name, node in group.children.items():
        if isinstance(node, Token):
            colors[name] = token_value(node, COLOR_FALLBACK)
        else:
            colors[name] = _color_values(node)
    return colors


def build_colors(tokens: StandardTokens) -> dict[str, Any]:
    colors = _color_values(tokens.primitive.color)
    colors["transparent"] = "transparent"
    colors["current"] = "currentColor"
    return colors


def _dimensions(group: TokenGroup) -> dict[str, str]:
    return {
        key: with_unit(token_value(node, DIMENSION_FALLBACK))
        for key, node in group.children.items()
        if isinstance(node, Token)
    }


def build_spacing(tokens: StandardTokens) -> dict[str, str]:
    spacing = _dimensions(tokens.primitive.spacing)
    for alias, key in SPACING_ALIASES:
        if key in spacing:
            spacing[alias] = spacing[key]
    return spacing


def build_border_radius(tokens: StandardTokens) -> dict[str, str]:
    return _dimensions(tokens.primitive.radius)


def build_semantic_colors(tokens: StandardTokens) -> dict[str, str]:
    """
    Named surface, text and border colors from the light theme.

    A category only contributes when its group exists; within an existing
    group, missing or unresolved tokens fall back to a fixed literal.
    """
    light_colors = tokens.semantic_for("light").group("color")
    result: dict[str, str] = {}
    for category, key, name, fallback in SEMANTIC_COLORS:
        if category not in light_colors:
            continue
        result[name] = token_value(lookup(light_colors, f"{category}.{key}"), fallback)
    return result


def build_components(tokens: StandardTokens) -> dict[str, dict[str, Any]]:
    """Component tokens regrouped as ``{component: {theme: tokens}}``."""
    components: dict[str, dict[str, Any]] = {}
    for theme in tokens.themes:
        for name, node in tokens.component_for(theme).children.items():
            components.setdefault(name, {})[theme] = node.to_data()
    return components


def build_config(tokens: StandardTokens) -> dict[str, Any]:
    return {
        "colors": build_colors(tokens),
        "spacing": build_spacing(tokens),
        "borderRadius": build_border_radius(tokens),
        "semanticColors": build_semantic_colors(tokens),
        "components": build_components(tokens),
    }


def render_tailwind(tokens: StandardTokens) -> dict[str, str]:
    """
    Render the Tailwind artifacts.

    Returns:
        ``{"index.js": module, "index.d.ts": declarations}``
    """
    config = build_config(tokens)
    logger.debug(
        "Tailwind config: %d colors, %d spacing, %d radius",
        len(config["colors"]),
        len(config["spacing"]),
        len(config["borderRadius"]),
    )
    context = {"notice": GENERATED_NOTICE, "timestamp": timestamp(), **config}
    return {
        INDEX_FILE: render_template("tailwind/index.js.j2", **context),
        TYPES_FILE: render_template("tailwind/index.d.ts.j2", notice=GENERATED_NOTICE),
    }


__all__ = [
    "INDEX_FILE",
    "TYPES_FILE",
    "build_colors",
    "build_spacing",
    "build_border_radius",
    "build_semantic_colors",
    "build_components",
    "build_config",
    "render_tailwind",
]
