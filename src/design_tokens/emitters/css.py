"""
CSS emitter.

Generates CSS custom properties from the Standard Shape: primitives and
light-theme semantic/component tokens on ``:root``, every other theme under
a ``[data-theme="<name>"]`` selector. A small ``tokens.js`` module exposes
the primitive values to JavaScript.
"""

from __future__ import annotations

import logging
from typing import Any

from design_tokens.core.ir import StandardTokens, Token, TokenGroup

from .common import GENERATED_NOTICE, iter_leaves, kebab, timestamp, token_value, with_unit
from .templating import render_template

logger = logging.getLogger(__name__)

VARIABLES_FILE = "variables.css"
MODULE_FILE = "tokens.js"

BASE_THEME = "light"

# Token types whose bare numbers are pixel dimensions
DIMENSION_TYPES = {
    "spacing",
    "sizing",
    "dimension",
    "borderRadius",
    "borderWidth",
    "fontSizes",
    "fontSize",
}

# Emitted for values that are still unresolved references
UNRESOLVED_VALUE = "initial"


def css_value(token: Token, dimension: bool = False) -> str | None:
    """
    CSS text for a token value.

    Returns:
        The value, ``initial`` for an unresolved reference, or None for
        composite values that have no single-property form
    """
    value = token_value(token, UNRESOLVED_VALUE)
    if isinstance(value, dict | list):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if dimension or token.type in DIMENSION_TYPES:
        return with_unit(value)
    return str(value)


def _primitive_lines(tokens: StandardTokens, indent: int) -> list[str]:
    prefix = " " * indent
    categories: list[tuple[str, TokenGroup, bool]] = [
        ("color", tokens.primitive.color, False),
        ("spacing", tokens.primitive.spacing, True),
        ("radius", tokens.primitive.radius, True),
        ("font-size", tokens.primitive.font_size, True),
    ]
    lines: list[str] = []
    for name, group, dimension in categories:
        for path, token in iter_leaves(group):
            value = css_value(token, dimension)
            if value is not None:
                lines.append(f"{prefix}--{name}-{kebab(path)}: {value};")
    return lines


def _theme_lines(tokens: StandardTokens, theme: str, indent: int) -> list[str]:
    prefix = " " * indent
    lines: list[str] = []
    for group in (tokens.semantic_for(theme), tokens.component_for(theme)):
        for path, token in iter_leaves(group):
            value = css_value(token)
            if value is None:
                logger.debug("Skipping composite token %s in theme %s", path, theme)
                continue
            lines.append(f"{prefix}--{kebab(path)}: {value};")
    return lines


def _variant_selector(theme: str) -> str:
    return f'[data-theme="{theme}"]'


def generate_variables_css(tokens: StandardTokens) -> str:
    """
    Generate the custom-property stylesheet.

    Returns:
        CSS string with :root and per-theme selectors
    """
    lines: list[str] = []

    # Header comment
    lines.append(f"/* {GENERATED_NOTICE} */")
    lines.append(f"/* Generated at: {timestamp()} */")
    lines.append("")

    lines.append(":root {")
    lines.extend(_primitive_lines(tokens, indent=2))
    lines.extend(_theme_lines(tokens, BASE_THEME, indent=2))
    lines.append("}")
    lines.append("")

    for theme in tokens.themes:
        if theme == BASE_THEME:
            continue
        lines.append(f"{_variant_selector(theme)} {{")
        lines.extend(_theme_lines(tokens, theme, indent=2))
        lines.append("}")
        lines.append("")

    return "\n".join(lines)


def _values(group: TokenGroup, dimension: bool) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, node in group.children.items():
        if isinstance(node, Token):
            result[key] = css_value(node, dimension)
        else:
            result[key] = _values(node, dimension)
    return result


def build_js_tokens(tokens: StandardTokens) -> dict[str, Any]:
    return {
        "colors": _values(tokens.primitive.color, False),
        "spacing": _values(tokens.primitive.spacing, True),
        "radius": _values(tokens.primitive.radius, True),
        "fontSize": _values(tokens.primitive.font_size, True),
    }


def render_css(tokens: StandardTokens) -> dict[str, str]:
    """
    Render the CSS artifacts.

    Returns:
        ``{"variables.css": stylesheet, "tokens.js": module}``
    """
    module = render_template(
        "css/tokens.js.j2",
        notice=GENERATED_NOTICE,
        tokens=build_js_tokens(tokens),
        themes=tokens.themes,
    )
    return {VARIABLES_FILE: generate_variables_css(tokens), MODULE_FILE: module}


__all__ = [
    "VARIABLES_FILE",
    "MODULE_FILE",
    "UNRESOLVED_VALUE",
    "css_value",
    "generate_variables_css",
    "build_js_tokens",
    "render_css",
]
