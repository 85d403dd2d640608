"""
Standard Shape projection.

Reshapes a resolved, layered token document into the fixed
primitive/semantic/component layout consumed by the emitters.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .ir import (
    DEFAULT_THEMES,
    PrimitiveTokens,
    StandardTokens,
    TokenDocument,
    TokenGroup,
    is_standard_shape,
)

logger = logging.getLogger(__name__)

GLOBAL_SET = "global"


def project_standard_shape(
    resolved: TokenDocument | StandardTokens | dict[str, Any],
    themes: Sequence[str] = DEFAULT_THEMES,
    global_set: str = GLOBAL_SET,
) -> StandardTokens:
    """
    Project resolved tokens into the Standard Shape.

    Primitive categories come from ``global_set``; each theme set contributes
    its ``semantic`` and ``component`` groups. Missing sets and categories
    become empty groups.

    Input that is already in the Standard Shape (a ``StandardTokens`` or its
    ``to_data()`` dict) is returned as-is, so projection is idempotent.

    Args:
        resolved: Resolved TokenDocument, raw document dict, or Standard Shape
        themes: Theme set names to extract
        global_set: Set holding primitive values

    Returns:
        StandardTokens with every category present
    """
    if isinstance(resolved, StandardTokens):
        return resolved
    if isinstance(resolved, dict):
        if is_standard_shape(resolved):
            return StandardTokens.from_data(resolved, themes=())
        resolved = TokenDocument.from_data(resolved)

    global_tokens = resolved.get_set(global_set)
    if global_tokens is None:
        logger.warning("No %r set in resolved tokens; primitives will be empty", global_set)
        primitive = PrimitiveTokens()
    else:
        primitive = PrimitiveTokens(
            color=global_tokens.group("color"),
            spacing=global_tokens.group("spacing"),
            radius=global_tokens.group("radius"),
            font_size=global_tokens.group("fontSize"),
        )

    semantic: dict[str, TokenGroup] = {}
    component: dict[str, TokenGroup] = {}
    for theme in themes:
        theme_tokens = resolved.get_set(theme)
        if theme_tokens is None:
            logger.debug("Theme set %r not present; using empty groups", theme)
            semantic[theme] = TokenGroup()
            component[theme] = TokenGroup()
            continue
        semantic[theme] = theme_tokens.group("semantic")
        component[theme] = theme_tokens.group("component")

    return StandardTokens(primitive=primitive, semantic=semantic, component=component)


__all__ = [
    "GLOBAL_SET",
    "project_standard_shape",
]
