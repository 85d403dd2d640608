"""
Standard Shape IR types.

The platform-independent layout every emitter consumes::

    {
        "primitive": {"color": ..., "spacing": ..., "radius": ..., "fontSize": ...},
        "semantic": {"light": ..., "dark": ...},
        "component": {"light": ..., "dark": ...},
    }

Every category is always present; missing input becomes an empty group.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .tokens import TokenGroup, parse_group

PRIMITIVE_CATEGORIES = ("color", "spacing", "radius", "fontSize")
DEFAULT_THEMES = ("light", "dark")
STANDARD_KEYS = ("primitive", "semantic", "component")


class PrimitiveTokens(BaseModel):
    """Concrete, theme-independent values taken from the global set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    color: TokenGroup = Field(default_factory=TokenGroup)
    spacing: TokenGroup = Field(default_factory=TokenGroup)
    radius: TokenGroup = Field(default_factory=TokenGroup)
    font_size: TokenGroup = Field(default_factory=TokenGroup, alias="fontSize")

    def to_data(self) -> dict[str, Any]:
        return {
            "color": self.color.to_data(),
            "spacing": self.spacing.to_data(),
            "radius": self.radius.to_data(),
            "fontSize": self.font_size.to_data(),
        }


class StandardTokens(BaseModel):
    """Projected tokens: primitive values plus per-theme semantic/component trees."""

    model_config = ConfigDict(frozen=True)

    primitive: PrimitiveTokens = Field(default_factory=PrimitiveTokens)
    semantic: dict[str, TokenGroup] = Field(default_factory=dict)
    component: dict[str, TokenGroup] = Field(default_factory=dict)

    @property
    def themes(self) -> list[str]:
        return list(dict.fromkeys([*self.semantic, *self.component]))

    def semantic_for(self, theme: str) -> TokenGroup:
        return self.semantic.get(theme) or TokenGroup()

    def component_for(self, theme: str) -> TokenGroup:
        return self.component.get(theme) or TokenGroup()

    def to_data(self) -> dict[str, Any]:
        return {
            "primitive": self.primitive.to_data(),
            "semantic": {theme: group.to_data() for theme, group in self.semantic.items()},
            "component": {theme: group.to_data() for theme, group in self.component.items()},
        }

    @classmethod
    def from_data(
        cls,
        data: dict[str, Any],
        themes: tuple[str, ...] | list[str] = DEFAULT_THEMES,
    ) -> StandardTokens:
        """Rebuild from ``to_data()`` output (e.g. transformed/tokens.json)."""
        primitive_data = data.get("primitive") or {}
        primitive = PrimitiveTokens(
            color=parse_group(primitive_data.get("color") or {}),
            spacing=parse_group(primitive_data.get("spacing") or {}),
            radius=parse_group(primitive_data.get("radius") or {}),
            font_size=parse_group(primitive_data.get("fontSize") or {}),
        )
        semantic_data = data.get("semantic") or {}
        component_data = data.get("component") or {}
        theme_names = list(dict.fromkeys([*themes, *semantic_data, *component_data]))
        return cls(
            primitive=primitive,
            semantic={t: parse_group(semantic_data.get(t) or {}) for t in theme_names},
            component={t: parse_group(component_data.get(t) or {}) for t in theme_names},
        )


def is_standard_shape(data: Any) -> bool:
    """True when ``data`` is already laid out as primitive/semantic/component."""
    return (
        isinstance(data, dict)
        and bool(data)
        and set(data) <= set(STANDARD_KEYS)
        and "primitive" in data
    )


__all__ = [
    "PRIMITIVE_CATEGORIES",
    "DEFAULT_THEMES",
    "PrimitiveTokens",
    "StandardTokens",
    "is_standard_shape",
]
