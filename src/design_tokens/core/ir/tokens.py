"""
Token tree IR types.

A token document is a mapping of set name to a tree whose nodes are either
``Token`` leaves or ``TokenGroup`` containers. The raw JSON distinguishes the
two only by the presence of a ``value`` key; ``parse_node`` is the one place
that inspects that, everything downstream works with the tagged types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

TokenPath = tuple[str, ...]

# Keys Tokens Studio / DTCG use for leaf values
VALUE_KEYS = ("value", "$value")
TYPE_KEYS = ("type", "$type")


# =============================================================================
# Nodes
# =============================================================================


class Token(BaseModel):
    """
    A single design value.

    Example:
        Token(value="#FFFFFF", type="color")
        Token(value="#4F46E5", type="color", raw_value="{color.primary.500}")
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["token"] = "token"
    value: Any = Field(description="Literal value or reference string")
    type: str = Field(default="", description="color, spacing, borderRadius, fontSizes, ...")
    raw_value: Any | None = Field(
        default=None,
        alias="rawValue",
        description="Pre-resolution value, kept for traceability",
    )
    description: str | None = Field(default=None)

    def to_data(self) -> dict[str, Any]:
        """Serialize to the Tokens Studio leaf layout."""
        data: dict[str, Any] = {"value": self.value, "type": self.type}
        if self.raw_value is not None:
            data["rawValue"] = self.raw_value
        if self.description:
            data["description"] = self.description
        return data


class TokenGroup(BaseModel):
    """
    An ordered container of named tokens and sub-groups.

    Example:
        TokenGroup(children={
            "white": Token(value="#FFFFFF", type="color"),
            "primary": TokenGroup(children={"500": Token(value="#4F46E5", type="color")}),
        })
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    children: dict[str, TokenNode] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def get(self, path: Sequence[str]) -> TokenNode | None:
        """Follow ``path`` from this group; None if any segment is missing."""
        node: TokenNode = self
        for segment in path:
            if not isinstance(node, TokenGroup):
                return None
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def group(self, key: str) -> TokenGroup:
        """Return the named child group, or an empty group."""
        child = self.children.get(key)
        if isinstance(child, TokenGroup):
            return child
        return TokenGroup()

    def iter_tokens(self, prefix: TokenPath = ()) -> Iterator[tuple[TokenPath, Token]]:
        """Depth-first walk over all leaves in input order."""
        for key, child in self.children.items():
            path = (*prefix, key)
            if isinstance(child, Token):
                yield path, child
            else:
                yield from child.iter_tokens(path)

    def count_tokens(self) -> int:
        return sum(1 for _ in self.iter_tokens())

    def to_data(self) -> dict[str, Any]:
        return {key: child.to_data() for key, child in self.children.items()}


TokenNode = Annotated[Token | TokenGroup, Field(discriminator="kind")]

TokenGroup.model_rebuild()


# =============================================================================
# Document
# =============================================================================


class TokenDocument(BaseModel):
    """
    A whole Tokens Studio export.

    ``sets`` holds the token sets in file order. Top-level ``$``-prefixed
    entries (``$themes``, ``$metadata``) are kept verbatim in ``metadata``.
    """

    model_config = ConfigDict(frozen=True)

    sets: dict[str, TokenGroup] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def set_order(self) -> list[str]:
        """
        Default layering order.

        Uses ``$metadata.tokenSetOrder`` when the export carries one,
        otherwise the order the sets appear in the file.
        """
        declared = self.metadata.get("$metadata", {})
        order = declared.get("tokenSetOrder") if isinstance(declared, dict) else None
        if isinstance(order, list) and order:
            return [name for name in order if name in self.sets]
        return list(self.sets)

    def get_set(self, name: str) -> TokenGroup | None:
        return self.sets.get(name)

    def count_tokens(self) -> int:
        return sum(group.count_tokens() for group in self.sets.values())

    def to_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {name: group.to_data() for name, group in self.sets.items()}
        data.update(self.metadata)
        return data

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> TokenDocument:
        sets: dict[str, TokenGroup] = {}
        metadata: dict[str, Any] = {}
        for key, value in data.items():
            if key.startswith("$"):
                metadata[key] = value
            elif isinstance(value, dict):
                sets[key] = parse_group(value)
            else:
                logger.debug("Skipping non-object top-level entry %r", key)
        return cls(sets=sets, metadata=metadata)


# =============================================================================
# Parsing
# =============================================================================


def is_token_data(data: Any) -> bool:
    """True for a raw JSON object that is a token leaf rather than a group."""
    return isinstance(data, dict) and any(key in data for key in VALUE_KEYS)


def _first(data: dict[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


def parse_token(data: dict[str, Any], inherited_type: str | None = None) -> Token:
    token_type = _first(data, TYPE_KEYS, inherited_type) or ""
    description = _first(data, ("description", "$description"))
    return Token(
        value=_first(data, VALUE_KEYS),
        type=str(token_type),
        raw_value=data.get("rawValue"),
        description=description if isinstance(description, str) else None,
    )


def parse_group(data: dict[str, Any], inherited_type: str | None = None) -> TokenGroup:
    """
    Parse a raw JSON object into a TokenGroup.

    A group-level ``$type`` is inherited by descendant tokens that do not
    declare their own type.
    """
    group_type = data.get("$type", inherited_type)
    children: dict[str, TokenNode] = {}
    for key, value in data.items():
        if key.startswith("$"):
            continue
        if not isinstance(value, dict):
            logger.debug("Skipping non-object entry %r inside a group", key)
            continue
        children[key] = parse_node(value, group_type)
    return TokenGroup(children=children)


def parse_node(data: dict[str, Any], inherited_type: str | None = None) -> TokenNode:
    if is_token_data(data):
        return parse_token(data, inherited_type)
    return parse_group(data, inherited_type)


def format_path(path: Sequence[str]) -> str:
    return ".".join(path)


__all__ = [
    "TokenPath",
    "Token",
    "TokenGroup",
    "TokenNode",
    "TokenDocument",
    "is_token_data",
    "parse_token",
    "parse_group",
    "parse_node",
    "format_path",
]
