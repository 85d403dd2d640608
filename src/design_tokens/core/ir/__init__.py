"""
Intermediate representation types for design tokens.

- tokens: Token / TokenGroup tree and the TokenDocument of named sets
- standard: the primitive/semantic/component Standard Shape
"""

from .standard import (
    DEFAULT_THEMES,
    PRIMITIVE_CATEGORIES,
    PrimitiveTokens,
    StandardTokens,
    is_standard_shape,
)
from .tokens import (
    Token,
    TokenDocument,
    TokenGroup,
    TokenNode,
    TokenPath,
    format_path,
    is_token_data,
    parse_group,
    parse_node,
    parse_token,
)

__all__ = [
    # Tokens
    "Token",
    "TokenGroup",
    "TokenNode",
    "TokenPath",
    "TokenDocument",
    "format_path",
    "is_token_data",
    "parse_group",
    "parse_node",
    "parse_token",
    # Standard Shape
    "DEFAULT_THEMES",
    "PRIMITIVE_CATEGORIES",
    "PrimitiveTokens",
    "StandardTokens",
    "is_standard_shape",
]
