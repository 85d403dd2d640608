"""
Token reference resolution.

Replaces ``{path.to.token}`` references with the value found at that path.
Token sets are layered through an explicit overlay list: set ``sets[i]`` is
resolved against the merge of ``sets[0..i]``, later sets shadowing earlier
ones at the same path. With ``["global", "light", "dark"]`` this lets theme
sets alias the shared global palette while each theme's own keys win.

Unresolvable and circular references are either raised or passed through
(value and rawValue keep the reference string), depending on
``ResolveOptions.throw_on_unresolved``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .errors import (
    CircularReferenceError,
    ErrorContext,
    ReferenceResolutionError,
    UnresolvedReferenceError,
)
from .ir import Token, TokenDocument, TokenGroup, TokenNode, format_path

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"\{([^{}]+)\}")


@dataclass
class ResolveOptions:
    """
    Resolution behaviour.

    Attributes:
        throw_on_unresolved: Raise on the first missing or circular reference
        preserve_raw_value: Keep the original reference in ``rawValue``
        max_depth: Longest reference chain followed before giving up
    """

    throw_on_unresolved: bool = False
    preserve_raw_value: bool = False
    max_depth: int = 32


@dataclass
class ResolutionIssue:
    """A reference left unresolved in pass-through mode."""

    token_set: str
    token_path: str
    error: ReferenceResolutionError

    @property
    def reference(self) -> str:
        return self.error.reference

    @property
    def is_cycle(self) -> bool:
        return isinstance(self.error, CircularReferenceError)

    def describe(self) -> str:
        return f"{self.token_set}:{self.token_path}: {self.error.message}"


@dataclass
class ResolutionResult:
    """Resolved document plus any references that were passed through."""

    document: TokenDocument
    issues: list[ResolutionIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


# =============================================================================
# Reference helpers
# =============================================================================


def is_reference(value: Any) -> bool:
    """True if ``value`` is exactly one ``{path}`` reference."""
    return isinstance(value, str) and REFERENCE_PATTERN.fullmatch(value.strip()) is not None


def contains_reference(value: Any) -> bool:
    """True if ``value`` holds a reference anywhere, including composite values."""
    if isinstance(value, str):
        return REFERENCE_PATTERN.search(value) is not None
    if isinstance(value, dict):
        return any(contains_reference(v) for v in value.values())
    if isinstance(value, list):
        return any(contains_reference(v) for v in value)
    return False


def reference_path(reference: str) -> list[str]:
    """``"{color.primary.500}"`` -> ``["color", "primary", "500"]``."""
    match = REFERENCE_PATTERN.fullmatch(reference.strip())
    inner = match.group(1) if match else reference
    return [segment.strip() for segment in inner.split(".")]


def _embed(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool | int | float):
        return json.dumps(value)
    return json.dumps(value, ensure_ascii=False)


# =============================================================================
# Layering
# =============================================================================


def merge_groups(base: TokenGroup, overlay: TokenGroup) -> TokenGroup:
    """
    Deep-merge two groups; ``overlay`` wins on collisions.

    Groups present in both are merged recursively. Any other collision
    (token over group, group over token, token over token) takes the
    overlay's node.
    """
    children: dict[str, TokenNode] = dict(base.children)
    for key, node in overlay.children.items():
        existing = children.get(key)
        if isinstance(existing, TokenGroup) and isinstance(node, TokenGroup):
            children[key] = merge_groups(existing, node)
        else:
            children[key] = node
    return TokenGroup(children=children)


def merge_sets(document: TokenDocument, overlays: Sequence[str]) -> TokenGroup:
    """
    Merge the named sets in order into one lookup scope.

    Sets missing from the document are skipped.
    """
    merged = TokenGroup()
    for name in overlays:
        group = document.get_set(name)
        if group is not None:
            merged = merge_groups(merged, group)
    return merged


# =============================================================================
# Resolution
# =============================================================================


class _ScopeResolver:
    """Resolves token values of one set against its layered scope."""

    def __init__(
        self,
        scope: TokenGroup,
        options: ResolveOptions,
        token_set: str = "",
    ):
        self.scope = scope
        self.options = options
        self.token_set = token_set

    def resolve_value(self, value: Any, chain: tuple[str, ...]) -> Any:
        if isinstance(value, str):
            match = REFERENCE_PATTERN.fullmatch(value.strip())
            if match:
                return self._follow(match.group(1).strip(), chain)
            if REFERENCE_PATTERN.search(value):
                return REFERENCE_PATTERN.sub(
                    lambda m: _embed(self._follow(m.group(1).strip(), chain)),
                    value,
                )
            return value
        if isinstance(value, dict):
            return {key: self.resolve_value(item, chain) for key, item in value.items()}
        if isinstance(value, list):
            return [self.resolve_value(item, chain) for item in value]
        return value

    def _follow(self, path: str, chain: tuple[str, ...]) -> Any:
        reference = "{" + path + "}"
        context = ErrorContext(token_path=chain[0] if chain else None, token_set=self.token_set)

        if path in chain:
            cycle = [*chain, path]
            raise CircularReferenceError(
                f"Circular reference {reference}: {' -> '.join(cycle)}",
                reference,
                cycle,
                context,
            )
        if len(chain) > self.options.max_depth:
            raise UnresolvedReferenceError(
                f"Reference {reference} exceeds the maximum depth of {self.options.max_depth}",
                reference,
                context,
            )

        node = self.scope.get(reference_path(reference))
        if node is None:
            raise UnresolvedReferenceError(
                f"Reference {reference} could not be resolved: path not found",
                reference,
                context,
            )
        if isinstance(node, TokenGroup):
            raise UnresolvedReferenceError(
                f"Reference {reference} points to a group, not a token",
                reference,
                context,
            )
        return self.resolve_value(node.value, (*chain, path))


class _SetResolver(_ScopeResolver):
    """Walks one token set and rebuilds it with resolved values."""

    def __init__(
        self,
        scope: TokenGroup,
        options: ResolveOptions,
        token_set: str,
        issues: list[ResolutionIssue],
    ):
        super().__init__(scope, options, token_set)
        self.issues = issues

    def resolve_group(self, group: TokenGroup, prefix: tuple[str, ...] = ()) -> TokenGroup:
        children: dict[str, TokenNode] = {}
        for key, node in group.children.items():
            path = (*prefix, key)
            if isinstance(node, Token):
                children[key] = self.resolve_token(node, path)
            else:
                children[key] = self.resolve_group(node, path)
        return TokenGroup(children=children)

    def resolve_token(self, token: Token, path: tuple[str, ...]) -> Token:
        if not contains_reference(token.value):
            return token

        token_path = format_path(path)
        try:
            resolved = self.resolve_value(token.value, (token_path,))
        except ReferenceResolutionError as e:
            if self.options.throw_on_unresolved:
                raise
            logger.warning("Unresolved reference in %s:%s: %s", self.token_set, token_path, e.message)
            self.issues.append(ResolutionIssue(self.token_set, token_path, e))
            return token.model_copy(update={"raw_value": token.value})

        raw_value = token.value if self.options.preserve_raw_value else None
        return token.model_copy(update={"value": resolved, "raw_value": raw_value})


def resolve_reference(
    scope: TokenGroup,
    reference: str,
    options: ResolveOptions | None = None,
) -> Any:
    """
    Resolve a single reference string against a scope.

    Always raises on failure; pass-through only applies to whole documents.
    """
    resolver = _ScopeResolver(scope, options or ResolveOptions())
    return resolver.resolve_value(reference, ())


def resolve_document(
    document: TokenDocument,
    sets: Sequence[str] | None = None,
    options: ResolveOptions | None = None,
) -> ResolutionResult:
    """
    Resolve every reference in the listed sets.

    Args:
        document: Parsed token document
        sets: Overlay order; defaults to the document's own set order
        options: Resolution options

    Returns:
        ResolutionResult whose document holds only the listed sets

    Raises:
        UnresolvedReferenceError: Missing path, with throw_on_unresolved
        CircularReferenceError: Reference cycle, with throw_on_unresolved
    """
    options = options or ResolveOptions()
    overlays = list(sets) if sets is not None else document.set_order()
    issues: list[ResolutionIssue] = []
    resolved_sets: dict[str, TokenGroup] = {}

    for index, name in enumerate(overlays):
        group = document.get_set(name)
        if group is None:
            logger.warning("Token set %r not found in document, skipping", name)
            continue
        scope = merge_sets(document, overlays[: index + 1])
        resolver = _SetResolver(scope, options, name, issues)
        resolved_sets[name] = resolver.resolve_group(group)

    if issues:
        logger.warning("%d reference(s) left unresolved", len(issues))

    return ResolutionResult(
        document=TokenDocument(sets=resolved_sets, metadata=document.metadata),
        issues=issues,
    )


__all__ = [
    "REFERENCE_PATTERN",
    "ResolveOptions",
    "ResolutionIssue",
    "ResolutionResult",
    "is_reference",
    "contains_reference",
    "reference_path",
    "merge_groups",
    "merge_sets",
    "resolve_reference",
    "resolve_document",
]
