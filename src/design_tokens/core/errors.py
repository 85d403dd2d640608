"""
Error types for token loading, resolution, rendering and versioning.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokenError(Exception):
    """Base exception for all design-token errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context and (location := self.context.format()):
            return f"{location}\n{self.message}"
        return self.message


class ManifestError(TokenError):
    """
    Raised when tokens.toml cannot be read.

    Examples:
    - Invalid TOML syntax
    - Wrong value types (e.g. sets is not a list)
    """

    pass


class InputError(TokenError):
    """
    Raised when the token source cannot be loaded.

    Examples:
    - File not found
    - Invalid JSON
    - Top-level value is not an object
    """

    pass


class ReferenceResolutionError(TokenError):
    """Base class for `{path.to.token}` reference failures."""

    def __init__(
        self,
        message: str,
        reference: str,
        context: Optional["ErrorContext"] = None,
    ):
        self.reference = reference
        super().__init__(message, context)


class UnresolvedReferenceError(ReferenceResolutionError):
    """
    Raised when a reference cannot be followed to a literal.

    Examples:
    - Path does not exist in the active sets
    - Path addresses a group instead of a token
    - Chain longer than the configured maximum depth
    """

    pass


class CircularReferenceError(ReferenceResolutionError):
    """Raised when a reference chain loops back on itself (A -> B -> A)."""

    def __init__(
        self,
        message: str,
        reference: str,
        chain: list[str],
        context: Optional["ErrorContext"] = None,
    ):
        self.chain = chain
        super().__init__(message, reference, context)


class EmitterError(TokenError):
    """Raised for an unknown platform or a renderer that fails."""

    pass


class OutputError(TokenError):
    """Raised when a generated artifact cannot be written."""

    pass


class StateError(TokenError):
    """Raised when the version state file cannot be read or written."""

    pass


class VersionError(TokenError):
    """Raised for version strings that are not MAJOR.MINOR.PATCH."""

    pass


@dataclass
class ErrorContext:
    """
    Where in the token document an error occurred.

    Attributes:
        file: Path to the token source file
        token_path: Dotted path of the token being processed
        token_set: Name of the token set, if known
    """

    file: Path | None = None
    token_path: str | None = None
    token_set: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json: light:semantic.color.text"
        """
        parts: list[str] = []
        if self.file:
            parts.append(str(self.file))
        location = self.token_path or ""
        if self.token_set:
            location = f"{self.token_set}:{location}" if location else self.token_set
        if location:
            parts.append(location)
        return ": ".join(parts)


__all__ = [
    "TokenError",
    "ManifestError",
    "InputError",
    "ReferenceResolutionError",
    "UnresolvedReferenceError",
    "CircularReferenceError",
    "EmitterError",
    "OutputError",
    "StateError",
    "VersionError",
    "ErrorContext",
]
