"""
Platform emitters.

Each emitter is a pure renderer ``StandardTokens -> {filename: text}``.
Writing the files is left to the pipeline.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from design_tokens.core.errors import EmitterError
from design_tokens.core.ir import StandardTokens

from .css import render_css
from .flutter import render_flutter
from .tailwind import render_tailwind

Renderer = Callable[[StandardTokens], dict[str, str]]


@dataclass(frozen=True)
class Emitter:
    """
    A registered platform.

    Attributes:
        name: Platform name (used in CLI: --platform <name>)
        output: Key of the ``[output]`` manifest section it writes to
        render: Renderer function
        description: One-line summary for help text
    """

    name: str
    output: str
    render: Renderer
    description: str


EMITTERS: dict[str, Emitter] = {
    "flutter": Emitter("flutter", "flutter", render_flutter, "Dart theme and token classes"),
    "tailwind": Emitter("tailwind", "tailwind", render_tailwind, "Tailwind config module"),
    "css": Emitter("css", "css", render_css, "CSS custom properties"),
}


def get_emitter(name: str) -> Emitter:
    """
    Get an emitter by platform name.

    Raises:
        EmitterError: If the platform is not registered
    """
    if name not in EMITTERS:
        raise EmitterError(f"Unknown platform '{name}'. Available platforms: {list_emitters()}")
    return EMITTERS[name]


def list_emitters() -> list[str]:
    return list(EMITTERS)


__all__ = [
    "Emitter",
    "EMITTERS",
    "get_emitter",
    "list_emitters",
    "render_css",
    "render_flutter",
    "render_tailwind",
]
