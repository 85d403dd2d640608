"""Shared pytest fixtures for design-tokens tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from design_tokens.core.ir import TokenDocument
from design_tokens.core.manifest import ProjectManifest


def color(value: str) -> dict[str, str]:
    return {"value": value, "type": "color"}


@pytest.fixture
def sample_tokens() -> dict[str, Any]:
    """A small Tokens Studio export with global, light and dark sets."""
    return {
        "global": {
            "color": {
                "white": color("#FFFFFF"),
                "black": color("#000000"),
                "primary": {
                    "100": color("#E0E7FF"),
                    "500": color("#6366F1"),
                    "600": color("#4F46E5"),
                },
                "neutral": {
                    "50": color("#F9FAFB"),
                    "900": color("#111827"),
                },
            },
            "spacing": {
                "1": {"value": "4", "type": "spacing"},
                "2": {"value": "8", "type": "spacing"},
                "4": {"value": "16", "type": "spacing"},
            },
            "radius": {
                "md": {"value": "8", "type": "borderRadius"},
                "full": {"value": "9999", "type": "borderRadius"},
            },
            "fontSize": {
                "base": {"value": "16", "type": "fontSizes"},
            },
        },
        "light": {
            "semantic": {
                "color": {
                    "background": {
                        "base": color("{color.white}"),
                        "elevated": color("{color.neutral.50}"),
                    },
                    "text": {
                        "primary": color("{color.neutral.900}"),
                    },
                    "border": {
                        "focus": color("{color.primary.600}"),
                    },
                },
            },
            "component": {
                "button": {
                    "background": color("{color.primary.500}"),
                    "text": color("{semantic.color.background.base}"),
                },
            },
        },
        "dark": {
            "semantic": {
                "color": {
                    "background": {
                        "base": color("{color.neutral.900}"),
                    },
                    "text": {
                        "primary": color("{color.white}"),
                    },
                },
            },
            "component": {
                "button": {
                    "background": color("{color.primary.600}"),
                },
            },
        },
        "$themes": [],
        "$metadata": {"tokenSetOrder": ["global", "light", "dark"]},
    }


@pytest.fixture
def sample_document(sample_tokens: dict[str, Any]) -> TokenDocument:
    return TokenDocument.from_data(sample_tokens)


def write_tokens(path: Path, data: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def tokens_project(tmp_path: Path, sample_tokens: dict[str, Any]) -> Path:
    """A project directory using the default layout (no tokens.toml)."""
    write_tokens(tmp_path / "tokens" / "figma" / "tokens.json", sample_tokens)
    return tmp_path


@pytest.fixture
def project_manifest(tokens_project: Path) -> ProjectManifest:
    return ProjectManifest(project_root=tokens_project)
