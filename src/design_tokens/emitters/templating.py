"""
Jinja2 environment for code-generation templates.

Templates live in the ``templates/`` directory next to this module.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from design_tokens.core.errors import EmitterError

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


def _js_string_filter(value: Any) -> str:
    """Quote a value as a JavaScript string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def _js_json_filter(value: Any, indent: int | None = 2) -> str:
    """Serialize to JSON, keeping key order and non-ASCII text."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def create_jinja_env(templates_dir: Path | None = None) -> Environment:
    """Create and configure the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["js_string"] = _js_string_filter
    env.filters["js_json"] = _js_json_filter
    return env


_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get or create the shared Jinja2 environment."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render_template(template_name: str, **context: Any) -> str:
    """
    Render a template from the templates directory.

    Raises:
        EmitterError: If the template is missing or fails to render
    """
    try:
        return get_jinja_env().get_template(template_name).render(**context)
    except TemplateError as e:
        raise EmitterError(f"Failed to render template {template_name}: {e}") from e


__all__ = ["TEMPLATES_DIR", "create_jinja_env", "get_jinja_env", "render_template"]
