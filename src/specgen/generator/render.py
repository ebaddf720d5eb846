"""Jinja2 environment for the packaged code templates.

Templates live in ``generator/templates/`` and come in fixed pairs, one per
target language (``*.ts.j2`` / ``*.js.j2``), plus the shared header. They
are loaded from the package, never from user paths.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""


@lru_cache(maxsize=1)
def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for code templates.

    Autoescape is disabled for generated source files. Block trimming and
    lstrip are enabled so block tags on their own lines leave no blank
    lines behind. ``StrictUndefined`` turns a missing context key into an
    error instead of silently emitting nothing.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(
            disabled_extensions=("ts.j2", "js.j2"),
            default_for_string=False,
            default=False,
        ),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render(template_name: str, **context: Any) -> str:
    """Render a packaged template with *context*."""
    return _create_jinja_env().get_template(template_name).render(**context)
