"""Jinja environment for the side files written next to the dump chunks."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).with_name("templates")


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_template(name: str, **context: Any) -> str:
    """Render one of the packaged ``*.lua.j2`` templates."""
    return _environment().get_template(name).render(**context)


__all__ = ["render_template", "TEMPLATES_DIR"]
