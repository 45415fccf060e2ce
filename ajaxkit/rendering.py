"""
Template Renderer

Renders the javascript snippets shipped in ``ajaxkit/templates`` with a
Jinja2 environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemBytecodeCache, FileSystemLoader, select_autoescape

TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Render templates by name, e.g. ``plugins/ready.js``."""

    def __init__(self, template_dir: str | Path = TEMPLATE_DIR, cache_dir: str | None = None):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        if cache_dir:
            self.set_cache_dir(cache_dir)

    def set_cache_dir(self, cache_dir: str | Path) -> None:
        """Cache compiled templates in ``cache_dir``."""
        Path(cache_dir).mkdir(parents=True, exist_ok=True)
        self.env.bytecode_cache = FileSystemBytecodeCache(str(cache_dir))

    def render(self, template_name: str, variables: dict[str, Any] | None = None) -> str:
        template = self.env.get_template(template_name)
        return template.render(**(variables or {}))
