"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with the
filters used by the wrapper templates. Engines are built once per
target language and shared read-only by all generation tasks.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)

from .errors import TemplateRenderError


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            templates: In-memory templates, used when no directory is given
        """
        self.template_dir = Path(template_dir) if template_dir else None
        self._env = self._build_environment(templates or {})

    def _build_environment(self, templates: Dict[str, str]) -> Environment:
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            loader = DictLoader(dict(templates))

        env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        env.filters["js_string"] = self._js_string_filter
        return env

    def preload(self, template_names: Iterable[str]) -> None:
        """Compile templates up front so missing files fail at startup."""
        for name in template_names:
            try:
                self._env.get_template(name)
            except TemplateError as e:
                raise TemplateRenderError(f"Failed to load template {name}: {e}")

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateRenderError: If the template is missing or the context
                lacks a value the template uses
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render template {template_name}: {e}",
                context.get("class_name"),
            ) from e

    def _js_string_filter(self, value: Any) -> str:
        return json.dumps(str(value))


def create_template_engine(
    template_dir: Optional[Path] = None, templates: Optional[Dict[str, str]] = None
) -> TemplateEngine:
    """Create a template engine for a template directory."""
    return TemplateEngine(template_dir, templates)
