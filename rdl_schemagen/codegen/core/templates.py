"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the filters the generators share.
"""

import json
from typing import Dict, Any, Optional, TextIO
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    select_autoescape,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def quote_string(value: Any) -> str:
    """
    Render a value as a double-quoted string literal.

    Backslashes, double quotes and control characters are escaped; the
    result is valid in both Java and C-family sources.
    """
    return json.dumps(str(value), ensure_ascii=False)


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["quote"] = quote_string

    def stream_template(
        self, template_name: str, context: Dict[str, Any], writer: TextIO
    ) -> None:
        """
        Render a template straight into a writable text sink.

        Sink write failures propagate unchanged.
        """
        try:
            template = self._env.get_template(template_name)
            chunks = template.generate(**context)
            for chunk in chunks:
                writer.write(chunk)
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
